"""Request building, encoding and response decoding."""
from .request import (
    SecurityType,
    Operation,
    Request,
    RequestOption,
    encode_params,
    format_param,
    with_recv_window,
    with_header,
    with_headers,
)
from .request_builder import RequestBuilder
from .response_handler import ResponseHandler, read_field

__all__ = [
    'SecurityType',
    'Operation',
    'Request',
    'RequestOption',
    'encode_params',
    'format_param',
    'with_recv_window',
    'with_header',
    'with_headers',
    'RequestBuilder',
    'ResponseHandler',
    'read_field',
]
