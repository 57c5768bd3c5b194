"""
Generic signed-request builder.

A builder accumulates the fields of one remote operation through chained
setters, assembles them into a :class:`Request` and hands it to a transport.
Subclasses only declare their operation, parameters and result decoding.
"""
import json
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote_plus

from ...exceptions import SerializationError, ValidationError
from ...logging import get_logger
from .request import Operation, Request, RequestOption
from .response_handler import ResponseHandler

if TYPE_CHECKING:
    from ..protocols import Transport

logger = get_logger('travelrule.request')


class RequestBuilder:
    """
    Base class for single-use request builders.

    Class attributes:
        OPERATION: HTTP method, endpoint and security type
        PARAMS: Every parameter name, in the order they are sent
        MANDATORY: Parameters that must be set before building
        QUESTIONNAIRE_PARAM: Parameter holding a structured sub-object
            serialized to JSON, or None
        QUOTE_QUESTIONNAIRE: Percent-encode the serialized sub-object
        TIMESTAMPED: Fill ``timestamp`` from the transport clock when unset
    """

    OPERATION: Operation
    PARAMS: Tuple[str, ...] = ()
    MANDATORY: Tuple[str, ...] = ()
    QUESTIONNAIRE_PARAM: Optional[str] = None
    QUOTE_QUESTIONNAIRE: bool = False
    TIMESTAMPED: bool = True

    def __init__(self, transport: 'Transport'):
        """
        Initialize builder.

        Args:
            transport: Collaborator that signs and sends requests
        """
        self._transport = transport
        self._fields: Dict[str, Any] = {}
        self._quote = self.QUOTE_QUESTIONNAIRE
        self._executed = False

    def _set(self, name: str, value: Any) -> 'RequestBuilder':
        """Store one field. ``None`` clears a previously set field."""
        if value is None:
            self._fields.pop(name, None)
        else:
            self._fields[name] = value
        return self

    def is_set(self, name: str) -> bool:
        """Check whether a field was explicitly provided."""
        return name in self._fields

    def quote_questionnaire(self, enabled: bool = True) -> 'RequestBuilder':
        """Choose whether the serialized questionnaire is percent-encoded."""
        self._quote = enabled
        return self

    def missing_fields(self) -> Tuple[str, ...]:
        """Mandatory fields that have not been set."""
        return tuple(
            name for name in self.MANDATORY
            if name not in self._fields
            and not (name == 'timestamp' and self.TIMESTAMPED)
        )

    def validate(self) -> None:
        """
        Raise if a mandatory field is missing.

        Raises:
            ValidationError: Naming the first missing field
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                f"{type(self).__name__}: missing mandatory field(s): {', '.join(missing)}",
                field=missing[0]
            )

    def serialize_questionnaire(self, value: Any) -> str:
        """
        Serialize a structured sub-object to its wire string.

        Raises:
            SerializationError: If the value cannot be encoded as JSON
        """
        if hasattr(value, 'to_dict'):
            value = value.to_dict()
        elif isinstance(value, Mapping):
            value = dict(value)
        try:
            encoded = json.dumps(value, separators=(',', ':'), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize {self.QUESTIONNAIRE_PARAM}: {e}") from e
        if self._quote:
            return quote_plus(encoded)
        return encoded

    def build_params(self) -> Dict[str, Any]:
        """
        Assemble the flat parameter set.

        Mandatory fields are always present; optional fields only when set,
        with their values unchanged.
        """
        self.validate()

        fields = dict(self._fields)
        if self.TIMESTAMPED and 'timestamp' not in fields:
            fields['timestamp'] = self._transport.timestamp()

        params: Dict[str, Any] = {}
        for name in self.PARAMS:
            if name not in fields:
                continue
            value = fields[name]
            if name == self.QUESTIONNAIRE_PARAM:
                value = self.serialize_questionnaire(value)
            params[name] = value
        return params

    def build_request(self, *options: RequestOption) -> Request:
        """Build the request for this operation, applying request options."""
        request = Request(self.OPERATION, params=self.build_params())
        for option in options:
            option(request)
        return request

    def decode(self, data: Any) -> Any:
        """Map decoded JSON onto the operation's result type."""
        raise NotImplementedError

    async def do(self, *options: RequestOption) -> Any:
        """
        Execute the operation once.

        Raises:
            ValidationError: Missing mandatory field, or builder already used
            SerializationError: Questionnaire could not be encoded
            TransportError: Network or HTTP failure, from the transport
            DecodingError: Response body does not match the result type
        """
        if self._executed:
            raise ValidationError(f"{type(self).__name__} has already been executed")

        request = self.build_request(*options)
        self._executed = True

        logger.debug(f"{request.method} {request.endpoint} params={list(request.params)}")
        body = await self._transport.call_api(request)
        return self.decode(ResponseHandler.parse_json(body))
