"""Core components of travelrule."""
from .exceptions import (
    TravelRuleError,
    ValidationError,
    SerializationError,
    TransportError,
    APIError,
    DecodingError,
)

__all__ = [
    'TravelRuleError',
    'ValidationError',
    'SerializationError',
    'TransportError',
    'APIError',
    'DecodingError',
]
