"""Response handler for API responses."""
import json
from typing import Any, Dict, List, Type, TypeVar

from ...exceptions import DecodingError

T = TypeVar('T')

_MISSING = object()


class ResponseHandler:
    """Turns raw response bodies into typed results."""
    
    @staticmethod
    def parse_json(body: bytes) -> Any:
        """Parses a JSON response body."""
        try:
            if isinstance(body, (bytes, bytearray)):
                body = body.decode('utf-8')
            return json.loads(body)
        except (UnicodeDecodeError, ValueError) as e:
            raise DecodingError(f"Invalid JSON response: {e}", body=body) from e
    
    @staticmethod
    def to_object(data: Any, model: Type[T]) -> T:
        """Maps a JSON object onto ``model`` via its ``from_dict``."""
        if not isinstance(data, dict):
            raise DecodingError(
                f"Expected a JSON object for {model.__name__}, got {type(data).__name__}",
                body=data
            )
        return model.from_dict(data)
    
    @staticmethod
    def to_list(data: Any, model: Type[T]) -> List[T]:
        """Maps a JSON array of objects onto a list of ``model``."""
        if not isinstance(data, list):
            raise DecodingError(
                f"Expected a JSON array of {model.__name__}, got {type(data).__name__}",
                body=data
            )
        return [ResponseHandler.to_object(item, model) for item in data]


def read_field(data: Dict[str, Any], key: str, kind: type, default: Any = None) -> Any:
    """
    Read one field of a decoded JSON object.
    
    Missing keys and ``null`` yield ``default``. A present value of the wrong
    JSON type raises :class:`DecodingError`. ``bool`` never passes as ``int``.
    
    Args:
        data: Decoded JSON object
        key: JSON key
        kind: Expected Python type (int, str, bool, float, dict or list)
        default: Value used when the key is absent or null
    """
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    
    if kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif kind is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    else:
        ok = isinstance(value, kind)
    
    if not ok:
        raise DecodingError(
            f"Field {key!r}: expected {kind.__name__}, got {type(value).__name__}",
            body=data
        )
    return value

