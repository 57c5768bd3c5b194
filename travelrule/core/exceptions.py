"""
Exceptions for travel rule requests.

Every error is raised to the immediate caller; the request builders never
retry or suppress them.
"""
from typing import Optional, Any


class TravelRuleError(Exception):
    """Base exception for all travelrule errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ValidationError(TravelRuleError):
    """Raised when a mandatory field is missing before a request is built."""
    
    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


class SerializationError(TravelRuleError):
    """Raised when a structured parameter cannot be encoded to JSON."""
    pass


class TransportError(TravelRuleError):
    """Raised for network failures and non-2xx HTTP responses."""
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[bytes] = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (None for connection failures)
            body: Raw response body (if any)
            error_code: Exchange error code (if available)
        """
        self.status = status
        self.body = body
        super().__init__(message, error_code)


class APIError(TransportError):
    """
    Error reported by the exchange in a ``{"code": ..., "msg": ...}`` body.
    """
    
    def __init__(self, status: int, code: int, msg: str, body: Optional[bytes] = None) -> None:
        self.code = code
        self.msg = msg
        super().__init__(
            f"<APIError> status={status}, code={code}, msg={msg}",
            status=status,
            body=body,
            error_code=code
        )


class DecodingError(TravelRuleError):
    """Raised when a response body does not match the expected shape."""
    
    def __init__(self, message: str, body: Any = None) -> None:
        self.body = body
        super().__init__(message)
