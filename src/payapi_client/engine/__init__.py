from .exceptions import (
    PayapiError,
    ConfigurationError,
    ValidationError,
    AuthRequiredError,
    HttpStatusError,
    AuthError,
    NotFoundError,
    UnexpectedStatusError,
    TokenError,
    InvalidTokenError,
    TokenExpiredError,
    TokenNotActiveError,
    TransportError,
)
from .responses import classify_response

__all__ = [
    "PayapiError",
    "ConfigurationError",
    "ValidationError",
    "AuthRequiredError",
    "HttpStatusError",
    "AuthError",
    "NotFoundError",
    "UnexpectedStatusError",
    "TokenError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenNotActiveError",
    "TransportError",
    "classify_response",
]
