"""
Exception and Error Definitions Module

Defines the closed set of errors raised by the PayApi client. Callers match on
the class rather than parsing messages; messages that are part of the service
contract ("Unauthorized", "You must do the authentication first", ...) are kept
verbatim.

Exception Hierarchy:
    PayapiError (root)
    ├── ConfigurationError
    ├── ValidationError
    ├── AuthRequiredError
    ├── HttpStatusError
    │   ├── AuthError
    │   ├── NotFoundError
    │   └── UnexpectedStatusError
    ├── TokenError
    │   ├── InvalidTokenError
    │   ├── TokenExpiredError
    │   └── TokenNotActiveError
    └── TransportError
"""

from typing import Any, Optional


class PayapiError(Exception):
    """
    Root exception class for all client errors.

    Catch this to handle every failure raised by the library in one place.
    """
    pass


class ConfigurationError(PayapiError):
    """
    Raised at client construction when the configuration is missing or invalid.

    This includes scenarios such as:
    - Missing apiKey, secret or password
    - isProd given as something other than a boolean
    """
    pass


class ValidationError(PayapiError):
    """
    Raised when call arguments are invalid, or when the service rejects a
    request with a 4xx status that has no dedicated error class.

    Attributes:
        status_code: HTTP status when raised from a response, else None
        body: Raw response body when raised from a response, else None
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthRequiredError(PayapiError):
    """
    Raised when a protected operation is called before ``authenticate()``.

    No request is sent when this is raised.
    """
    pass


class HttpStatusError(PayapiError):
    """
    Base exception for HTTP statuses mapped to an error.

    Attributes:
        status_code: HTTP status returned by the service
        body: Raw response body
    """

    def __init__(self, message: str, *, status_code: int, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(HttpStatusError):
    """Raised for 401 Unauthorized and 403 Access denied responses."""
    pass


class NotFoundError(HttpStatusError):
    """Raised for 404 responses."""
    pass


class UnexpectedStatusError(HttpStatusError):
    """Raised for any status the classifier has no mapping for."""
    pass


class TokenError(PayapiError):
    """
    Base exception for signed token errors.

    Parent class for all token decoding and verification errors.
    """
    pass


class InvalidTokenError(TokenError):
    """
    Raised when a token is malformed or its signature does not verify.

    This includes scenarios such as:
    - Wrong number of segments
    - Corrupted base64 or JSON data
    - Unsupported signing algorithm
    - Signature produced with a different secret
    """
    pass


class TokenExpiredError(TokenError):
    """Raised when the ``exp`` claim of a token is in the past."""
    pass


class TokenNotActiveError(TokenError):
    """Raised when the ``nbf`` claim of a token is in the future."""
    pass


class TransportError(PayapiError):
    """
    Raised when the request never produced a classifiable response.

    This includes scenarios such as:
    - Connection failures and DNS errors
    - The 10 second request timeout
    - Status codes outside the 200-503 acceptance window
    """
    pass
