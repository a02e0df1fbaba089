"""
Public facade for the PayApi client package.

Re-exports the pieces integrators need so they can ``from payapi_client
import ...`` without navigating the package.
"""

from .clients import ApiClient, HttpxTransport, Session, Transport
from .config import (
    PRODUCTION_URL,
    STAGING_URL,
    ClientConfig,
    load_client_config,
    resolve_api_url,
)
from .engine.exceptions import (
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
from .engine.responses import classify_response
from .schemas import InvoicePair, TransportResponse
from .security import decode_token, encode_token

__all__ = [
    "ApiClient",
    "HttpxTransport",
    "Session",
    "Transport",
    "ClientConfig",
    "PRODUCTION_URL",
    "STAGING_URL",
    "load_client_config",
    "resolve_api_url",
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
    "InvoicePair",
    "TransportResponse",
    "encode_token",
    "decode_token",
]
