from .bases import CanonicalModel
from .https import (
    ClientRequestHeader,
    ApiKeyCredentials,
    LoginClaims,
    LoginRequest,
    AuthenticationTokenClaim,
    CreditCheckRequest,
    SignedDataRequest,
    InvoicePair,
    TransportResponse,
)

__all__ = [
    "CanonicalModel",
    "ClientRequestHeader",
    "ApiKeyCredentials",
    "LoginClaims",
    "LoginRequest",
    "AuthenticationTokenClaim",
    "CreditCheckRequest",
    "SignedDataRequest",
    "InvoicePair",
    "TransportResponse",
]
