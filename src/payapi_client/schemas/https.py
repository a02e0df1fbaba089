"""
HTTP Request/Response Schema Models for the PayApi service

This module defines the Pydantic models exchanged with the service. The
authenticated flow consists of:
1. Client signs its API key credentials and POSTs them to the login endpoint
2. Service answers with a bearer token
3. POST endpoints embed the token in the body (``authenticationToken``)
4. GET endpoints send it in the Authorization header
5. Invoice endpoints carry their payload as a signed ``data`` token
"""

from typing import Any, Dict, Optional, Union

from pydantic import Field

from .bases import CanonicalModel


# ============================================================================
# Request Headers
# ============================================================================

class ClientRequestHeader(CanonicalModel):
    """HTTP request headers sent by client.

    Attributes:
        authorization: Optional bearer token for authenticated GET/PUT requests.
    """
    authorization: Optional[str] = Field(default=None, alias="Authorization")

    @classmethod
    def bearer(cls, token: Optional[str]) -> "ClientRequestHeader":
        return cls(authorization=f"Bearer {token}")


# ============================================================================
# Step 1: Login
# ============================================================================

class ApiKeyCredentials(CanonicalModel):
    key: str
    password: str


class LoginClaims(CanonicalModel):
    """Claims signed with the merchant secret to obtain a session token."""
    api_key: ApiKeyCredentials = Field(..., alias="apiKey")


class LoginRequest(CanonicalModel):
    """Body POSTed to the login endpoint.

    Attributes:
        key: Merchant API key.
        token: ``LoginClaims`` signed with the merchant secret.
    """
    key: str
    token: str


# ============================================================================
# Step 2: Authorized requests
# ============================================================================

class AuthenticationTokenClaim(CanonicalModel):
    """Session token embedded in POST bodies.

    ``token`` is None, and therefore omitted on the wire, before the client
    has authenticated.
    """
    token: Optional[str] = None


class CreditCheckRequest(CanonicalModel):
    ssn: str
    amount: Union[int, float]
    authentication_token: AuthenticationTokenClaim = Field(..., alias="authenticationToken")
    country_code: str = Field(..., alias="countryCode")
    consumer_number: int = Field(..., alias="consumerNumber")


class SignedDataRequest(CanonicalModel):
    """Body of invoice create/update requests."""
    data: str = Field(..., description="Signed invoice payload")


# ============================================================================
# Results
# ============================================================================

class InvoicePair(CanonicalModel):
    """Invoice returned by the service together with its invoicing client.

    Attributes:
        invoice: Full invoice body as returned by the service.
        invoicing_client: Client id or embedded client object, None if the
            service did not include one.
    """
    invoice: Any
    invoicing_client: Optional[Union[str, Dict[str, Any]]] = Field(None, alias="invoicingClient")

    @classmethod
    def from_response(cls, payload: Any) -> "InvoicePair":
        invoicing_client = None
        if isinstance(payload, dict):
            candidate = payload.get("invoicingClient")
            if isinstance(candidate, (str, dict)):
                invoicing_client = candidate
        return cls(invoice=payload, invoicing_client=invoicing_client)


class TransportResponse(CanonicalModel):
    """Status and decoded body handed back by a transport.

    Attributes:
        status: HTTP status code, always within the 200-503 window.
        data: Decoded JSON body, or the raw text when the body is not JSON.
    """
    status: int
    data: Any = None
