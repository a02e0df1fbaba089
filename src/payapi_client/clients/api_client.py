"""
PayApi API Client

Orchestrates the authenticated request pipeline: validates arguments, guards
protected operations behind ``authenticate()``, signs payloads, sends the
request through a ``Transport`` and classifies the response.

Usage:
    ```python
    async with ApiClient({"apiKey": "...", "secret": "...", "password": "..."}) as client:
        await client.authenticate()
        result = await client.credit_check("010101-123N", 1200, "FI")
    ```
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

from ..config import REQUEST_TIMEOUT_S, ClientConfig, build_config, resolve_api_url
from ..engine import validators
from ..engine.responses import classify_response
from ..schemas.https import (
    ApiKeyCredentials,
    AuthenticationTokenClaim,
    ClientRequestHeader,
    CreditCheckRequest,
    InvoicePair,
    LoginClaims,
    LoginRequest,
    SignedDataRequest,
    TransportResponse,
)
from ..security.tokens import decode_token, encode_token
from .session import Session
from .transport import HttpxTransport, Transport


logger = logging.getLogger(__name__)

LOGIN_PATH = "/v1/api/auth/login"
FRAUD_CHECK_PATH = "/v1/api/authorized/fraud/check/{ip}"
CREDIT_CHECK_PATH = "/v1/api/authorized/creditcheck"
TUPAS_PATH = "/v1/api/authorized/signicat/{redirect_url}"
INVOICES_PATH = "/v1/api/authorized/invoices"
INVOICE_PATH = "/v1/api/authorized/invoices/{invoice_id}"
SECUREFORM_PATH = "/secureform/{public_id}"

SECUREFORM_FIELDS = (
    "order",
    "products",
    "shippingAddress",
    "consumer",
    "callbacks",
    "returnUrls",
)


def _encode_uri_component(value: str) -> str:
    # Same reserved set as JavaScript's encodeURIComponent.
    return quote(value, safe="!*'()")


class ApiClient:
    """
    Asynchronous client for the PayApi service.

    Each instance owns its configuration and its ``Session``; two clients
    never share a token. Operations that reach the network are coroutines,
    payload signing helpers are plain methods.

    Attributes:
        config: Validated ``ClientConfig``.
        session: Authentication state of this client.
        api_url: Base URL chosen from ``dev_url`` / ``is_prod``.
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any], None],
        *,
        transport: Optional[Transport] = None,
    ):
        """
        Args:
            config: ``ClientConfig`` or a mapping with apiKey, secret,
                password and optional isProd / devUrl.
            transport: Optional transport. Defaults to an ``HttpxTransport``
                owned, and closed, by this client.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        self.config = build_config(config)
        self.session = Session()
        self.api_url = resolve_api_url(self.config)
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    # =========================================================================
    # Request plumbing
    # =========================================================================

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        return await self._transport.request(
            method,
            self.api_url + path,
            json=json,
            headers=headers,
            params=params,
            timeout=REQUEST_TIMEOUT_S,
        )

    async def _call(self, method: str, path: str, **kwargs) -> Any:
        response = await self._send(method, path, **kwargs)
        return classify_response(response.status, response.data)

    def _bearer(self, token: str) -> Dict[str, str]:
        return ClientRequestHeader.bearer(token).to_wire()

    def _sign(self, payload: Mapping[str, Any]) -> str:
        # Merchant payloads are signed with the API key, not the login secret.
        return encode_token(payload, self.config.api_key)

    # =========================================================================
    # Authentication
    # =========================================================================

    def generate_access_token(self) -> str:
        """Sign the API key credentials with the merchant secret."""
        claims = LoginClaims(
            api_key=ApiKeyCredentials(key=self.config.api_key, password=self.config.password)
        )
        return encode_token(claims.to_wire(), self.config.secret)

    async def authenticate(self) -> Any:
        """
        Log in and store the issued bearer token in the session.

        Returns:
            The login response body.

        Raises:
            AuthError, ValidationError, UnexpectedStatusError: on a non-200 response.
            TransportError: on network failure or timeout.
        """
        body = LoginRequest(key=self.config.api_key, token=self.generate_access_token())
        logger.debug("Authenticating against %s", self.api_url)
        response = await self._send("POST", LOGIN_PATH, json=body.to_wire())

        if response.status == 200:
            token = response.data.get("token") if isinstance(response.data, dict) else None
            self.session.update(token)

        return classify_response(response.status, response.data)

    # =========================================================================
    # Checks
    # =========================================================================

    async def fraud_check(self, params: Mapping[str, Any]) -> Any:
        """
        Run a fraud check for the given parameters (``ip`` is mandatory).

        Not guarded by the authentication check: before ``authenticate()`` the
        request is still sent, with an empty ``authenticationToken`` claim.
        """
        validators.validate_fraud_check(params)
        body = dict(params)
        body["authenticationToken"] = AuthenticationTokenClaim(
            token=self.session.authentication_token
        ).to_wire()
        return await self._call("POST", FRAUD_CHECK_PATH.format(ip=params["ip"]), json=body)

    async def credit_check(
        self,
        ssn: str,
        amount: Union[int, float],
        country_code: str = "FI",
        consumer_number: int = 1,
    ) -> Any:
        validators.validate_credit_check(ssn, amount, country_code, consumer_number)
        token = self.session.require_token()
        body = CreditCheckRequest(
            ssn=ssn,
            amount=amount,
            authentication_token=AuthenticationTokenClaim(token=token),
            country_code=country_code,
            consumer_number=consumer_number,
        )
        return await self._call("POST", CREDIT_CHECK_PATH, json=body.to_wire())

    async def get_tupas_url(self, redirect_url: str, session_id: Optional[str] = None) -> Any:
        """Request the signed TUPAS verification URL that redirects to ``redirect_url``."""
        validators.validate_tupas_url(redirect_url, session_id)
        token = self.session.require_token()
        path = TUPAS_PATH.format(redirect_url=_encode_uri_component(redirect_url))
        return await self._call(
            "GET",
            path,
            headers=self._bearer(token),
            params={"sessionId": session_id},
        )

    # =========================================================================
    # Invoices
    # =========================================================================

    async def get_invoice(self, invoice_id: str) -> InvoicePair:
        validators.validate_invoice_id(invoice_id)
        token = self.session.require_token()
        data = await self._call(
            "GET",
            INVOICE_PATH.format(invoice_id=invoice_id),
            headers=self._bearer(token),
        )
        return InvoicePair.from_response(data)

    async def create_invoice(
        self,
        invoice: Mapping[str, Any],
        invoicing_client: Union[str, Mapping[str, Any]],
        is_finance: bool = False,
    ) -> InvoicePair:
        """
        Create an invoice. The invoice travels as a token signed with the API key.

        Args:
            invoice: Invoice fields. Not modified.
            invoicing_client: Existing client id or a full client object.
            is_finance: Create a finance invoice instead of a standard one.
        """
        validators.validate_invoice(invoice, invoicing_client)
        token = self.session.require_token()
        payload = {
            **invoice,
            "isFinanceType": is_finance,
            "invoicingClient": invoicing_client,
        }
        body = SignedDataRequest(data=self._sign(payload))
        data = await self._call(
            "POST",
            INVOICES_PATH,
            json=body.to_wire(),
            headers=self._bearer(token),
        )
        return InvoicePair.from_response(data)

    async def create_standard_invoice(
        self,
        invoice: Mapping[str, Any],
        invoicing_client: Union[str, Mapping[str, Any]],
    ) -> InvoicePair:
        return await self.create_invoice(invoice, invoicing_client, is_finance=False)

    async def create_finance_invoice(
        self,
        invoice: Mapping[str, Any],
        invoicing_client: Union[str, Mapping[str, Any]],
    ) -> InvoicePair:
        return await self.create_invoice(invoice, invoicing_client, is_finance=True)

    async def update_invoice(
        self,
        invoice_id: str,
        invoice: Mapping[str, Any],
        invoicing_client: Union[str, Mapping[str, Any]],
    ) -> InvoicePair:
        validators.validate_invoice_id(invoice_id)
        validators.validate_invoice(invoice, invoicing_client)
        token = self.session.require_token()
        payload = {**invoice, "invoicingClient": invoicing_client}
        body = SignedDataRequest(data=self._sign(payload))
        data = await self._call(
            "PUT",
            INVOICE_PATH.format(invoice_id=invoice_id),
            json=body.to_wire(),
            headers=self._bearer(token),
        )
        return InvoicePair.from_response(data)

    # =========================================================================
    # Secureform and merchant callbacks
    # =========================================================================

    def create_secureform_data_token(self, data: Mapping[str, Any]) -> str:
        """
        Sign the checkout data handed to the hosted secureform page.

        Only order, products, shippingAddress, consumer, callbacks and
        returnUrls are kept; absent or None fields are left out.
        """
        validators.validate_secureform_data(data)
        payload = {
            field: data[field]
            for field in SECUREFORM_FIELDS
            if data.get(field) is not None
        }
        return self._sign(payload)

    def get_secureform_url(self, public_id: str) -> str:
        validators.validate_public_id(public_id)
        return self.api_url + SECUREFORM_PATH.format(public_id=public_id)

    def decode_merchant_callback(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a callback payload the service signed with the API key.

        Raises:
            ValidationError: If ``token`` is not shaped like a JWT.
            TokenError: If the signature does not verify.
        """
        validators.validate_jwt_shape(token)
        return decode_token(token, self.config.api_key)
