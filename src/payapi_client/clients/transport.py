"""
HTTP transport for the PayApi client.

The client talks to the network only through a ``Transport``. A transport
returns every response whose status lies in the acceptance window (200-503)
so the client can classify it, and raises ``TransportError`` for anything
that never produced a classifiable response: connection failures, timeouts
and statuses outside the window.

Core Classes:
    - Transport: Abstract interface, implement it to plug in another HTTP stack
    - HttpxTransport: Default implementation on top of httpx.AsyncClient
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from ..config import REQUEST_TIMEOUT_S
from ..engine.exceptions import TransportError
from ..schemas.https import TransportResponse


logger = logging.getLogger(__name__)

ACCEPTED_STATUS_RANGE = (200, 503)


def is_accepted_status(status: int) -> bool:
    low, high = ACCEPTED_STATUS_RANGE
    return low <= status <= high


class Transport(ABC):
    """
    Abstract request/response function used by ``ApiClient``.

    Implementations must not raise for statuses 200-503 and must raise
    ``TransportError`` for network failures and statuses outside that window.
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: float = REQUEST_TIMEOUT_S,
    ) -> TransportResponse:
        """
        Send one HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT)
            url: Absolute request URL
            json: JSON body, omitted when None
            headers: Extra request headers
            params: Query parameters; None values are dropped
            timeout: Request timeout in seconds

        Returns:
            TransportResponse with the status and decoded body
        """
        ...

    async def aclose(self) -> None:
        """Release underlying resources. No-op by default."""
        return None


class HttpxTransport(Transport):
    """
    Transport backed by ``httpx.AsyncClient``.

    Usage:
        ```python
        async with HttpxTransport() as transport:
            response = await transport.request("GET", "https://input.payapi.io/...")
        ```
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, **kwargs):
        """
        Args:
            client: Optional preconfigured AsyncClient. When given, the caller
                keeps ownership and ``aclose`` leaves it open.
            **kwargs: Standard httpx.AsyncClient arguments used when no
                client is given.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(**kwargs)

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: float = REQUEST_TIMEOUT_S,
    ) -> TransportResponse:
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method,
                url,
                json=json,
                headers=headers,
                params=params or None,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {url} timed out after {timeout}s") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not is_accepted_status(response.status_code):
            raise TransportError(
                f"{method} {url} failed with status {response.status_code}"
            )

        return TransportResponse(status=response.status_code, data=_decode_body(response))


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
