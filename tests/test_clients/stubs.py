"""
In-memory transport used by the client tests.

Records every request and answers from a queue of canned responses, so tests
can assert on exactly what the client sent without touching the network.
"""

from typing import Any, Dict, List, Optional

from payapi_client.clients.transport import Transport
from payapi_client.schemas.https import TransportResponse


class StubTransport(Transport):

    def __init__(self, *responses: TransportResponse):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, status: int, data: Any = None) -> "StubTransport":
        self.responses.append(TransportResponse(status=status, data=data))
        return self

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: float = 10.0,
    ) -> TransportResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "json": json,
                "headers": headers,
                "params": params,
                "timeout": timeout,
            }
        )
        if not self.responses:
            return TransportResponse(status=200, data={})
        return self.responses.pop(0)

    async def aclose(self) -> None:
        self.closed = True

    @property
    def last(self) -> Dict[str, Any]:
        return self.calls[-1]
