"""
Client module for the PayApi service.

Provides the asynchronous API client, its per-instance session state and the
pluggable HTTP transport.
"""

from .api_client import ApiClient
from .session import Session
from .transport import HttpxTransport, Transport

__all__ = ["ApiClient", "Session", "HttpxTransport", "Transport"]
