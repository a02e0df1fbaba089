"""
Per-client authentication state.

A ``Session`` belongs to exactly one ``ApiClient``. It starts unauthenticated
and moves to authenticated when ``authenticate()`` stores a token. A later
authenticate replaces the token; nothing clears it.

The session is not synchronized. Concurrent authenticate calls on the same
client race and the last one to complete wins.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..engine.exceptions import AuthRequiredError


logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "You must do the authentication first"


@dataclass
class Session:
    authentication_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.authentication_token)

    def update(self, token: Optional[str]) -> None:
        """Store the token issued by a successful login."""
        self.authentication_token = token
        logger.debug("Session token %s", "refreshed" if token else "missing from login response")

    def require_token(self) -> str:
        """Return the current token or raise if the client never authenticated."""
        if not self.authentication_token:
            raise AuthRequiredError(AUTH_REQUIRED_MESSAGE)
        return self.authentication_token
