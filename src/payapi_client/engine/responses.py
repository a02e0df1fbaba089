"""
Response classification.

Maps a transport status code and body onto either the body (success) or one
of the errors in :mod:`payapi_client.engine.exceptions`. The mapping is a pure
function of ``(status, body)``.
"""

from typing import Any

from .exceptions import (
    AuthError,
    NotFoundError,
    UnexpectedStatusError,
    ValidationError,
)


def _error_message(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    if isinstance(body, str):
        return body
    return str(body)


def classify_response(status: int, body: Any) -> Any:
    """
    Return ``body`` for a 200 response, raise the mapped error otherwise.

    Args:
        status: HTTP status code
        body: Decoded response body (JSON value or text)

    Returns:
        The body, unchanged.

    Raises:
        AuthError: 401 ("Unauthorized") or 403 ("Access denied")
        NotFoundError: 404
        ValidationError: any other 4xx, message taken from ``body["error"]``
            when present, else the raw body
        UnexpectedStatusError: everything else
    """
    if status == 200:
        return body
    if status == 401:
        raise AuthError("Unauthorized", status_code=status, body=body)
    if status == 403:
        raise AuthError("Access denied", status_code=status, body=body)
    if status == 404:
        raise NotFoundError("Resource not found", status_code=status, body=body)
    if 400 <= status < 500:
        raise ValidationError(_error_message(body), status_code=status, body=body)
    raise UnexpectedStatusError(
        "Unexpected status code received.", status_code=status, body=body
    )
