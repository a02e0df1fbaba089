import pytest

from payapi_client.engine.responses import classify_response
from payapi_client.engine.exceptions import (
    AuthError,
    HttpStatusError,
    NotFoundError,
    UnexpectedStatusError,
    ValidationError,
)


def test_success_returns_body_unchanged():
    body = {"token": "T", "nested": {"a": [1, 2]}}
    assert classify_response(200, body) is body
    assert classify_response(200, "plain text") == "plain text"
    assert classify_response(200, None) is None


@pytest.mark.parametrize(
    "status, error_cls, message",
    [
        (401, AuthError, "Unauthorized"),
        (403, AuthError, "Access denied"),
        (404, NotFoundError, "Resource not found"),
    ],
)
def test_mapped_statuses(status, error_cls, message):
    with pytest.raises(error_cls) as exc_info:
        classify_response(status, {"error": "ignored for this status"})
    assert str(exc_info.value) == message
    assert exc_info.value.status_code == status
    assert isinstance(exc_info.value, HttpStatusError)


def test_other_client_error_uses_error_field():
    with pytest.raises(ValidationError) as exc_info:
        classify_response(400, {"error": "Invalid ssn"})
    assert str(exc_info.value) == "Invalid ssn"
    assert exc_info.value.status_code == 400
    assert exc_info.value.body == {"error": "Invalid ssn"}


def test_other_client_error_falls_back_to_raw_body():
    with pytest.raises(ValidationError) as exc_info:
        classify_response(422, "Unprocessable consumer data")
    assert str(exc_info.value) == "Unprocessable consumer data"

    with pytest.raises(ValidationError) as exc_info:
        classify_response(409, {"message": "conflict"})
    assert str(exc_info.value) == str({"message": "conflict"})


def test_other_client_error_without_body_has_empty_message():
    with pytest.raises(ValidationError) as exc_info:
        classify_response(400, None)
    assert str(exc_info.value) == ""
    assert exc_info.value.body is None


@pytest.mark.parametrize("status", [201, 204, 302, 500, 502, 503])
def test_unmapped_statuses(status):
    with pytest.raises(UnexpectedStatusError) as exc_info:
        classify_response(status, {"error": "boom"})
    assert str(exc_info.value) == "Unexpected status code received."
    assert exc_info.value.status_code == status
