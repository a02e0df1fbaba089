import pytest

from payapi_client.clients.session import AUTH_REQUIRED_MESSAGE, Session
from payapi_client.engine.exceptions import AuthRequiredError


def test_new_session_is_unauthenticated():
    session = Session()
    assert not session.is_authenticated
    with pytest.raises(AuthRequiredError) as exc_info:
        session.require_token()
    assert str(exc_info.value) == AUTH_REQUIRED_MESSAGE == "You must do the authentication first"


def test_update_authenticates_and_refreshes():
    session = Session()
    session.update("first")
    assert session.is_authenticated
    assert session.require_token() == "first"

    session.update("second")
    assert session.require_token() == "second"
