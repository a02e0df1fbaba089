import base64
import hashlib
import hmac
import json
import time

import pytest

from payapi_client.security import tokens
from payapi_client.engine.exceptions import (
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    TokenNotActiveError,
)


SECRET = "test-secret"


def test_encode_token_structure():
    """Token is header.claims.signature with an HS512 JWT header."""
    token = tokens.encode_token({"foo": "bar"}, SECRET)
    segments = token.split(".")
    assert len(segments) == 3
    assert all("=" not in segment for segment in segments)

    header = json.loads(tokens._b64decode(segments[0]))
    assert header == {"typ": "JWT", "alg": "HS512"}

    # HMAC-SHA512 digest is 64 bytes
    assert len(tokens._b64decode(segments[2])) == 64


def test_encode_token_matches_reference_hs512():
    """Signature is HMAC-SHA512 over the first two segments."""
    claims = {"apiKey": {"key": "k", "password": "p"}}
    token = tokens.encode_token(claims, SECRET)
    header_b64, claims_b64, signature_b64 = token.split(".")

    assert header_b64 == "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzUxMiJ9"
    assert json.loads(tokens._b64decode(claims_b64)) == claims

    expected = hmac.new(
        SECRET.encode(),
        f"{header_b64}.{claims_b64}".encode(),
        hashlib.sha512,
    ).digest()
    assert tokens._b64decode(signature_b64) == expected


def test_encode_token_is_deterministic():
    claims = {"order": {"id": 1}, "products": [{"name": "shoe"}]}
    assert tokens.encode_token(claims, SECRET) == tokens.encode_token(claims, SECRET)
    assert tokens.encode_token(claims, SECRET) != tokens.encode_token(claims, "other")


def test_decode_token_round_trip():
    """Decoding with the same secret returns the original claims."""
    claims = {
        "invoice": {"id": "abc1234", "amount": 12.5, "paid": False},
        "items": [1, 2, 3],
        "note": None,
        "name": "Åsa Öberg",
    }
    token = tokens.encode_token(claims, SECRET)
    assert tokens.decode_token(token, SECRET) == claims


def test_decode_token_wrong_secret():
    token = tokens.encode_token({"foo": "bar"}, SECRET)
    with pytest.raises(InvalidTokenError):
        tokens.decode_token(token, "wrong-secret")

    # Subclass of the public TokenError
    with pytest.raises(TokenError):
        tokens.decode_token(token, "wrong-secret")


def test_decode_token_tampered_claims():
    token = tokens.encode_token({"amount": 10}, SECRET)
    header_b64, _, signature_b64 = token.split(".")
    forged = tokens._b64encode(json.dumps({"amount": 10000}).encode())
    with pytest.raises(InvalidTokenError):
        tokens.decode_token(f"{header_b64}.{forged}.{signature_b64}", SECRET)


def test_decode_token_malformed():
    """Wrong segment count, garbage encoding and non-string input are rejected."""
    with pytest.raises(InvalidTokenError):
        tokens.decode_token("invalid_token", SECRET)
    with pytest.raises(InvalidTokenError):
        tokens.decode_token("a.b.c.d", SECRET)
    with pytest.raises(InvalidTokenError):
        tokens.decode_token("!!!.???.###", SECRET)
    with pytest.raises(InvalidTokenError):
        tokens.decode_token(None, SECRET)


def test_decode_token_rejects_other_algorithm():
    header = tokens._b64encode(json.dumps({"typ": "JWT", "alg": "none"}).encode())
    claims = tokens._b64encode(json.dumps({"foo": "bar"}).encode())
    with pytest.raises(InvalidTokenError):
        tokens.decode_token(f"{header}.{claims}.", SECRET)


def test_decode_token_without_verification():
    token = tokens.encode_token({"foo": "bar"}, SECRET)
    assert tokens.decode_token(token, "wrong-secret", verify=False) == {"foo": "bar"}


def test_token_expiration():
    """exp in the past raises, leeway widens the window."""
    now = int(time.time())
    token = tokens.encode_token({"exp": now - 5}, SECRET)
    with pytest.raises(TokenExpiredError):
        tokens.decode_token(token, SECRET)
    assert tokens.decode_token(token, SECRET, leeway=60)["exp"] == now - 5

    fresh = tokens.encode_token({"exp": now + 3600}, SECRET)
    assert tokens.decode_token(fresh, SECRET)["exp"] == now + 3600


def test_token_not_before():
    now = int(time.time())
    token = tokens.encode_token({"nbf": now + 3600}, SECRET)
    with pytest.raises(TokenNotActiveError):
        tokens.decode_token(token, SECRET)
    assert tokens.decode_token(token, SECRET, leeway=7200)["nbf"] == now + 3600


def test_b64_encode_decode():
    """Test base64url encoding/decoding without padding."""
    data = b"test_data"
    encoded = tokens._b64encode(data)
    assert encoded == base64.urlsafe_b64encode(data).rstrip(b"=").decode()
    assert tokens._b64decode(encoded) == data
