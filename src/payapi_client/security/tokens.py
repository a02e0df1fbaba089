import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Mapping

from ..engine.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    TokenNotActiveError,
)


ALGORITHM = "HS512"

# Key order matters: the header segment must be byte-identical across
# implementations for the same claims to produce the same token.
_HEADER = {"typ": "JWT", "alg": ALGORITHM}


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _json_segment(value: Mapping[str, Any]) -> str:
    raw = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return _b64encode(raw.encode("utf-8"))


def _sign(signing_input: str, secret: str) -> bytes:
    return hmac.new(
        key=secret.encode("utf-8"),
        msg=signing_input.encode("utf-8"),
        digestmod=hashlib.sha512,
    ).digest()


def encode_token(claims: Mapping[str, Any], secret: str) -> str:
    """
    Sign a claims object as an HS512 JWT.

    The output is deterministic for identical claims and secret: claims are
    serialized compactly in insertion order.

    Args:
        claims: JSON-serializable mapping.
        secret: Shared signing secret.

    Returns:
        ``header.claims.signature`` token string.
    """
    signing_input = f"{_json_segment(_HEADER)}.{_json_segment(claims)}"
    signature = _b64encode(_sign(signing_input, secret))
    return f"{signing_input}.{signature}"


def _load_segment(segment: str) -> Any:
    try:
        return json.loads(_b64decode(segment))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise InvalidTokenError("Invalid token encoding") from e


def decode_token(
    token: str,
    secret: str,
    *,
    leeway: int = 0,
    verify: bool = True,
) -> Dict[str, Any]:
    """
    Verify a token signature and return its claims.

    Args:
        token: Token string.
        secret: Secret the token was signed with.
        leeway: Allowed clock skew in seconds for ``exp`` / ``nbf``.
        verify: Skip signature and time checks when False.

    Returns:
        Decoded claims.

    Raises:
        InvalidTokenError: If the token is malformed or the signature mismatches.
        TokenExpiredError: If ``exp`` has passed.
        TokenNotActiveError: If ``nbf`` is still in the future.
    """
    if not isinstance(token, str):
        raise InvalidTokenError("Invalid token format")
    try:
        header_b64, claims_b64, signature_b64 = token.split(".")
    except ValueError:
        raise InvalidTokenError("Not enough or too many segments")

    header = _load_segment(header_b64)
    claims = _load_segment(claims_b64)
    if not isinstance(header, dict) or not isinstance(claims, dict):
        raise InvalidTokenError("Invalid token format")

    if not verify:
        return claims

    if header.get("alg") != ALGORITHM:
        raise InvalidTokenError(f"Unsupported algorithm: {header.get('alg')}")

    expected_sig = _sign(f"{header_b64}.{claims_b64}", secret)
    try:
        actual_sig = _b64decode(signature_b64)
    except (binascii.Error, ValueError) as e:
        raise InvalidTokenError("Invalid token encoding") from e

    if not hmac.compare_digest(expected_sig, actual_sig):
        raise InvalidTokenError("Signature verification failed")

    now = time.time()
    nbf = claims.get("nbf")
    if isinstance(nbf, (int, float)) and now + leeway < nbf:
        raise TokenNotActiveError("Token not yet active")
    exp = claims.get("exp")
    if isinstance(exp, (int, float)) and now > exp + leeway:
        raise TokenExpiredError("Token has expired")

    return claims
