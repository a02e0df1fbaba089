from .tokens import encode_token, decode_token, ALGORITHM

__all__ = [
    "encode_token",
    "decode_token",
    "ALGORITHM",
]
