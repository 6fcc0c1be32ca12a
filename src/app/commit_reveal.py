from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Final

SCHEME_ID: Final[str] = "hmac-sha256"
KEY_BYTES: Final[int] = 32


def generate_key(num_bytes: int = KEY_BYTES) -> bytes:
    if num_bytes < KEY_BYTES:
        raise ValueError(f"key must be at least {KEY_BYTES} bytes, got {num_bytes}")
    return secrets.token_bytes(num_bytes)


def compute_digest(key: bytes, move: str) -> str:
    return hmac.new(key, move.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_digest(expected_digest: str, key: bytes, move: str) -> bool:
    computed = compute_digest(key, move)
    return hmac.compare_digest(expected_digest.strip().lower().encode("utf-8"), computed.encode("ascii"))


def key_to_hex(key: bytes) -> str:
    return key.hex()


def key_from_hex(text: str) -> bytes:
    # bytes.fromhex raises ValueError on odd length or non-hex characters.
    return bytes.fromhex(text.strip())
