from __future__ import annotations

import hashlib
import time

from .exceptions import KeyFormatError


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha256d(data: bytes) -> bytes:
    """Double SHA-256, the checksum hash of Base58Check."""
    return sha256(sha256(data))


def sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def decode_hex_key(value: str, size: int, *, label: str = "key") -> bytes:
    """Decode hex key material and insist on exactly ``size`` bytes."""
    if not isinstance(value, str):
        raise KeyFormatError(f"{label} must be a hex string")
    try:
        raw = bytes.fromhex(value.strip())
    except ValueError as e:
        raise KeyFormatError(f"{label} isn't parsable as hex") from e
    if len(raw) != size:
        raise KeyFormatError(f"{label} must be {size} bytes, got {len(raw)}")
    return raw


def now_millis() -> int:
    return time.time_ns() // 1_000_000
