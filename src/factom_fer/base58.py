from __future__ import annotations

from .constants import CHECKSUM_SIZE
from .exceptions import AddressFormatError, ChecksumMismatch, LengthError
from .utils import sha256d

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {c: i for i, c in enumerate(ALPHABET)}


def b58encode(data: bytes) -> str:
    value = int.from_bytes(data, "big")
    encoded = ""
    while value > 0:
        value, mod = divmod(value, 58)
        encoded = ALPHABET[mod] + encoded
    # Leading zero bytes map to leading "1" characters.
    padding = len(data) - len(data.lstrip(b"\x00"))
    return ALPHABET[0] * padding + encoded


def b58decode(text: str) -> bytes:
    value = 0
    for ch in text:
        digit = _INDEX.get(ch)
        if digit is None:
            raise AddressFormatError(f"invalid base58 character {ch!r}")
        value = value * 58 + digit
    body = value.to_bytes((value.bit_length() + 7) // 8, "big") if value else b""
    padding = len(text) - len(text.lstrip(ALPHABET[0]))
    return b"\x00" * padding + body


def checksum(payload: bytes) -> bytes:
    return sha256d(payload)[:CHECKSUM_SIZE]


def check_encode(payload: bytes) -> str:
    """Base58Check: ``payload ++ first4(sha256d(payload))``."""
    return b58encode(payload + checksum(payload))


def check_decode(text: str) -> bytes:
    """Reverse :func:`check_encode`, returning the payload without checksum."""
    raw = b58decode(text)
    if len(raw) <= CHECKSUM_SIZE:
        raise LengthError(f"decoded length {len(raw)} too short for checksum")
    payload, check = raw[:-CHECKSUM_SIZE], raw[-CHECKSUM_SIZE:]
    if checksum(payload) != check:
        raise ChecksumMismatch("checksum mismatch")
    return payload
