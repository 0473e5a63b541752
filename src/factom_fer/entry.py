from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .exceptions import ReasonCode, SerializationError, ValidationError

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

# Field order of the canonical JSON; signatures cover these exact bytes.
FIELD_ORDER = (
    "expiration_height",
    "target_activation_height",
    "priority",
    "target_price",
    "version",
)

# Escapes applied by the ledger's reference JSON encoder.
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass(frozen=True)
class FEREntry:
    """Fee exchange rate record; its canonical JSON is the ledger entry content."""

    expiration_height: int
    target_activation_height: int
    priority: int
    target_price: int
    version: str

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in FIELD_ORDER}


@dataclass(frozen=True)
class SignedEntry:
    entry: FEREntry
    canonical_bytes: bytes
    signature: bytes
    signer_public_key: bytes


def _check_uint(name: str, value: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer", ReasonCode.INVALID_NUMBER)
    if value < 0 or value > maximum:
        raise ValidationError(f"{name} out of range: {value}", ReasonCode.VALUE_OUT_OF_RANGE)


def build_entry(
    expiration_height: int,
    target_activation_height: int,
    priority: int,
    target_price: int,
    version: str,
) -> FEREntry:
    """Validate the oracle fields and return an immutable :class:`FEREntry`."""
    _check_uint("expiration_height", expiration_height, U32_MAX)
    _check_uint("target_activation_height", target_activation_height, U32_MAX)
    _check_uint("priority", priority, U32_MAX)
    _check_uint("target_price", target_price, U64_MAX)
    if target_price == 0:
        raise ValidationError("Trying to set target_price to 0", ReasonCode.ZERO_TARGET_PRICE)
    if not isinstance(version, str):
        raise ValidationError("version must be str", ReasonCode.INVALID_NUMBER)
    return FEREntry(
        expiration_height=expiration_height,
        target_activation_height=target_activation_height,
        priority=priority,
        target_price=target_price,
        version=version,
    )


def canonical_json(obj: dict[str, Any]) -> bytes:
    """Compact UTF-8 JSON in insertion order, HTML characters escaped."""
    text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    for ch, esc in _HTML_ESCAPES.items():
        text = text.replace(ch, esc)
    return text.encode("utf-8")


def serialize_entry(entry: FEREntry) -> bytes:
    """Canonical bytes of ``entry``; identical input always yields identical bytes."""
    if entry.target_price == 0:
        raise ValidationError("Trying to set target_price to 0", ReasonCode.ZERO_TARGET_PRICE)
    try:
        return canonical_json(entry.as_dict())
    except (TypeError, ValueError, UnicodeEncodeError) as e:
        raise SerializationError("Could not marshal the data into an FEREntry") from e
