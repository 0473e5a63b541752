from __future__ import annotations

from enum import Enum


class ReasonCode(str, Enum):
    ZERO_TARGET_PRICE = "zero_target_price"
    INVALID_NUMBER = "invalid_number"
    VALUE_OUT_OF_RANGE = "value_out_of_range"
    KEY_FORMAT = "key_format"
    SERIALIZATION_ERROR = "serialization_error"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    LENGTH_ERROR = "length_error"
    ADDRESS_COLLISION = "address_collision"
    UNKNOWN_ADDRESS_TYPE = "unknown_address_type"
    ADDRESS_FORMAT = "address_format"
    SIGNATURE_INVALID = "signature_invalid"
    CONFIG_ERROR = "config_error"
    UNKNOWN = "unknown"


class FerError(Exception):
    """Base class for all factom-fer errors."""

    reason: ReasonCode = ReasonCode.UNKNOWN


class ValidationError(FerError):
    """User supplied values that cannot form an FER entry.

    Raised immediately, never retried. ``reason`` tells the zero price case
    apart from unparsable or out-of-range numbers.
    """

    def __init__(self, message: str, reason: ReasonCode = ReasonCode.ZERO_TARGET_PRICE) -> None:
        super().__init__(message)
        self.reason = reason


class KeyFormatError(FerError):
    reason = ReasonCode.KEY_FORMAT


class SerializationError(FerError):
    reason = ReasonCode.SERIALIZATION_ERROR


class AddressError(FerError):
    """Base class for address decode failures."""


class ChecksumMismatch(AddressError):
    reason = ReasonCode.CHECKSUM_MISMATCH


class LengthError(AddressError):
    reason = ReasonCode.LENGTH_ERROR


class AddressCollision(AddressError):
    reason = ReasonCode.ADDRESS_COLLISION


class UnknownAddressType(AddressError):
    reason = ReasonCode.UNKNOWN_ADDRESS_TYPE


class AddressFormatError(AddressError):
    reason = ReasonCode.ADDRESS_FORMAT


class SignatureInvalid(FerError):
    reason = ReasonCode.SIGNATURE_INVALID


class ConfigError(FerError):
    reason = ReasonCode.CONFIG_ERROR


def reason_code_for_exception(exc: BaseException) -> str:
    """Map an exception to its short reason string."""
    if isinstance(exc, FerError):
        return exc.reason.value
    return ReasonCode.UNKNOWN.value
