from .address import (
    Address,
    AddressKind,
    AddressRegistry,
    EntryCreditKey,
    decode_address,
    default_registry,
    encode_address,
    validate_address,
)
from .compose import Commit, Composition, LedgerEntry, Reveal, compose, implied_price
from .config import FERConfig, load_config
from .constants import EC_PUBLIC_PREFIX, FER_CHAIN_ID, PRICE_REFERENCE_NUMERATOR
from .entry import FEREntry, SignedEntry, build_entry, serialize_entry
from .exceptions import (
    AddressCollision,
    AddressError,
    AddressFormatError,
    ChecksumMismatch,
    ConfigError,
    FerError,
    KeyFormatError,
    LengthError,
    ReasonCode,
    SerializationError,
    SignatureInvalid,
    UnknownAddressType,
    ValidationError,
    reason_code_for_exception,
)
from .jsonrpc import RequestCounter
from .report import render_curl_report
from .service import FERSubmission, create_fer_entry_and_reveal, handle_change_price, parse_uint
from .signers import BaseSigner, Ed25519Signer, sign_entry
from .verify import (
    verify_commit_or_raise,
    verify_composition,
    verify_composition_or_raise,
    verify_signed_entry,
    verify_signed_entry_or_raise,
)

__all__ = [
    "FEREntry",
    "SignedEntry",
    "build_entry",
    "serialize_entry",
    "BaseSigner",
    "Ed25519Signer",
    "sign_entry",
    "Address",
    "AddressKind",
    "AddressRegistry",
    "EntryCreditKey",
    "encode_address",
    "decode_address",
    "validate_address",
    "default_registry",
    "LedgerEntry",
    "Commit",
    "Reveal",
    "Composition",
    "compose",
    "implied_price",
    "RequestCounter",
    "verify_signed_entry",
    "verify_signed_entry_or_raise",
    "verify_commit_or_raise",
    "verify_composition",
    "verify_composition_or_raise",
    "FERConfig",
    "load_config",
    "FERSubmission",
    "create_fer_entry_and_reveal",
    "handle_change_price",
    "parse_uint",
    "render_curl_report",
    "FER_CHAIN_ID",
    "EC_PUBLIC_PREFIX",
    "PRICE_REFERENCE_NUMERATOR",
    # exceptions
    "FerError",
    "ValidationError",
    "KeyFormatError",
    "SerializationError",
    "AddressError",
    "ChecksumMismatch",
    "LengthError",
    "AddressCollision",
    "UnknownAddressType",
    "AddressFormatError",
    "SignatureInvalid",
    "ConfigError",
    "ReasonCode",
    "reason_code_for_exception",
    "__version__",
]
try:  # prefer single source of truth from installed metadata
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("factom-fer")
except Exception:  # pragma: no cover
    __version__ = "0.0.0"
