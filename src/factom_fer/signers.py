from __future__ import annotations

from abc import ABC, abstractmethod

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from .constants import ED25519_PRIVATE_KEY_SIZE, ED25519_SEED_SIZE
from .entry import FEREntry, SignedEntry, serialize_entry
from .exceptions import KeyFormatError
from .log import get_logger
from .utils import decode_hex_key

log = get_logger(__name__)


class BaseSigner(ABC):
    @abstractmethod
    def sign(self, msg: bytes) -> bytes: ...

    @abstractmethod
    def public_key_bytes(self) -> bytes: ...


class Ed25519Signer(BaseSigner):
    """Detached Ed25519 signer.

    Keys arrive in the 64-byte detached layout (seed followed by public half).
    Only the seed is trusted: the public half is always recomputed from it, so
    a stale or zeroed public half cannot change the signature.
    """

    def __init__(self, seed: bytes) -> None:
        if not isinstance(seed, bytes | bytearray) or len(seed) != ED25519_SEED_SIZE:
            raise KeyFormatError(f"ed25519 seed must be {ED25519_SEED_SIZE} bytes")
        self._sk = Ed25519PrivateKey.from_private_bytes(bytes(seed))
        self._pk = self._sk.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

    @classmethod
    def from_private_key(cls, private_key: bytes) -> Ed25519Signer:
        if len(private_key) != ED25519_PRIVATE_KEY_SIZE:
            raise KeyFormatError(
                f"signing private key must be {ED25519_PRIVATE_KEY_SIZE} bytes, "
                f"got {len(private_key)}"
            )
        return cls(private_key[:ED25519_SEED_SIZE])

    @classmethod
    def from_hex(cls, private_key_hex: str) -> Ed25519Signer:
        raw = decode_hex_key(
            private_key_hex, ED25519_PRIVATE_KEY_SIZE, label="signing private key"
        )
        return cls.from_private_key(raw)

    def sign(self, msg: bytes) -> bytes:
        if not isinstance(msg, bytes | bytearray):
            raise ValueError("message must be bytes")
        return self._sk.sign(bytes(msg))

    def public_key_bytes(self) -> bytes:
        return self._pk

    def private_key_bytes(self) -> bytes:
        """64-byte detached form: seed ++ public key."""
        seed = self._sk.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
        return seed + self._pk


def sign_entry(entry: FEREntry, signer: BaseSigner) -> SignedEntry:
    """Serialize ``entry`` once and sign exactly those bytes."""
    canonical = serialize_entry(entry)
    signature = signer.sign(canonical)
    log.debug("fer_entry_signed", size=len(canonical), public_key=signer.public_key_bytes().hex())
    return SignedEntry(
        entry=entry,
        canonical_bytes=canonical,
        signature=signature,
        signer_public_key=signer.public_key_bytes(),
    )

