"""Entry Credit addresses: Base58Check encoding, decoding and kind resolution.

An address string is ``base58(prefix ++ payload ++ first4(sha256d(prefix ++ payload)))``.
Decoding is split from resolving which address *kind* the prefix denotes, so a
prefix registered on more than one network is reported as
:class:`~factom_fer.exceptions.AddressCollision` instead of being guessed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from . import base58
from .constants import ADDRESS_PAYLOAD_SIZE, CHECKSUM_SIZE, EC_PUBLIC_PREFIX, ED25519_SEED_SIZE
from .exceptions import (
    AddressCollision,
    AddressError,
    ChecksumMismatch,
    LengthError,
    UnknownAddressType,
    reason_code_for_exception,
)
from .signers import Ed25519Signer
from .utils import decode_hex_key

MAINNET = "mainnet"


class AddressKind(Enum):
    ENTRY_CREDIT = "entry_credit"


def encoded_lengths(prefix: bytes) -> set[int]:
    """Possible Base58 string lengths for ``prefix`` plus payload and checksum."""
    n = ADDRESS_PAYLOAD_SIZE + CHECKSUM_SIZE
    lo = base58.b58encode(prefix + b"\x00" * n)
    hi = base58.b58encode(prefix + b"\xff" * n)
    return set(range(len(lo), len(hi) + 1))


@dataclass(frozen=True)
class Address:
    kind: AddressKind
    prefix: bytes
    payload: bytes
    network: str = MAINNET

    def __post_init__(self) -> None:
        if len(self.payload) != ADDRESS_PAYLOAD_SIZE:
            raise LengthError(
                f"address payload must be {ADDRESS_PAYLOAD_SIZE} bytes, got {len(self.payload)}"
            )

    @property
    def checksum(self) -> bytes:
        return base58.checksum(self.prefix + self.payload)

    def encode(self) -> str:
        return base58.check_encode(self.prefix + self.payload)

    def __str__(self) -> str:
        return self.encode()


@dataclass(frozen=True)
class _Registration:
    network: str
    kind: AddressKind
    prefix: bytes


class AddressRegistry:
    """Prefixes known per (network, kind). Instances are independent of each other."""

    def __init__(self, registrations: Iterable[tuple[str, AddressKind, bytes]] = ()) -> None:
        self._entries: list[_Registration] = []
        for network, kind, prefix in registrations:
            self.register(network, kind, prefix)

    def register(self, network: str, kind: AddressKind, prefix: bytes) -> None:
        if not prefix or prefix[0] == 0:
            raise ValueError("address prefix must be non-empty with a non-zero leading byte")
        reg = _Registration(network, kind, bytes(prefix))
        if reg not in self._entries:
            self._entries.append(reg)

    def encoded_lengths(self) -> set[int]:
        return set().union(*(encoded_lengths(r.prefix) for r in self._entries))

    def decoded_lengths(self) -> set[int]:
        return {len(r.prefix) + ADDRESS_PAYLOAD_SIZE + CHECKSUM_SIZE for r in self._entries}

    def matches(self, raw: bytes) -> list[_Registration]:
        """Registrations whose prefix starts ``raw`` and leaves exactly one payload."""
        return [
            r
            for r in self._entries
            if raw.startswith(r.prefix) and len(raw) == len(r.prefix) + ADDRESS_PAYLOAD_SIZE
        ]


def default_registry() -> AddressRegistry:
    """A fresh registry holding the mainnet Entry Credit prefix."""
    return AddressRegistry([(MAINNET, AddressKind.ENTRY_CREDIT, EC_PUBLIC_PREFIX)])


def encode_address(payload: bytes, prefix: bytes = EC_PUBLIC_PREFIX) -> str:
    if len(payload) != ADDRESS_PAYLOAD_SIZE:
        raise LengthError(f"hash len is wrong: {len(payload)}")
    return base58.check_encode(bytes(prefix) + bytes(payload))


def _resolve(
    matches: list[_Registration], network: str | None, raw: bytes
) -> _Registration:
    if network is not None:
        matches = [r for r in matches if r.network == network]
    if not matches:
        raise UnknownAddressType(f"unknown address type for prefix {raw[:2].hex()}")
    if len(matches) > 1:
        owners = sorted(f"{r.network}/{r.kind.value}" for r in matches)
        raise AddressCollision(f"address prefix is registered for {owners}; pass network=")
    return matches[0]


def decode_address(
    text: str,
    *,
    registry: AddressRegistry | None = None,
    network: str | None = None,
) -> Address:
    """Decode and validate an address string or raise a typed :class:`AddressError`."""
    if registry is None:
        registry = default_registry()
    if not isinstance(text, str) or len(text) not in registry.encoded_lengths():
        size = len(text) if isinstance(text, str) else None
        raise LengthError(f"address has wrong length: {size}")
    raw = base58.b58decode(text)
    if len(raw) not in registry.decoded_lengths():
        raise LengthError(f"decoded address has wrong length: {len(raw)}")
    body, check = raw[:-CHECKSUM_SIZE], raw[-CHECKSUM_SIZE:]
    if base58.checksum(body) != check:
        raise ChecksumMismatch("checksum mismatch")
    reg = _resolve(registry.matches(body), network, body)
    payload = body[len(reg.prefix):]
    if len(payload) != ADDRESS_PAYLOAD_SIZE:
        raise LengthError(f"decoded payload must be {ADDRESS_PAYLOAD_SIZE} bytes")
    return Address(kind=reg.kind, prefix=reg.prefix, payload=payload, network=reg.network)


def validate_address(
    text: str,
    *,
    registry: AddressRegistry | None = None,
    network: str | None = None,
) -> tuple[bool, str | None]:
    """Boolean API; prefer :func:`decode_address` for typed errors."""
    try:
        decode_address(text, registry=registry, network=network)
        return True, None
    except AddressError as e:
        return False, reason_code_for_exception(e)


class EntryCreditKey:
    """Payment key pair whose Ed25519 public key is the EC address payload."""

    def __init__(self, seed: bytes, network: str = MAINNET) -> None:
        self._signer = Ed25519Signer(seed)
        self.address = Address(
            kind=AddressKind.ENTRY_CREDIT,
            prefix=EC_PUBLIC_PREFIX,
            payload=self._signer.public_key_bytes(),
            network=network,
        )

    @classmethod
    def from_hex(cls, private_key_hex: str, network: str = MAINNET) -> EntryCreditKey:
        seed = decode_hex_key(private_key_hex, ED25519_SEED_SIZE, label="payment private key")
        return cls(seed, network=network)

    @property
    def public_key(self) -> bytes:
        return self._signer.public_key_bytes()

    def pub_string(self) -> str:
        return self.address.encode()

    def sign(self, msg: bytes) -> bytes:
        return self._signer.sign(msg)
