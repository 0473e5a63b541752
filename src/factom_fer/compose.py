"""Two-phase ledger submission: the payment-authorizing commit and the content reveal.

Both halves come out of a single :func:`compose` call so a caller can never
hold a commit whose content it is unable to reveal afterwards. The commit only
carries the entry *hash*, which lets a node accept payment before the content
is disclosed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .address import Address, EntryCreditKey
from .constants import (
    ENTRY_CREDIT_UNIT,
    ENTRY_HEADER_SIZE,
    ENTRY_MAX_BODY_SIZE,
    FER_CHAIN_ID,
    PRICE_REFERENCE_NUMERATOR,
)
from .entry import SignedEntry
from .exceptions import ReasonCode, SerializationError, ValidationError
from .jsonrpc import RequestCounter, encode_json, json_rpc_request
from .log import get_logger
from .utils import now_millis, sha256, sha512

log = get_logger(__name__)

COMMIT_METHOD = "commit-entry"
REVEAL_METHOD = "reveal-entry"


def implied_price(target_price: int) -> float:
    """Human-facing price: ``100000 / target_price``."""
    if target_price == 0:
        raise ValidationError("Trying to set target_price to 0", ReasonCode.ZERO_TARGET_PRICE)
    return PRICE_REFERENCE_NUMERATOR / float(target_price)


def _chain_id_bytes(chain_id: str) -> bytes:
    try:
        raw = bytes.fromhex(chain_id)
    except ValueError as e:
        raise SerializationError(f"chain id is not hex: {chain_id!r}") from e
    if len(raw) != 32:
        raise SerializationError(f"chain id must be 32 bytes, got {len(raw)}")
    return raw


@dataclass(frozen=True)
class LedgerEntry:
    chain_id: str
    ext_ids: tuple[bytes, ...]
    content: bytes

    def marshal_binary(self) -> bytes:
        ids = b"".join(len(x).to_bytes(2, "big") + x for x in self.ext_ids)
        if len(ids) > 0x7FFF:
            raise SerializationError("external ids too large")
        header = b"\x00" + _chain_id_bytes(self.chain_id) + len(ids).to_bytes(2, "big")
        return header + ids + self.content

    def hash(self) -> bytes:
        data = self.marshal_binary()
        return sha256(sha512(data) + data)

    def cost(self) -> int:
        """Entry credits needed: one per started KiB of body, at least one."""
        body = len(self.marshal_binary()) - ENTRY_HEADER_SIZE
        if body > ENTRY_MAX_BODY_SIZE:
            raise SerializationError("Entry cannot be larger than 10KB")
        return max(1, -(-body // ENTRY_CREDIT_UNIT))


@dataclass(frozen=True)
class Commit:
    chain_id: str
    entry_hash: bytes
    timestamp_ms: int
    credits: int
    entry_signature: bytes
    payer: Address
    payer_public_key: bytes
    payer_signature: bytes
    request_id: int = 0

    def signed_prefix(self) -> bytes:
        return _commit_prefix(self.timestamp_ms, self.entry_hash, self.credits)

    def marshal_binary(self) -> bytes:
        return self.signed_prefix() + self.payer_public_key + self.payer_signature

    def to_request(self) -> dict[str, Any]:
        return json_rpc_request(
            COMMIT_METHOD, {"message": self.marshal_binary().hex()}, self.request_id
        )


@dataclass(frozen=True)
class Reveal:
    chain_id: str
    entry_signature: bytes
    content: bytes
    entry_binary: bytes = field(repr=False)
    request_id: int = 1

    def to_request(self) -> dict[str, Any]:
        return json_rpc_request(REVEAL_METHOD, {"entry": self.entry_binary.hex()}, self.request_id)


@dataclass(frozen=True)
class Composition:
    commit: Commit
    reveal: Reveal
    implied_price: float

    def commit_json(self) -> str:
        return encode_json(self.commit.to_request())

    def reveal_json(self) -> str:
        return encode_json(self.reveal.to_request())


def _commit_prefix(timestamp_ms: int, entry_hash: bytes, credits: int) -> bytes:
    # version(1) ++ milliseconds(6) ++ entry hash(32) ++ credits(1)
    ts = (timestamp_ms & (2**48 - 1)).to_bytes(6, "big")
    return b"\x00" + ts + entry_hash + bytes([credits])


def compose(
    signed: SignedEntry,
    payer: EntryCreditKey,
    *,
    chain_id: str = FER_CHAIN_ID,
    timestamp_ms: int | None = None,
    counter: RequestCounter | None = None,
) -> Composition:
    """Build the commit, the reveal and the implied price from ``signed``.

    ``timestamp_ms`` is stamped into the commit as given (now when omitted);
    validity windows are enforced by ledger nodes, not here. With a fixed
    timestamp the output is byte-for-byte reproducible.
    """
    price = implied_price(signed.entry.target_price)
    counter = counter or RequestCounter()
    ts = now_millis() if timestamp_ms is None else timestamp_ms

    entry = LedgerEntry(
        chain_id=chain_id, ext_ids=(bytes(signed.signature),), content=bytes(signed.canonical_bytes)
    )
    entry_binary = entry.marshal_binary()
    entry_hash = entry.hash()
    credits = entry.cost()
    payer_signature = payer.sign(_commit_prefix(ts, entry_hash, credits))

    commit = Commit(
        chain_id=chain_id,
        entry_hash=entry_hash,
        timestamp_ms=ts,
        credits=credits,
        entry_signature=bytes(signed.signature),
        payer=payer.address,
        payer_public_key=payer.public_key,
        payer_signature=payer_signature,
        request_id=counter.next(),
    )
    reveal = Reveal(
        chain_id=chain_id,
        entry_signature=bytes(signed.signature),
        content=bytes(signed.canonical_bytes),
        entry_binary=entry_binary,
        request_id=counter.next(),
    )
    log.debug(
        "fer_entry_composed",
        entry_hash=entry_hash.hex(),
        credits=credits,
        ec_address=payer.pub_string(),
    )
    return Composition(commit=commit, reveal=reveal, implied_price=price)
