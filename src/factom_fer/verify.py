from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .compose import Commit, Composition, LedgerEntry
from .entry import SignedEntry, serialize_entry
from .exceptions import SignatureInvalid, reason_code_for_exception


def _verify_sig_ed25519(public_key: bytes, message: bytes, signature: bytes) -> bool:
    try:
        pub = Ed25519PublicKey.from_public_bytes(public_key)
        pub.verify(signature, message)
        return True
    except (InvalidSignature, ValueError):
        return False


def verify_signed_entry(signed: SignedEntry) -> tuple[bool, str | None]:
    """Boolean wrapper returning ``(ok, reason_code)`` instead of raising.

    For richer error handling prefer :func:`verify_signed_entry_or_raise`.
    """
    try:
        verify_signed_entry_or_raise(signed)
        return True, None
    except Exception as e:
        return False, reason_code_for_exception(e)


def verify_signed_entry_or_raise(signed: SignedEntry) -> None:
    """Check the signature and that the entry still serializes to the signed bytes."""
    if serialize_entry(signed.entry) != signed.canonical_bytes:
        raise SignatureInvalid("canonical bytes do not match the entry")
    if not _verify_sig_ed25519(signed.signer_public_key, signed.canonical_bytes, signed.signature):
        raise SignatureInvalid("entry signature invalid")


def verify_commit_or_raise(commit: Commit) -> None:
    if commit.payer.payload != commit.payer_public_key:
        raise SignatureInvalid("payer address does not match commit public key")
    if not _verify_sig_ed25519(
        commit.payer_public_key, commit.signed_prefix(), commit.payer_signature
    ):
        raise SignatureInvalid("commit signature invalid")


def verify_composition_or_raise(composition: Composition, signer_public_key: bytes) -> None:
    """Verify both halves and that the reveal discloses what the commit paid for."""
    commit, reveal = composition.commit, composition.reveal
    verify_commit_or_raise(commit)
    if commit.chain_id != reveal.chain_id:
        raise SignatureInvalid("commit and reveal reference different chains")
    if commit.entry_signature != reveal.entry_signature:
        raise SignatureInvalid("commit and reveal carry different entry signatures")
    entry = LedgerEntry(
        chain_id=reveal.chain_id, ext_ids=(reveal.entry_signature,), content=reveal.content
    )
    if entry.marshal_binary() != reveal.entry_binary:
        raise SignatureInvalid("reveal entry binary does not match its content")
    if entry.hash() != commit.entry_hash:
        raise SignatureInvalid("commit entry hash does not match reveal")
    if not _verify_sig_ed25519(signer_public_key, reveal.content, reveal.entry_signature):
        raise SignatureInvalid("entry signature invalid")


def verify_composition(
    composition: Composition, signer_public_key: bytes
) -> tuple[bool, str | None]:
    try:
        verify_composition_or_raise(composition, signer_public_key)
        return True, None
    except Exception as e:
        return False, reason_code_for_exception(e)
