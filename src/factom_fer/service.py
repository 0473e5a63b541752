"""Glue between string inputs / config and the signing pipeline.

Every function here is pure apart from logging: config arrives as an object,
outputs are returned as strings and dicts for the caller to transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .address import EntryCreditKey
from .compose import compose
from .config import FERConfig
from .entry import build_entry
from .exceptions import FerError, ReasonCode, ValidationError
from .jsonrpc import RequestCounter, internal_error, invalid_request, json_rpc_result
from .log import get_logger
from .models import ChangePriceParams, ChangePriceResult, JsonRpcRequestModel
from .signers import Ed25519Signer, sign_entry

log = get_logger(__name__)

@dataclass(frozen=True)
class FERSubmission:
    commit_json: str
    reveal_json: str
    implied_price: float
    ec_address: str


def parse_uint(text: str, bits: int, *, name: str = "value") -> int:
    """Parse a base-10 unsigned integer that must fit in ``bits`` bits."""
    value_text = text if isinstance(text, str) else ""
    if not value_text.isdigit() or not value_text.isascii():
        raise ValidationError(
            f"{name} is not an unsigned integer: {text!r}", ReasonCode.INVALID_NUMBER
        )
    value = int(value_text, 10)
    if value > 2**bits - 1:
        raise ValidationError(
            f"{name} out of range for uint{bits}: {text}", ReasonCode.VALUE_OUT_OF_RANGE
        )
    return value


def create_fer_entry_and_reveal(
    expiration_height: str,
    activation_height: str,
    priority: str,
    target_price: str,
    config: FERConfig,
    *,
    timestamp_ms: int | None = None,
    counter: RequestCounter | None = None,
) -> FERSubmission:
    """Build, sign and compose an FER entry from decimal strings and ``config``."""
    payer = EntryCreditKey.from_hex(config.payment_private_key)
    signer = Ed25519Signer.from_hex(config.signing_private_key)

    entry = build_entry(
        parse_uint(expiration_height, 32, name="expiration_height"),
        parse_uint(activation_height, 32, name="activation_height"),
        parse_uint(priority, 32, name="priority"),
        parse_uint(target_price, 64, name="target_price"),
        config.version,
    )
    signed = sign_entry(entry, signer)
    composition = compose(
        signed, payer, chain_id=config.chain_id, timestamp_ms=timestamp_ms, counter=counter
    )
    submission = FERSubmission(
        commit_json=composition.commit_json(),
        reveal_json=composition.reveal_json(),
        implied_price=composition.implied_price,
        ec_address=payer.pub_string(),
    )
    log.info(
        "fer_submission_created",
        expiration_height=entry.expiration_height,
        activation_height=entry.target_activation_height,
        priority=entry.priority,
        target_price=entry.target_price,
        ec_address=submission.ec_address,
    )
    return submission


def handle_change_price(
    request: Any,
    config: FERConfig,
    *,
    timestamp_ms: int | None = None,
) -> dict[str, Any]:
    """Answer a ``change-price`` JSON-RPC 2.0 request with a response dict.

    Malformed requests or params give ``-32600``; pipeline failures give
    ``-32603`` with the error message as ``data``.
    """
    try:
        req = JsonRpcRequestModel.model_validate(request)
    except PydanticValidationError:
        return invalid_request()
    try:
        params = ChangePriceParams.model_validate(req.params or {})
    except PydanticValidationError:
        return invalid_request(req.id)

    try:
        submission = create_fer_entry_and_reveal(
            params.expiration_height,
            params.activation_height,
            params.priority,
            params.new_price_per_ec,
            config,
            timestamp_ms=timestamp_ms,
        )
    except FerError as e:
        log.warning("change_price_failed", reason=e.reason.value, error=str(e))
        return internal_error(req.id, str(e))

    result = ChangePriceResult(
        entry_commit=submission.commit_json,
        reveal_json=submission.reveal_json,
        target_price_in_dollars=submission.implied_price,
        ec_address=submission.ec_address,
    )
    return json_rpc_result(req.id, result.model_dump(by_alias=True))
