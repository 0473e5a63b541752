from __future__ import annotations

import argparse
import json
import pathlib
import sys
from dataclasses import asdict
from typing import Any

from .address import MAINNET, AddressKind, EntryCreditKey, decode_address, default_registry
from .config import load_config
from .constants import EC_PUBLIC_PREFIX
from .exceptions import FerError
from .log import get_logger, setup_logging
from .report import render_curl_report
from .service import create_fer_entry_and_reveal, handle_change_price

log = get_logger(__name__)


def _emit(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _cmd_compose(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    submission = create_fer_entry_and_reveal(
        args.expiration_height,
        args.activation_height,
        args.priority,
        args.target_price,
        config,
        timestamp_ms=args.timestamp_ms,
    )
    if args.json:
        _emit(asdict(submission))
        return 0
    report = render_curl_report(submission, args.node_url or config.node_url)
    if args.out:
        pathlib.Path(args.out).write_text(report, encoding="utf-8")
        log.info("curl_report_written", path=args.out)
    print(report, end="")
    return 0


def _cmd_ec_address(args: argparse.Namespace) -> int:
    key = EntryCreditKey.from_hex(args.key)
    _emit({"ec_address": key.pub_string(), "public_key": key.public_key.hex()})
    return 0


def _cmd_decode_address(args: argparse.Namespace) -> int:
    registry = default_registry()
    for network in args.also_network or []:
        registry.register(network, AddressKind.ENTRY_CREDIT, EC_PUBLIC_PREFIX)
    addr = decode_address(args.address, registry=registry, network=args.network)
    _emit(
        {
            "kind": addr.kind.value,
            "network": addr.network,
            "prefix": addr.prefix.hex(),
            "payload": addr.payload.hex(),
            "checksum": addr.checksum.hex(),
        }
    )
    return 0


def _cmd_rpc(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.request == "-":
        raw = sys.stdin.read()
    else:
        raw = pathlib.Path(args.request).read_text("utf-8")
    try:
        request = json.loads(raw)
    except json.JSONDecodeError:
        request = None
    response = handle_change_price(request, config, timestamp_ms=args.timestamp_ms)
    print(json.dumps(response, separators=(",", ":")))
    return 0 if "result" in response else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="factom-fer", description="Compose signed Factom FER commit/reveal entries"
    )
    ap.add_argument("--log-level", default=None)
    ap.add_argument("--log-format", choices=["console", "json"], default=None)
    sub = ap.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("compose", help="Build commit and reveal for a new FER entry")
    c.add_argument("expiration_height")
    c.add_argument("activation_height")
    c.add_argument("priority")
    c.add_argument("target_price")
    c.add_argument("--config", help="Path to FactomFER.conf")
    c.add_argument("--out", help="Also write the curl report to this file")
    c.add_argument("--node-url", help="factomd API endpoint used in curl lines")
    c.add_argument("--timestamp-ms", type=int, default=None)
    c.add_argument("--json", action="store_true", help="Emit the submission as JSON")
    c.set_defaults(func=_cmd_compose)

    e = sub.add_parser("ec-address", help="Derive the EC address of a payment key")
    e.add_argument("--key", required=True, help="64 hex chars of payment private key")
    e.set_defaults(func=_cmd_ec_address)

    d = sub.add_parser("decode-address", help="Validate and decode an EC address")
    d.add_argument("address")
    d.add_argument("--network", default=None, help=f"Disambiguate the network (e.g. {MAINNET})")
    d.add_argument(
        "--also-network",
        action="append",
        help="Register the EC prefix for an extra network",
    )
    d.set_defaults(func=_cmd_decode_address)

    r = sub.add_parser("rpc", help="Answer a change-price JSON-RPC request")
    r.add_argument("--request", required=True, help="Request JSON file, or - for stdin")
    r.add_argument("--config", help="Path to FactomFER.conf")
    r.add_argument("--timestamp-ms", type=int, default=None)
    r.set_defaults(func=_cmd_rpc)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_format=args.log_format)
    try:
        return args.func(args)
    except FerError as e:
        print(f"error [{e.reason.value}]: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
