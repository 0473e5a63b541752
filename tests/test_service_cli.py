from __future__ import annotations

import json
import pathlib
from typing import Any

import pytest
from factom_fer import cli as cli_mod
from factom_fer import service as service_mod
from factom_fer.config import CONFIG_ENV_VAR, FERConfig, load_config, parse_config
from factom_fer.exceptions import ConfigError, KeyFormatError, ReasonCode, ValidationError
from factom_fer.report import render_curl_report
from factom_fer.service import create_fer_entry_and_reveal, handle_change_price, parse_uint

from .conftest import PAYMENT_KEY_HEX, SIGNING_KEY_HEX, TIMESTAMP_MS

CONFIG_TEXT = (
    f'PaymentPrivateKey = "{PAYMENT_KEY_HEX}"\n'
    f'SigningPrivateKey = "{SIGNING_KEY_HEX}"\n'
    'Version = "1.0"\n'
)

PARAMS = {
    "expiration-height": "100000",
    "activation-height": "100005",
    "priority": "1",
    "new-price-per-EC": "125000",
}


def _write_config(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "FactomFER.conf"
    path.write_text(CONFIG_TEXT)
    return path


# --- parse_uint ---


def test_parse_uint_ok() -> None:
    assert parse_uint("4294967295", 32) == 2**32 - 1
    assert parse_uint("18446744073709551615", 64) == 2**64 - 1


@pytest.mark.parametrize("text", ["", "abc", "-1", "1.5", "0x10", " 12", "12 ", "12\n"])
def test_parse_uint_invalid(text: str) -> None:
    with pytest.raises(ValidationError) as ei:
        parse_uint(text, 32)
    assert ei.value.reason is ReasonCode.INVALID_NUMBER


def test_parse_uint_out_of_range() -> None:
    with pytest.raises(ValidationError) as ei:
        parse_uint("4294967296", 32)
    assert ei.value.reason is ReasonCode.VALUE_OUT_OF_RANGE


# --- Service ---


def test_create_submission(config: FERConfig) -> None:
    sub = create_fer_entry_and_reveal(
        "100000", "100005", "1", "125000", config, timestamp_ms=TIMESTAMP_MS
    )
    assert sub.implied_price == pytest.approx(0.8)
    assert sub.ec_address.startswith("EC") and len(sub.ec_address) == 52
    assert json.loads(sub.commit_json)["method"] == "commit-entry"
    assert json.loads(sub.reveal_json)["method"] == "reveal-entry"
    again = create_fer_entry_and_reveal(
        "100000", "100005", "1", "125000", config, timestamp_ms=TIMESTAMP_MS
    )
    assert again == sub


def test_zero_price_never_signs(config: FERConfig, monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_a: Any, **_k: Any) -> None:
        raise AssertionError("signing must not happen")

    monkeypatch.setattr(service_mod, "sign_entry", _boom)
    monkeypatch.setattr(service_mod, "compose", _boom)
    with pytest.raises(ValidationError) as ei:
        create_fer_entry_and_reveal("1", "2", "3", "0", config)
    assert ei.value.reason is ReasonCode.ZERO_TARGET_PRICE


def test_bad_payment_key(config: FERConfig) -> None:
    bad = config.model_copy(update={"payment_private_key": "ab" * 31})
    with pytest.raises(KeyFormatError):
        create_fer_entry_and_reveal("1", "2", "3", "4", bad)


def test_change_price_success(config: FERConfig) -> None:
    request = {"jsonrpc": "2.0", "id": 7, "method": "change-price", "params": PARAMS}
    resp = handle_change_price(request, config, timestamp_ms=TIMESTAMP_MS)
    assert resp["id"] == 7
    result = resp["result"]
    assert set(result) == {"entry-commit", "reveal-json", "target-price-in-dollars", "ec-address"}
    assert result["target-price-in-dollars"] == pytest.approx(0.8)


def test_change_price_zero_is_internal_error(config: FERConfig) -> None:
    params = dict(PARAMS, **{"new-price-per-EC": "0"})
    resp = handle_change_price({"jsonrpc": "2.0", "id": 1, "params": params}, config)
    assert resp["error"]["code"] == -32603
    assert resp["error"]["message"] == "Internal error"
    assert "target_price" in resp["error"]["data"]


def test_change_price_missing_params(config: FERConfig) -> None:
    resp = handle_change_price({"jsonrpc": "2.0", "id": 3, "params": {}}, config)
    assert resp == {
        "jsonrpc": "2.0",
        "id": 3,
        "error": {"code": -32600, "message": "Invalid Request"},
    }


def test_change_price_garbage_request(config: FERConfig) -> None:
    resp = handle_change_price("garbage", config)
    assert resp["id"] is None
    assert resp["error"]["code"] == -32600


# --- Config ---


def test_load_config_file(tmp_path: pathlib.Path) -> None:
    cfg = load_config(_write_config(tmp_path))
    assert cfg.version == "1.0"
    assert cfg.payment_private_key == PAYMENT_KEY_HEX
    assert cfg.node_url == "localhost:8088/v2"


def test_load_config_from_env(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(_write_config(tmp_path)))
    assert load_config().signing_private_key == SIGNING_KEY_HEX


def test_missing_config_has_sample(tmp_path: pathlib.Path) -> None:
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path / "nope.conf")
    assert "PaymentPrivateKey" in str(ei.value)


def test_config_missing_version() -> None:
    with pytest.raises(ConfigError):
        parse_config({"PaymentPrivateKey": PAYMENT_KEY_HEX, "SigningPrivateKey": SIGNING_KEY_HEX})


def test_config_repr_hides_keys(config: FERConfig) -> None:
    assert PAYMENT_KEY_HEX not in repr(config)


# --- Report ---


def test_curl_report(config: FERConfig) -> None:
    sub = create_fer_entry_and_reveal(
        "100000", "100005", "1", "125000", config, timestamp_ms=TIMESTAMP_MS
    )
    report = render_curl_report(sub, "node:8088/v2")
    assert "$0.80" in report
    assert f"Entry Credit Address that pays for this Entry: {sub.ec_address}" in report
    curl_lines = [ln for ln in report.splitlines() if ln.strip().startswith("curl")]
    assert len(curl_lines) == 2
    assert curl_lines[0].endswith(f"-d '{sub.commit_json}' node:8088/v2")
    assert curl_lines[1].endswith(f"-d '{sub.reveal_json}' node:8088/v2")


# --- CLI ---


def test_cli_compose_json(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = _write_config(tmp_path)
    rc = cli_mod.main(
        [
            "compose",
            "100000",
            "100005",
            "1",
            "125000",
            "--config",
            str(cfg),
            "--json",
            "--timestamp-ms",
            str(TIMESTAMP_MS),
        ]
    )
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["implied_price"] == pytest.approx(0.8)
    assert data["ec_address"].startswith("EC")


def test_cli_compose_writes_report(
    tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_config(tmp_path)
    out = tmp_path / "curl.txt"
    rc = cli_mod.main(
        ["compose", "100000", "100005", "1", "125000", "--config", str(cfg), "--out", str(out)]
    )
    assert rc == 0
    assert out.read_text() == capsys.readouterr().out


def test_cli_compose_zero_price(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = _write_config(tmp_path)
    rc = cli_mod.main(["compose", "1", "2", "3", "0", "--config", str(cfg)])
    assert rc == 1
    assert "zero_target_price" in capsys.readouterr().err


def test_cli_address_round_trip(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main(["ec-address", "--key", PAYMENT_KEY_HEX]) == 0
    derived = json.loads(capsys.readouterr().out)
    assert cli_mod.main(["decode-address", derived["ec_address"]]) == 0
    decoded = json.loads(capsys.readouterr().out)
    assert decoded["payload"] == derived["public_key"]
    assert decoded["prefix"] == "592a"


def test_cli_decode_collision(capsys: pytest.CaptureFixture[str]) -> None:
    cli_mod.main(["ec-address", "--key", PAYMENT_KEY_HEX])
    address = json.loads(capsys.readouterr().out)["ec_address"]
    rc = cli_mod.main(["decode-address", address, "--also-network", "testnet"])
    assert rc == 1
    assert "address_collision" in capsys.readouterr().err
    rc = cli_mod.main(
        ["decode-address", address, "--also-network", "testnet", "--network", "testnet"]
    )
    assert rc == 0


def test_cli_decode_short(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_mod.main(["decode-address", "EC" + "1" * 49])
    assert rc == 1
    assert "length_error" in capsys.readouterr().err


def test_cli_rpc(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = _write_config(tmp_path)
    req = tmp_path / "req.json"
    req.write_text(json.dumps({"jsonrpc": "2.0", "id": 1, "params": PARAMS}))
    rc = cli_mod.main(["rpc", "--request", str(req), "--config", str(cfg)])
    assert rc == 0
    resp = json.loads(capsys.readouterr().out)
    assert resp["result"]["ec-address"].startswith("EC")
