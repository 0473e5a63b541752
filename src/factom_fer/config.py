from __future__ import annotations

import os
import pathlib
import tomllib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_CONFIG_FILENAME, DEFAULT_NODE_URL, FER_CHAIN_ID
from .exceptions import ConfigError

CONFIG_ENV_VAR = "FACTOM_FER_CONFIG"

SAMPLE_CONFIG = (
    'PaymentPrivateKey = "0000000000000000000000000000000000000000000000000000000000000000"\n'
    'SigningPrivateKey = "'
    + "0" * 128
    + '"\n'
    'Version = "1.0"\n'
)


class FERConfig(BaseModel):
    """Key material and version used to sign and pay for FER entries.

    Keys stay hex strings here; they are decoded (and length checked) by the
    signer and the Entry Credit key when used.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    payment_private_key: str = Field(alias="PaymentPrivateKey", repr=False)
    signing_private_key: str = Field(alias="SigningPrivateKey", repr=False)
    version: str = Field(alias="Version")
    chain_id: str = Field(default=FER_CHAIN_ID, alias="ChainID")
    node_url: str = Field(default=DEFAULT_NODE_URL, alias="NodeURL")


def parse_config(data: dict[str, Any]) -> FERConfig:
    try:
        return FERConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"invalid config: {e}") from e


def resolve_config_path(path: str | os.PathLike[str] | None = None) -> pathlib.Path:
    if path is not None:
        return pathlib.Path(path)
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return pathlib.Path(env)
    return pathlib.Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_config(path: str | os.PathLike[str] | None = None) -> FERConfig:
    """Read ``FactomFER.conf`` (TOML syntax) from ``path``, ``$FACTOM_FER_CONFIG`` or cwd."""
    config_path = resolve_config_path(path)
    try:
        text = config_path.read_text("utf-8")
    except FileNotFoundError as e:
        raise ConfigError(
            f"Could not find config file {config_path}.\n"
            "A sample config file is below, create it if you wish:\n" + SAMPLE_CONFIG
        ) from e
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"config file {config_path} is not valid: {e}") from e
    return parse_config(data)
