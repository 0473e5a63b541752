from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChangePriceParams(BaseModel):
    """``change-price`` request params; numbers arrive as decimal strings."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    expiration_height: str = Field(alias="expiration-height")
    activation_height: str = Field(alias="activation-height")
    priority: str = Field(alias="priority")
    new_price_per_ec: str = Field(alias="new-price-per-EC")


class ChangePriceResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    entry_commit: str = Field(alias="entry-commit")
    reveal_json: str = Field(alias="reveal-json")
    target_price_in_dollars: float = Field(alias="target-price-in-dollars")
    ec_address: str = Field(alias="ec-address")


class JsonRpcRequestModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    jsonrpc: str = "2.0"
    id: int | str | None = None
    method: str | None = None
    params: dict | None = None
