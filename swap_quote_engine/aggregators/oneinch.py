from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Union

import requests
from pydantic import BaseModel, ConfigDict, Field, field_validator

from swap_quote_engine.types import FeeConfig


class OneInchTx(BaseModel):
    to: str
    value: int
    data: str

    @field_validator("value", mode="before")
    @classmethod
    def _hex_or_decimal(cls, v):
        if isinstance(v, str) and v.lower().startswith("0x"):
            return int(v, 16)
        if v in (None, ""):
            return 0
        return v


class OneInchSwap(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tx: OneInchTx
    to_token_amount: int = Field(alias="toTokenAmount")
    from_token_amount: int = Field(alias="fromTokenAmount")


class OneInchError(BaseModel):
    error: Any
    description: Any = None


OneInchResponse = Union[OneInchError, OneInchSwap]


def format_fee(fee_config: FeeConfig | None) -> str:
    """Fee as the percentage string 1inch expects, e.g. 0.00875 -> "0.875"."""
    if not fee_config:
        return "0"
    pct = Decimal(str(fee_config.fee)) * 100
    return str(pct.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP))


def build_swap_params(
    from_token_address: str,
    to_token_address: str,
    amount: int,
    from_address: str,
    slippage: str | None,
    fee_config: FeeConfig | None,
    default_slippage: str = "0.5",
) -> dict[str, str]:
    return {
        "fromTokenAddress": from_token_address,
        "toTokenAddress": to_token_address,
        "amount": str(int(amount)),
        "fromAddress": from_address,
        "slippage": slippage if slippage else default_slippage,
        "fee": format_fee(fee_config),
        "referrerAddress": fee_config.referrer if fee_config else "",
        # Approvals are built locally, so 1inch must not check balance/allowance
        "disableEstimate": "true",
    }


def swap_url(base_url: str, chain_id: int | str) -> str:
    return f"{base_url.rstrip('/')}/{chain_id}/swap"


def parse_swap_response(payload: Any) -> OneInchResponse:
    if isinstance(payload, dict) and payload.get("error"):
        return OneInchError.model_validate(payload)
    return OneInchSwap.model_validate(payload)


def get_swap(
    base_url: str,
    chain_id: int | str,
    params: dict[str, str],
    api_key: str | None = None,
    timeout: float = 15.0,
) -> OneInchResponse:
    headers = {"Accept": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    r = requests.get(swap_url(base_url, chain_id), params=params, headers=headers, timeout=timeout)
    try:
        data = r.json()
    except ValueError:
        r.raise_for_status()
        raise
    # 1inch reports rejections as a JSON body on a 4xx status
    if isinstance(data, dict) and data.get("error"):
        return OneInchError.model_validate(data)
    r.raise_for_status()
    return parse_swap_response(data)
