from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swap_quote_engine.types import FeeConfig, ProviderName, WalletIdentifier

# Token-address placeholder aggregators use for the chain's native coin
NATIVE_TOKEN_ADDRESS = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"

MAX_UINT256 = 2**256 - 1


class ConfigError(ValueError):
    """Raised when configuration data is invalid or missing."""


class GasLimits(BaseModel):
    # Fixed ceilings; the aggregator is asked not to estimate
    swap: int = 1_000_000
    approval: int = 300_000


DEFAULT_FEE_CONFIGS: dict[str, dict[str, FeeConfig]] = {
    ProviderName.ONE_INCH.value: {
        WalletIdentifier.enkrypt.value: FeeConfig(
            fee=0.00875, referrer="0x551d9d8eb02e1c713009da8f7c194870d651054a"
        ),
        WalletIdentifier.mew.value: FeeConfig(
            fee=0.025, referrer="0x87A265C93D2A92C6EEEC002283bEaEbCC564Bf20"
        ),
    },
}


def _key(value: Enum | str | None) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return value or ""


def _parse_fee_entry(entry, context: str) -> FeeConfig:
    if not isinstance(entry, dict) or "fee" not in entry or "referrer" not in entry:
        raise ConfigError(f"{context} must define 'fee' and 'referrer'")
    raw_fee, referrer = entry["fee"], entry["referrer"]
    if isinstance(raw_fee, bool):
        raise ConfigError(f"{context} has a non-numeric fee: {raw_fee!r}")
    try:
        fee = float(raw_fee)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{context} has a non-numeric fee: {raw_fee!r}") from exc
    if not 0 <= fee <= 1:
        raise ConfigError(f"{context} fee must be a fraction between 0 and 1, got {fee}")
    if referrer is None:
        referrer = ""
    # YAML reads an unquoted 0x... address as a hex integer
    if not isinstance(referrer, str):
        raise ConfigError(f"{context} referrer must be a quoted address string, got {referrer!r}")
    return FeeConfig(fee=fee, referrer=referrer)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="SQE_", extra="allow")

    # 1inch aggregator
    oneinch_base_url: str = "https://api.1inch.io/v5.0/"
    oneinch_api_key: str | None = None
    oneinch_timeout_sec: float = 15.0

    # Quoting
    default_slippage: str = "0.5"  # percent
    gas_limits: GasLimits = GasLimits()

    # Config files
    fee_configs_path: str = "config/fee_configs.yaml"

    # EVM provider (read-only, used for allowance lookups)
    evm_rpc_url: str = "https://cloudflare-eth.com"

    # Logging
    log_level: str = "INFO"

    @field_validator("oneinch_api_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, v):
        if v == "":
            return None
        return v

    def fee_configs(self) -> dict[str, dict[str, FeeConfig]]:
        import yaml

        out = {prov: dict(tiers) for prov, tiers in DEFAULT_FEE_CONFIGS.items()}
        path = Path(self.fee_configs_path)
        if not path.exists():
            return out
        data = yaml.safe_load(path.read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping of provider -> wallet identifier")
        for prov, tiers in data.items():
            if not isinstance(tiers, dict):
                raise ConfigError(f"{path}: entry for provider {prov!r} must be a mapping")
            bucket = out.setdefault(str(prov), {})
            for ident, entry in tiers.items():
                bucket[str(ident)] = _parse_fee_entry(entry, f"{path}: {prov}.{ident}")
        return out

    def fee_config(
        self, provider: ProviderName | str, wallet_identifier: WalletIdentifier | str | None
    ) -> FeeConfig | None:
        if not wallet_identifier:
            return None
        return self.fee_configs().get(_key(provider), {}).get(_key(wallet_identifier))
