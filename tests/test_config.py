from __future__ import annotations

import pytest

from swap_quote_engine.config import AppSettings, ConfigError
from swap_quote_engine.types import FeeConfig, ProviderName, WalletIdentifier


def test_settings_load():
    s = AppSettings()
    assert s.oneinch_base_url.endswith("/")
    assert s.default_slippage == "0.5"
    assert s.gas_limits.swap == 1_000_000
    assert s.gas_limits.approval == 300_000


def test_empty_env_coercion(monkeypatch):
    monkeypatch.setenv("SQE_ONEINCH_API_KEY", "")
    s = AppSettings()
    assert s.oneinch_api_key is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SQE_ONEINCH_BASE_URL", "https://api.1inch.dev/swap/v5.2")
    monkeypatch.setenv("SQE_DEFAULT_SLIPPAGE", "1")
    s = AppSettings()
    assert s.oneinch_base_url == "https://api.1inch.dev/swap/v5.2"
    assert s.default_slippage == "1"


def test_builtin_fee_configs(tmp_path):
    s = AppSettings(fee_configs_path=str(tmp_path / "missing.yaml"))
    cfg = s.fee_config(ProviderName.ONE_INCH, WalletIdentifier.enkrypt)
    assert cfg == FeeConfig(fee=0.00875, referrer="0x551d9d8eb02e1c713009da8f7c194870d651054a")
    assert s.fee_config("oneInch", "mew").fee == 0.025
    assert s.fee_config(ProviderName.ONE_INCH, None) is None
    assert s.fee_config(ProviderName.ONE_INCH, "someone-else") is None


def test_fee_configs_yaml_overrides_and_extends(tmp_path):
    path = tmp_path / "fee_configs.yaml"
    path.write_text(
        """
oneInch:
  enkrypt:
    fee: 0.005
    referrer: "0x000000000000000000000000000000000000dEaD"
  partner:
    fee: 0.01
    referrer: "0x1234567890123456789012345678901234567890"
        """.strip()
    )
    s = AppSettings(fee_configs_path=str(path))
    assert s.fee_config(ProviderName.ONE_INCH, WalletIdentifier.enkrypt).fee == 0.005
    assert s.fee_config(ProviderName.ONE_INCH, "partner").referrer == "0x1234567890123456789012345678901234567890"
    # Untouched defaults survive
    assert s.fee_config(ProviderName.ONE_INCH, WalletIdentifier.mew).fee == 0.025


@pytest.mark.parametrize(
    "body",
    [
        "oneInch:\n  enkrypt:\n    fee: 0.01\n",
        "oneInch:\n  enkrypt:\n    fee: 2\n    referrer: '0x0'\n",
        "oneInch:\n  enkrypt:\n    fee: lots\n    referrer: '0x0'\n",
        "oneInch: [1, 2]\n",
        "- just a list\n",
    ],
)
def test_fee_configs_yaml_invalid(tmp_path, body):
    path = tmp_path / "fee_configs.yaml"
    path.write_text(body)
    s = AppSettings(fee_configs_path=str(path))
    with pytest.raises(ConfigError):
        s.fee_configs()


def test_fee_configs_yaml_unquoted_referrer_rejected(tmp_path):
    path = tmp_path / "fee_configs.yaml"
    # Unquoted, YAML turns the address into a hex integer
    path.write_text("oneInch:\n  partner:\n    fee: 0.01\n    referrer: 0x1234567890123456789012345678901234567890\n")
    s = AppSettings(fee_configs_path=str(path))
    with pytest.raises(ConfigError):
        s.fee_config(ProviderName.ONE_INCH, "partner")


def test_fee_configs_yaml_boolean_fee_rejected(tmp_path):
    path = tmp_path / "fee_configs.yaml"
    path.write_text("oneInch:\n  partner:\n    fee: true\n    referrer: '0x1234567890123456789012345678901234567890'\n")
    s = AppSettings(fee_configs_path=str(path))
    with pytest.raises(ConfigError):
        s.fee_configs()


def test_fee_configs_yaml_quoted_referrer_kept_verbatim(tmp_path):
    path = tmp_path / "fee_configs.yaml"
    path.write_text("oneInch:\n  partner:\n    fee: 0\n    referrer: '0x1234567890123456789012345678901234567890'\n")
    s = AppSettings(fee_configs_path=str(path))
    cfg = s.fee_config(ProviderName.ONE_INCH, "partner")
    assert cfg == FeeConfig(fee=0.0, referrer="0x1234567890123456789012345678901234567890")
