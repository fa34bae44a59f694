from __future__ import annotations

from typing import Any

import pytest

USER = "0xAbCdEf0123456789aBCdef0123456789AbCdEf01"
USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
DAI = "0x6B175474E89094C44Da98b954EedcdeCB5BE3830"
ONEINCH_ROUTER = "0x1111111254eeb25477b68fb85ed929f73a960582"


class FakeResp:
    def __init__(self, payload: Any, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self):
        if not self.ok:
            import requests

            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeCall:
    def __init__(self, value: int):
        self.value = value

    def call(self):
        return self.value


class FakeErc20Functions:
    def __init__(self, allowance: int, calls: list):
        self._allowance = allowance
        self._calls = calls

    def allowance(self, owner, spender):
        self._calls.append((owner, spender))
        return FakeCall(self._allowance)


class FakeErc20:
    def __init__(self, allowance: int, calls: list):
        self.functions = FakeErc20Functions(allowance, calls)


class FakeEth:
    def __init__(self, allowance: int):
        self.allowance = allowance
        self.contracts: list[str] = []
        self.allowance_calls: list[tuple[str, str]] = []

    def contract(self, address=None, abi=None):
        self.contracts.append(address)
        return FakeErc20(self.allowance, self.allowance_calls)


class FakeWeb3:
    """Just enough of Web3 for ERC20 allowance reads."""

    def __init__(self, allowance: int = 0):
        self.eth = FakeEth(allowance)


def swap_payload(to_amount: str = "2500000000", from_amount: str = "1000000000000000000", value: str = "0"):
    return {
        "fromToken": {"address": "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"},
        "toToken": {"address": USDT},
        "toTokenAmount": to_amount,
        "fromTokenAmount": from_amount,
        "protocols": [],
        "tx": {
            "from": USER,
            "to": ONEINCH_ROUTER,
            "data": "0x12aa3caf0000",
            "value": value,
            "gas": 0,
            "gasPrice": "1000",
        },
    }


@pytest.fixture
def settings(tmp_path):
    from swap_quote_engine.config import AppSettings

    return AppSettings(fee_configs_path=str(tmp_path / "fee_configs.yaml"))


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get; set `.response` to control the reply and inspect `.calls`."""

    class Recorder:
        def __init__(self):
            self.calls: list[dict[str, Any]] = []
            self.response = FakeResp(swap_payload())

        def __call__(self, url, params=None, headers=None, timeout=None):
            self.calls.append({"url": url, "params": params or {}, "headers": headers or {}, "timeout": timeout})
            return self.response

    rec = Recorder()
    monkeypatch.setattr("requests.get", rec)
    return rec
