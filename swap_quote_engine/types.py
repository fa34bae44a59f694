from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NetworkName(str, Enum):
    Ethereum = "ETH"
    Binance = "BNB"
    Matic = "MATIC"
    Optimism = "OP"
    Arbitrum = "ARB"
    Avalanche = "AVAX"
    Bitcoin = "BTC"
    Polkadot = "DOT"


class ProviderName(str, Enum):
    ONE_INCH = "oneInch"


class WalletIdentifier(str, Enum):
    enkrypt = "enkrypt"
    mew = "mew"


@dataclass(frozen=True)
class Token:
    address: str
    symbol: str = ""
    decimals: int = 18
    name: str = ""
    logo_uri: str | None = None
    networks: tuple[NetworkName, ...] = ()


@dataclass(frozen=True)
class QuoteRequest:
    from_token: Token
    to_token: Token
    from_network: NetworkName
    to_network: NetworkName
    amount: int  # minor units
    from_address: str


@dataclass(frozen=True)
class QuoteMetaOptions:
    wallet_identifier: WalletIdentifier | str | None = None
    slippage: str | None = None  # percent, e.g. "0.5"
    infinite_approval: bool = False


@dataclass(frozen=True)
class FeeConfig:
    fee: float  # fraction, 0.01 == 1%
    referrer: str


@dataclass(frozen=True)
class Transaction:
    to: str
    value: str  # hex
    data: str
    gas_limit: str  # hex

    def to_dict(self) -> dict[str, str]:
        return {"to": self.to, "value": self.value, "data": self.data, "gasLimit": self.gas_limit}


@dataclass(frozen=True)
class QuoteResult:
    transactions: list[Transaction] = field(default_factory=list)
    to_token_amount: int = 0
    from_token_amount: int = 0

    def to_dict(self) -> dict:
        return {
            "transactions": [tx.to_dict() for tx in self.transactions],
            "toTokenAmount": str(self.to_token_amount),
            "fromTokenAmount": str(self.from_token_amount),
        }
