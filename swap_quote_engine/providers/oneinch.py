from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from loguru import logger
from web3 import Web3

from swap_quote_engine.aggregators import oneinch as agg_oneinch
from swap_quote_engine.config import NATIVE_TOKEN_ADDRESS, AppSettings
from swap_quote_engine.execution.approvals import get_allowance_transactions
from swap_quote_engine.types import (
    NetworkName,
    ProviderName,
    QuoteMetaOptions,
    QuoteRequest,
    QuoteResult,
    Token,
    Transaction,
)


@dataclass(frozen=True)
class NetworkDescriptor:
    approval_address: str
    chain_id: int


SUPPORTED_NETWORKS: dict[NetworkName, NetworkDescriptor] = {
    NetworkName.Ethereum: NetworkDescriptor("0x1111111254eeb25477b68fb85ed929f73a960582", 1),
    NetworkName.Binance: NetworkDescriptor("0x1111111254eeb25477b68fb85ed929f73a960582", 56),
    NetworkName.Matic: NetworkDescriptor("0x1111111254eeb25477b68fb85ed929f73a960582", 137),
    NetworkName.Optimism: NetworkDescriptor("0x1111111254eeb25477b68fb85ed929f73a960582", 10),
}

ApprovalBuilder = Callable[..., list[Transaction]]


class OneInchProvider:
    name = ProviderName.ONE_INCH

    def __init__(
        self,
        w3: Web3,
        network: NetworkName,
        token_list: list[Token],
        settings: AppSettings | None = None,
        approval_builder: ApprovalBuilder = get_allowance_transactions,
    ):
        self.w3 = w3
        self.network = network
        self.token_list = list(token_list)
        self.settings = settings or AppSettings()
        self.approval_builder = approval_builder

    @classmethod
    def is_supported(cls, network: NetworkName) -> bool:
        return network in SUPPORTED_NETWORKS

    def get_quote(self, request: QuoteRequest, meta: QuoteMetaOptions) -> QuoteResult | None:
        if not (self.is_supported(request.from_network) and self.is_supported(request.to_network)):
            logger.debug(
                "1inch does not support {} -> {}; no quote",
                request.from_network,
                request.to_network,
            )
            return None

        network = SUPPORTED_NETWORKS[request.from_network]
        fee_config = self.settings.fee_config(self.name, meta.wallet_identifier)
        params = agg_oneinch.build_swap_params(
            from_token_address=request.from_token.address,
            to_token_address=request.to_token.address,
            amount=request.amount,
            from_address=request.from_address,
            slippage=meta.slippage,
            fee_config=fee_config,
            default_slippage=self.settings.default_slippage,
        )
        response = agg_oneinch.get_swap(
            base_url=self.settings.oneinch_base_url,
            chain_id=network.chain_id,
            params=params,
            api_key=self.settings.oneinch_api_key,
            timeout=self.settings.oneinch_timeout_sec,
        )
        if isinstance(response, agg_oneinch.OneInchError):
            logger.error("1inch rejected quote request: {} {}", response.error, response.description)
            return None

        transactions: list[Transaction] = []
        if request.from_token.address.lower() != NATIVE_TOKEN_ADDRESS:
            approvals = self.approval_builder(
                infinite_approval=meta.infinite_approval,
                spender=network.approval_address,
                w3=self.w3,
                amount=request.amount,
                from_address=request.from_address,
                from_token=request.from_token,
                gas_limit=self.settings.gas_limits.approval,
            )
            transactions.extend(approvals)
        transactions.append(
            Transaction(
                to=response.tx.to,
                value=Web3.to_hex(response.tx.value),
                data=response.tx.data,
                gas_limit=Web3.to_hex(self.settings.gas_limits.swap),
            )
        )
        logger.info(
            "1inch quote on chain {}: {} {} -> {} {} ({} tx)",
            network.chain_id,
            response.from_token_amount,
            request.from_token.symbol or request.from_token.address,
            response.to_token_amount,
            request.to_token.symbol or request.to_token.address,
            len(transactions),
        )
        return QuoteResult(
            transactions=transactions,
            to_token_amount=response.to_token_amount,
            from_token_amount=response.from_token_amount,
        )
