from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from web3 import Web3

from swap_quote_engine.config import AppSettings
from swap_quote_engine.providers.base import QuoteProvider
from swap_quote_engine.providers.oneinch import OneInchProvider
from swap_quote_engine.types import (
    NetworkName,
    ProviderName,
    QuoteMetaOptions,
    QuoteRequest,
    QuoteResult,
    Token,
)

PROVIDERS: dict[ProviderName, type] = {
    ProviderName.ONE_INCH: OneInchProvider,
}


@dataclass
class ProviderQuote:
    provider: ProviderName
    quote: QuoteResult

    def to_dict(self) -> dict:
        return {"provider": self.provider.value, **self.quote.to_dict()}


def supported_providers(network: NetworkName) -> list[ProviderName]:
    return [name for name, cls in PROVIDERS.items() if cls.is_supported(network)]


def create_providers(
    w3: Web3,
    network: NetworkName,
    token_list: list[Token],
    settings: AppSettings | None = None,
) -> list[QuoteProvider]:
    settings = settings or AppSettings()
    return [PROVIDERS[name](w3, network, token_list, settings) for name in supported_providers(network)]


def get_quotes(
    providers: list[QuoteProvider], request: QuoteRequest, meta: QuoteMetaOptions
) -> list[ProviderQuote]:
    """Ask each provider in turn; providers without a quote are skipped, failures propagate."""
    out: list[ProviderQuote] = []
    for provider in providers:
        quote = provider.get_quote(request, meta)
        if quote is None:
            logger.debug("{} returned no quote", provider.name.value)
            continue
        out.append(ProviderQuote(provider=provider.name, quote=quote))
    if not out:
        logger.warning(
            "No quotes for {} -> {} from {} provider(s)",
            request.from_token.address,
            request.to_token.address,
            len(providers),
        )
    return out
