from __future__ import annotations

from typing import Protocol, runtime_checkable

from swap_quote_engine.types import NetworkName, ProviderName, QuoteMetaOptions, QuoteRequest, QuoteResult


@runtime_checkable
class QuoteProvider(Protocol):
    """Anything that can turn a swap request into an executable transaction plan."""

    name: ProviderName

    @classmethod
    def is_supported(cls, network: NetworkName) -> bool: ...

    def get_quote(self, request: QuoteRequest, meta: QuoteMetaOptions) -> QuoteResult | None:
        """Return the ordered transactions and amounts, or None when no quote is available."""
        ...
