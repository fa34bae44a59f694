from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from swap_quote_engine.chains.evm import make_web3
from swap_quote_engine.config import NATIVE_TOKEN_ADDRESS, AppSettings
from swap_quote_engine.providers.registry import create_providers, get_quotes
from swap_quote_engine.types import NetworkName, QuoteMetaOptions, QuoteRequest, Token


def parse_tokens(payload: Any) -> list[Token]:
    # Accept a list of token objects, or {"tokens": [...]} as in common token lists
    if isinstance(payload, dict):
        payload = payload.get("tokens", [])
    if not isinstance(payload, list):
        return []
    tokens: list[Token] = []
    for row in payload:
        if not isinstance(row, dict) or not row.get("address"):
            continue
        tokens.append(
            Token(
                address=row["address"],
                symbol=row.get("symbol") or "",
                decimals=int(row["decimals"]) if row.get("decimals") is not None else 18,
                name=row.get("name") or "",
                logo_uri=row.get("logoURI"),
            )
        )
    return tokens


def resolve_token(value: str, tokens: list[Token]) -> Token:
    if value.lower() in ("native", NATIVE_TOKEN_ADDRESS):
        return Token(address=NATIVE_TOKEN_ADDRESS, symbol="native")
    for t in tokens:
        if value.lower() in (t.address.lower(), t.symbol.lower()):
            return t
    return Token(address=value)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Fetch swap quotes and print the transaction plan as JSON")
    p.add_argument("--from-token", required=True, help="Source token address, symbol from --tokens, or 'native'")
    p.add_argument("--to-token", required=True, help="Destination token address, symbol from --tokens, or 'native'")
    p.add_argument("--network", required=True, choices=[n.value for n in NetworkName])
    p.add_argument("--to-network", choices=[n.value for n in NetworkName], help="Defaults to --network")
    p.add_argument("--amount", required=True, type=int, help="Amount in minor units (wei)")
    p.add_argument("--from-address", required=True)
    p.add_argument("--wallet-identifier", default=None)
    p.add_argument("--slippage", default=None, help="Slippage percent, e.g. 0.5")
    p.add_argument("--infinite-approval", action="store_true")
    p.add_argument("--tokens", help="Token list file (JSON array or {'tokens': [...]})")
    p.add_argument("--rpc-url", help="EVM RPC URL for allowance lookups (default: SQE_EVM_RPC_URL)")
    args = p.parse_args(argv)

    settings = AppSettings()
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    tokens = parse_tokens(json.loads(Path(args.tokens).read_text())) if args.tokens else []
    network = NetworkName(args.network)
    request = QuoteRequest(
        from_token=resolve_token(args.from_token, tokens),
        to_token=resolve_token(args.to_token, tokens),
        from_network=network,
        to_network=NetworkName(args.to_network or args.network),
        amount=args.amount,
        from_address=args.from_address,
    )
    meta = QuoteMetaOptions(
        wallet_identifier=args.wallet_identifier,
        slippage=args.slippage,
        infinite_approval=args.infinite_approval,
    )

    w3 = make_web3(args.rpc_url or settings.evm_rpc_url)
    providers = create_providers(w3, network, tokens, settings)
    quotes = get_quotes(providers, request, meta)
    print(json.dumps([q.to_dict() for q in quotes], indent=2))
    if not quotes:
        print("No quote available", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
