from __future__ import annotations

from loguru import logger
from web3 import Web3


def make_web3(rpc_url: str) -> Web3:
    """Read-only Web3 client; only used for allowance lookups, never for sending."""
    if rpc_url.startswith("ws"):
        wsprov = getattr(Web3, "LegacyWebSocketProvider", None) or getattr(Web3, "WebsocketProvider", None)
        if wsprov is None:
            raise RuntimeError(
                "WebSocket provider not available in this web3 build. Use an HTTP RPC URL instead."
            )
        w3 = Web3(wsprov(rpc_url))
    else:
        w3 = Web3(Web3.HTTPProvider(rpc_url))
    logger.info("Connected to EVM provider: {}", rpc_url)
    return w3
