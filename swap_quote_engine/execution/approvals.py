from __future__ import annotations

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector
from loguru import logger
from web3 import Web3

from swap_quote_engine.config import MAX_UINT256, GasLimits
from swap_quote_engine.types import Token, Transaction

ERC20_ABI = [
    {
        "constant": True,
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

APPROVE_SELECTOR = function_signature_to_4byte_selector("approve(address,uint256)")


def encode_approve(spender: str, value: int) -> str:
    args = encode(["address", "uint256"], [Web3.to_checksum_address(spender), int(value)])
    return "0x" + (APPROVE_SELECTOR + args).hex()


def build_approval_transaction(token_address: str, spender: str, value: int, gas_limit: int) -> Transaction:
    return Transaction(
        to=token_address,
        value=Web3.to_hex(0),
        data=encode_approve(spender, value),
        gas_limit=Web3.to_hex(gas_limit),
    )


def get_allowance(w3: Web3, token_address: str, owner: str, spender: str) -> int:
    erc20 = w3.eth.contract(address=Web3.to_checksum_address(token_address), abi=ERC20_ABI)
    return int(
        erc20.functions.allowance(
            Web3.to_checksum_address(owner), Web3.to_checksum_address(spender)
        ).call()
    )


def get_allowance_transactions(
    *,
    infinite_approval: bool,
    spender: str,
    w3: Web3,
    amount: int,
    from_address: str,
    from_token: Token,
    gas_limit: int | None = None,
) -> list[Transaction]:
    """
    Approvals needed before `spender` can pull `amount` of `from_token` from `from_address`.

    Returns [] when the current allowance already covers the amount. A non-zero but
    insufficient allowance is reset to zero first, since tokens such as USDT revert
    when an existing allowance is changed directly.
    """
    gas = gas_limit if gas_limit is not None else GasLimits().approval
    current = get_allowance(w3, from_token.address, from_address, spender)
    if current >= amount:
        logger.debug("Allowance {} covers {} for {}; no approval needed", current, amount, from_token.address)
        return []

    value = MAX_UINT256 if infinite_approval else int(amount)
    txs: list[Transaction] = []
    if current > 0:
        txs.append(build_approval_transaction(from_token.address, spender, 0, gas))
    txs.append(build_approval_transaction(from_token.address, spender, value, gas))
    logger.debug(
        "Built {} approval tx(s) for {} (current allowance {}, approving {})",
        len(txs),
        from_token.address,
        current,
        "infinite" if infinite_approval else value,
    )
    return txs
