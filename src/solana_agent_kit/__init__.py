"""Solana Agent Kit.

A lightweight toolkit for AI agents to interact with Solana:
wallet management, Jupiter swaps, transfers and native staking.

Example:
    wallet = Wallet.from_file("~/.config/solana/id.json")
    balance = await wallet.get_balance()

    swapper = Swapper(wallet)
    result = await swapper.swap("SOL", "USDC", 1_000_000_000)  # 1 SOL

    await Transfer(wallet).send_sol("recipient...", "0.1")
"""

from solana_agent_kit.aliases import TOKENS, VALIDATORS
from solana_agent_kit.integrations.agentdex import AgentDEXClient
from solana_agent_kit.stake import Staking
from solana_agent_kit.swap import Swapper
from solana_agent_kit.transfer import Transfer
from solana_agent_kit.wallet import DEFAULT_RPC, Wallet

__version__ = "1.0.0"

__all__ = [
    "Wallet",
    "Swapper",
    "Transfer",
    "Staking",
    "AgentDEXClient",
    "TOKENS",
    "VALIDATORS",
    "DEFAULT_RPC",
]
