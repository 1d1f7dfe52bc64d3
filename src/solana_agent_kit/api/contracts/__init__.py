"""Request contracts for the HTTP API."""

from solana_agent_kit.api.contracts.stake import DelegateRequest, StakeAccountRequest
from solana_agent_kit.api.contracts.swaps import SwapRequest
from solana_agent_kit.api.contracts.transfers import SolTransferRequest, TokenTransferRequest

__all__ = [
    "SwapRequest",
    "SolTransferRequest",
    "TokenTransferRequest",
    "DelegateRequest",
    "StakeAccountRequest",
]
