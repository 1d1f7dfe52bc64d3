"""Wallet endpoints."""

from fastapi import APIRouter, Depends

from solana_agent_kit.api.deps import get_wallet
from solana_agent_kit.wallet import Wallet

router = APIRouter(prefix="/wallet")


@router.get("/address")
async def get_address(wallet: Wallet = Depends(get_wallet)) -> dict:
    return {"address": wallet.address}


@router.get("/balance")
async def get_balance(wallet: Wallet = Depends(get_wallet)) -> dict:
    """SOL balance of the loaded wallet."""
    balance = await wallet.get_balance()
    return {"address": wallet.address, "balance": balance, "unit": "SOL"}


@router.get("/tokens")
async def get_tokens(wallet: Wallet = Depends(get_wallet)) -> dict:
    """All non-zero SPL token balances."""
    tokens = await wallet.get_all_token_balances()
    return {"address": wallet.address, "tokens": tokens}
