"""Staking endpoints."""

from fastapi import APIRouter, Depends

from solana_agent_kit.api.contracts import DelegateRequest, StakeAccountRequest
from solana_agent_kit.api.deps import get_staking
from solana_agent_kit.stake import Staking, total_staked

router = APIRouter(prefix="/stake")


@router.post("/delegate")
async def delegate(request: DelegateRequest, staking: Staking = Depends(get_staking)) -> dict:
    """Create a stake account and delegate it."""
    result = await staking.stake(request.validator, request.amount)
    return {"success": True, **result.to_dict()}


@router.get("/list")
async def list_stake_accounts(staking: Staking = Depends(get_staking)) -> dict:
    accounts = await staking.get_stake_accounts()
    return {
        "address": staking.wallet.address,
        "stake_accounts": [a.to_dict() for a in accounts],
        "total_staked": total_staked(accounts),
    }


@router.post("/unstake")
async def unstake(request: StakeAccountRequest, staking: Staking = Depends(get_staking)) -> dict:
    result = await staking.unstake(request.stake_account)
    return {"success": True, **result.to_dict()}


@router.post("/withdraw")
async def withdraw(request: StakeAccountRequest, staking: Staking = Depends(get_staking)) -> dict:
    """Withdraw everything from a deactivated stake account."""
    result = await staking.withdraw(request.stake_account)
    return {"success": True, **result.to_dict()}
