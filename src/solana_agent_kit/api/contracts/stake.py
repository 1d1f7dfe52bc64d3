"""Staking request contracts."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class DelegateRequest(BaseModel):
    """Stake SOL to a validator."""

    validator: str = Field(..., description="Validator name or vote account")
    amount: Decimal = Field(..., gt=0, description="Amount in SOL")


class StakeAccountRequest(BaseModel):
    """Operate on an existing stake account."""

    model_config = ConfigDict(populate_by_name=True)

    stake_account: str = Field(..., alias="stakeAccount", description="Stake account address")
