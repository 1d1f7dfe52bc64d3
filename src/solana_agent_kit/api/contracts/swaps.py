"""Swap request contracts."""

from pydantic import BaseModel, ConfigDict, Field

from solana_agent_kit.config import get_settings


class SwapRequest(BaseModel):
    """Request for a swap quote or execution."""

    model_config = ConfigDict(populate_by_name=True)

    from_token: str = Field(..., alias="from", description="Source token symbol or mint")
    to_token: str = Field(..., alias="to", description="Destination token symbol or mint")
    amount: int = Field(..., gt=0, description="Input amount in base units")
    slippage: int = Field(
        default_factory=lambda: get_settings().default_slippage_bps,
        ge=0,
        le=10000,
        description="Slippage tolerance in basis points (default: DEFAULT_SLIPPAGE_BPS)",
    )
