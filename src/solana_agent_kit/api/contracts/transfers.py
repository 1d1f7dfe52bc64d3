"""Transfer request contracts."""

from decimal import Decimal

from pydantic import BaseModel, Field


class SolTransferRequest(BaseModel):
    """Send SOL."""

    to: str = Field(..., description="Recipient address")
    amount: Decimal = Field(..., gt=0, description="Amount in SOL")


class TokenTransferRequest(BaseModel):
    """Send an SPL token."""

    to: str = Field(..., description="Recipient wallet address")
    amount: int = Field(..., gt=0, description="Amount in token base units")
    mint: str = Field(..., description="Token mint address or symbol")
