"""Transfer endpoints."""

import logging

from fastapi import APIRouter, Depends

from solana_agent_kit.api.contracts import SolTransferRequest, TokenTransferRequest
from solana_agent_kit.api.deps import get_transfer
from solana_agent_kit.transfer import Transfer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transfer")


@router.post("/sol")
async def transfer_sol(
    request: SolTransferRequest, transfer: Transfer = Depends(get_transfer)
) -> dict:
    result = await transfer.send_sol(request.to, request.amount)
    return {"success": True, **result.to_dict()}


@router.post("/token")
async def transfer_token(
    request: TokenTransferRequest, transfer: Transfer = Depends(get_transfer)
) -> dict:
    """Send SPL tokens; amount is in base units."""
    result = await transfer.send_token(request.to, request.amount, request.mint)
    return {"success": True, **result.to_dict()}
