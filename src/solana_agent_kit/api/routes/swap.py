"""Swap and price endpoints."""

import logging

from fastapi import APIRouter, Depends, Query

from solana_agent_kit.api.contracts import SwapRequest
from solana_agent_kit.api.deps import get_swapper
from solana_agent_kit.swap import Swapper

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/swap/quote")
async def get_quote(request: SwapRequest, swapper: Swapper = Depends(get_swapper)) -> dict:
    """Get a swap quote. Nothing is signed or sent."""
    quote = await swapper.get_quote(
        request.from_token, request.to_token, request.amount, request.slippage
    )
    return {"success": True, "quote": quote.to_dict()}


@router.post("/swap/execute")
async def execute_swap(request: SwapRequest, swapper: Swapper = Depends(get_swapper)) -> dict:
    """Quote, sign and submit a swap."""
    logger.info(f"Swap requested: {request.amount} {request.from_token} -> {request.to_token}")
    result = await swapper.swap(
        request.from_token, request.to_token, request.amount, request.slippage
    )
    return {"success": True, **result.to_dict()}


@router.get("/price")
async def get_price(
    token: str = Query(..., description="Token symbol or mint"),
    swapper: Swapper = Depends(get_swapper),
) -> dict:
    """Token price in USDC."""
    price = await swapper.get_price(token)
    return {"token": token, "price": price, "unit": "USDC"}
