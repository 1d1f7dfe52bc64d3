"""Known token and validator tables."""

from fastapi import APIRouter

from solana_agent_kit.aliases import list_tokens, list_validators

router = APIRouter()


@router.get("/tokens")
async def get_tokens() -> dict:
    return list_tokens()


@router.get("/validators")
async def get_validators() -> dict:
    return list_validators()
