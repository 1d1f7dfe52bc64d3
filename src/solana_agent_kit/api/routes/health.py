"""Health check endpoints."""

from fastapi import APIRouter, Request

from solana_agent_kit import __version__
from solana_agent_kit.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Basic health check endpoint."""
    wallet = getattr(request.app.state, "wallet", None)
    return {
        "status": "healthy",
        "service": "solana-agent-kit",
        "wallet": wallet.address if wallet else None,
        "version": __version__,
    }


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration info."""
    wallet = getattr(request.app.state, "wallet", None)
    return {
        "status": "healthy",
        "service": "solana-agent-kit",
        "version": __version__,
        "wallet": wallet.address if wallet else None,
        "config": get_settings().get_safe_dict(),
    }
