"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from solana_agent_kit import __version__
from solana_agent_kit.config import get_settings
from solana_agent_kit.errors import AgentKitError, InvalidKeyError, WalletNotFoundError
from solana_agent_kit.wallet import Wallet

logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the wallet on startup, close its connection on shutdown."""
    settings = get_settings()
    if app.state.wallet is None:
        try:
            app.state.wallet = Wallet.from_file(
                settings.solana_wallet_path, settings.solana_rpc_url
            )
            logger.info(f"Wallet loaded: {app.state.wallet.address}")
        except (WalletNotFoundError, InvalidKeyError, ValueError, OSError) as e:
            logger.warning(f"{e}. Server will start but wallet operations will fail.")
    yield
    if app.state.wallet is not None:
        await app.state.wallet.close()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    missing = [
        str(err["loc"][-1])
        for err in exc.errors()
        if err.get("type") == "missing" and err.get("loc")
    ]
    if missing:
        return _error(f"Missing required fields: {', '.join(missing)}", 400)
    details = "; ".join(
        f"{err['loc'][-1]}: {err['msg']}" for err in exc.errors() if err.get("loc")
    )
    return _error(f"Invalid request: {details}", 400)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return _error(message, exc.status_code)


async def agent_kit_error_handler(request: Request, exc: AgentKitError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return _error(str(exc), 500)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed")
    return _error(str(exc), 500)


def create_app(wallet: Optional[Wallet] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        wallet: Pre-loaded wallet; when omitted the wallet is read from
            SOLANA_WALLET_PATH at startup
    """
    settings = get_settings()

    app = FastAPI(
        title="Solana Agent Kit API",
        description="REST API for AI agents to interact with Solana",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug and not settings.is_production,
    )
    app.state.wallet = wallet

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(AgentKitError, agent_kit_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    from solana_agent_kit.api.routes import catalog, health, stake, swap, transfer
    from solana_agent_kit.api.routes import wallet as wallet_routes

    app.include_router(health.router, tags=["Health"])
    app.include_router(wallet_routes.router, tags=["Wallet"])
    app.include_router(swap.router, tags=["Swap"])
    app.include_router(transfer.router, tags=["Transfer"])
    app.include_router(stake.router, tags=["Stake"])
    app.include_router(catalog.router, tags=["Catalog"])

    return app
