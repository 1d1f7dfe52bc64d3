"""HTTP server entry point."""

import logging
from typing import Optional

import uvicorn

from solana_agent_kit.api.app import create_app
from solana_agent_kit.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure root logging (stderr)."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the API server until interrupted."""
    settings = get_settings()
    host = host or settings.solana_agent_host
    port = port or settings.solana_agent_port

    app = create_app()
    logger.info(f"Solana Agent Kit server running on http://{host}:{port}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if settings.debug else "info",
    )


def main():
    """Main entry point."""
    from dotenv import load_dotenv

    load_dotenv()
    configure_logging(get_settings().debug)
    run_server()


if __name__ == "__main__":
    main()
