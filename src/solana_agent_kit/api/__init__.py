"""HTTP API for agents that can't shell out."""

from solana_agent_kit.api.app import create_app

__all__ = ["create_app"]
