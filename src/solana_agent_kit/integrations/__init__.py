"""Third-party service integrations."""

from solana_agent_kit.integrations.agentdex import AgentDEXClient

__all__ = ["AgentDEXClient"]
