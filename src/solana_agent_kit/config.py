"""Application configuration using pydantic-settings.

Environment variables keep the names used by the solana CLI tooling
(SOLANA_RPC_URL, SOLANA_WALLET_PATH) so an existing keygen setup works as is.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_wallet_path() -> str:
    return str(Path.home() / ".config" / "solana" / "id.json")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Solana
    # ======================
    solana_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com", description="Solana RPC URL"
    )
    solana_wallet_path: str = Field(
        default_factory=_default_wallet_path,
        description="Path to solana-keygen JSON key file",
    )

    # ======================
    # HTTP server
    # ======================
    solana_agent_host: str = Field(default="0.0.0.0", description="API server host")
    solana_agent_port: int = Field(default=3030, description="API server port")

    # ======================
    # External services
    # ======================
    jupiter_api_url: str = Field(
        default="https://quote-api.jup.ag/v6", description="Jupiter quote/swap API"
    )
    explorer_tx_url: str = Field(
        default="https://solscan.io/tx/{signature}",
        description="Explorer URL template for transactions",
    )
    http_timeout: float = Field(default=30.0, description="HTTP client timeout (seconds)")
    default_slippage_bps: int = Field(
        default=50, description="Default slippage tolerance in basis points (0.5%)"
    )

    # ======================
    # AgentDEX
    # ======================
    agentdex_api_key: str = Field(default="", description="AgentDEX API key (adx_...)")
    agentdex_base_url: str = Field(
        default="https://api.agentdex.com", description="AgentDEX API base URL"
    )
    agentdex_agent_id: Optional[str] = Field(default=None, description="AgentDEX agent ID")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_agentdex(self) -> bool:
        """Check if an AgentDEX API key is configured."""
        return bool(self.agentdex_api_key)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "rpc_url": self._redact_url(self.solana_rpc_url),
            "wallet_path": self.solana_wallet_path,
            "api_host": self.solana_agent_host,
            "api_port": self.solana_agent_port,
            "jupiter_api_url": self.jupiter_api_url,
            "default_slippage_bps": self.default_slippage_bps,
            "agentdex": {
                "base_url": self.agentdex_base_url,
                "api_key": "***" if self.agentdex_api_key else "(not set)",
                "agent_id": self.agentdex_agent_id or "(not set)",
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact API keys passed as query parameters (e.g. Helius RPC URLs)."""
        if "api-key=" in url:
            base, _ = url.split("api-key=", 1)
            return f"{base}api-key=***"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
