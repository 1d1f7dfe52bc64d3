"""AgentDEX API integration.

Provides swap routing, limit orders, portfolio tracking and price feeds
through the AgentDEX API (https://agentdex.com). Every call is a direct
passthrough: JSON in, JSON out, non-success statuses raise AgentDEXError.

Usage:
    client = AgentDEXClient(api_key="adx_xxx")
    quote = await client.get_quote(input_mint, output_mint, amount)
"""

import logging
from typing import Any, Optional, Union

import httpx

from solana_agent_kit.config import get_settings
from solana_agent_kit.errors import AgentDEXError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.agentdex.com"


class AgentDEXClient:
    """Bearer-authenticated client for the AgentDEX REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        agent_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError('AgentDEX: api_key is required (e.g. "adx_xxx")')
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.agent_id = agent_id
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "AgentDEXClient":
        """Create a client from AGENTDEX_* settings."""
        settings = get_settings()
        return cls(
            api_key=settings.agentdex_api_key,
            base_url=settings.agentdex_base_url,
            agent_id=settings.agentdex_agent_id,
        )

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=get_settings().http_timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, params=params, json=body)

        if not response.is_success:
            logger.warning(f"AgentDEX {method} {path} failed: {response.status_code}")
            raise AgentDEXError(method, path, response.status_code, response.text)

        return response.json()

    # ======================
    # Quotes & Swaps
    # ======================

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: Union[int, str],
        slippage_bps: Optional[int] = None,
    ) -> dict:
        """Get a swap quote.

        Args:
            input_mint: Source token mint address
            output_mint: Destination token mint address
            amount: Amount in smallest unit
            slippage_bps: Slippage tolerance in basis points
                (default: DEFAULT_SLIPPAGE_BPS)
        """
        if slippage_bps is None:
            slippage_bps = get_settings().default_slippage_bps
        return await self._request(
            "GET",
            "/api/v1/quote",
            params={
                "inputMint": input_mint,
                "outputMint": output_mint,
                "amount": str(amount),
                "slippageBps": str(slippage_bps),
            },
        )

    async def swap(
        self,
        input_mint: str,
        output_mint: str,
        amount: Union[int, str],
        slippage_bps: Optional[int] = None,
    ) -> dict:
        """Execute a swap through AgentDEX."""
        if slippage_bps is None:
            slippage_bps = get_settings().default_slippage_bps
        return await self._request(
            "POST",
            "/api/v1/swap",
            body={
                "inputMint": input_mint,
                "outputMint": output_mint,
                "amount": str(amount),
                "slippageBps": slippage_bps,
                "agentId": self.agent_id,
            },
        )

    # ======================
    # Portfolio & Prices
    # ======================

    async def get_portfolio(self, wallet: str) -> dict:
        """Token balances and USD values for a wallet."""
        return await self._request("GET", f"/api/v1/portfolio/{wallet}")

    async def get_prices(self, mints: Optional[list[str]] = None) -> list[dict]:
        """Get token prices.

        A single mint returns just that price (as a one-element list);
        otherwise all tracked prices are returned.
        """
        if mints and len(mints) == 1:
            price = await self._request("GET", f"/api/v1/prices/{mints[0]}")
            return [price]
        return await self._request("GET", "/api/v1/prices")

    # ======================
    # Limit Orders
    # ======================

    async def create_limit_order(
        self,
        input_mint: str,
        output_mint: str,
        amount: Union[int, str],
        target_price: float,
    ) -> dict:
        """Place a limit order."""
        return await self._request(
            "POST",
            "/api/v1/limit-order",
            body={
                "inputMint": input_mint,
                "outputMint": output_mint,
                "amount": str(amount),
                "targetPrice": target_price,
            },
        )

    async def get_limit_orders(self) -> list[dict]:
        """List active limit orders for the authenticated agent."""
        return await self._request("GET", "/api/v1/limit-order")

    async def cancel_limit_order(self, order_id: str) -> dict:
        """Cancel a limit order by ID."""
        return await self._request("DELETE", f"/api/v1/limit-order/{order_id}")

    # ======================
    # Agent Management
    # ======================

    async def register(self) -> dict:
        """Register this agent and remember the assigned agent ID."""
        info = await self._request("POST", "/api/v1/agents/register")
        self.agent_id = info.get("id")
        logger.info(f"Registered AgentDEX agent {self.agent_id}")
        return info

    async def get_agent_info(self) -> dict:
        """Info about the currently authenticated agent."""
        return await self._request("GET", "/api/v1/agents/me")
