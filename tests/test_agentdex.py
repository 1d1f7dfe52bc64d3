"""Tests for the AgentDEX client."""

import json

import httpx
import pytest

from solana_agent_kit.errors import AgentDEXError
from solana_agent_kit.integrations.agentdex import DEFAULT_BASE_URL, AgentDEXClient


class RecordingTransport:
    """Serves one canned response and records every request."""

    def __init__(self, status_code=200, payload=None):
        self.requests = []
        self.status_code = status_code
        self.payload = {} if payload is None else payload

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(recorder, **kwargs) -> AgentDEXClient:
    return AgentDEXClient(
        api_key="adx_test",
        base_url="https://dex.test/",
        transport=recorder.transport,
        **kwargs,
    )


class TestAgentDEXClientInit:

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            AgentDEXClient(api_key="")

    def test_default_base_url(self):
        client = AgentDEXClient(api_key="adx_test")
        assert client.base_url == DEFAULT_BASE_URL

    def test_trailing_slash_stripped(self):
        client = AgentDEXClient(api_key="adx_test", base_url="https://dex.test/")
        assert client.base_url == "https://dex.test"

    def test_from_settings(self, monkeypatch):
        from solana_agent_kit.config import get_settings

        monkeypatch.setenv("AGENTDEX_API_KEY", "adx_env")
        monkeypatch.setenv("AGENTDEX_AGENT_ID", "agent-7")
        get_settings.cache_clear()

        client = AgentDEXClient.from_settings()

        assert client.api_key == "adx_env"
        assert client.agent_id == "agent-7"


class TestAgentDEXRequests:
    """Tests for endpoint passthrough."""

    @pytest.mark.asyncio
    async def test_bearer_auth(self):
        recorder = RecordingTransport(payload={"outAmount": "10"})
        await make_client(recorder).get_quote("MintA", "MintB", 100)

        assert recorder.last.headers["Authorization"] == "Bearer adx_test"

    @pytest.mark.asyncio
    async def test_quote_params(self):
        recorder = RecordingTransport(payload={"outAmount": "10"})
        quote = await make_client(recorder).get_quote("MintA", "MintB", 100, slippage_bps=75)

        assert recorder.last.method == "GET"
        assert recorder.last.url.path == "/api/v1/quote"
        assert dict(recorder.last.url.params) == {
            "inputMint": "MintA",
            "outputMint": "MintB",
            "amount": "100",
            "slippageBps": "75",
        }
        assert quote == {"outAmount": "10"}

    @pytest.mark.asyncio
    async def test_swap_includes_agent_id(self):
        recorder = RecordingTransport(payload={"signature": "sig"})
        await make_client(recorder, agent_id="agent-1").swap("MintA", "MintB", 5)

        body = json.loads(recorder.last.content)
        assert recorder.last.url.path == "/api/v1/swap"
        assert body["agentId"] == "agent-1"
        assert body["amount"] == "5"
        assert body["slippageBps"] == 50

    @pytest.mark.asyncio
    async def test_portfolio_path(self):
        recorder = RecordingTransport(payload={"tokens": []})
        await make_client(recorder).get_portfolio("Wallet111")

        assert recorder.last.url.path == "/api/v1/portfolio/Wallet111"

    @pytest.mark.asyncio
    async def test_single_price_is_wrapped(self):
        recorder = RecordingTransport(payload={"mint": "MintA", "price": 1.5})
        prices = await make_client(recorder).get_prices(["MintA"])

        assert recorder.last.url.path == "/api/v1/prices/MintA"
        assert prices == [{"mint": "MintA", "price": 1.5}]

    @pytest.mark.asyncio
    async def test_all_prices(self):
        recorder = RecordingTransport(payload=[{"mint": "A"}, {"mint": "B"}])
        prices = await make_client(recorder).get_prices()

        assert recorder.last.url.path == "/api/v1/prices"
        assert len(prices) == 2

    @pytest.mark.asyncio
    async def test_limit_order_lifecycle(self):
        recorder = RecordingTransport(payload={"id": "order-1"})
        client = make_client(recorder)

        await client.create_limit_order("MintA", "MintB", 1000, 2.5)
        created = recorder.last
        await client.cancel_limit_order("order-1")
        cancelled = recorder.last

        assert created.method == "POST"
        assert created.url.path == "/api/v1/limit-order"
        assert json.loads(created.content)["targetPrice"] == 2.5
        assert cancelled.method == "DELETE"
        assert cancelled.url.path == "/api/v1/limit-order/order-1"

    @pytest.mark.asyncio
    async def test_register_sets_agent_id(self):
        recorder = RecordingTransport(payload={"id": "agent-42", "name": "bot"})
        client = make_client(recorder)

        info = await client.register()

        assert recorder.last.url.path == "/api/v1/agents/register"
        assert client.agent_id == "agent-42"
        assert info["name"] == "bot"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        recorder = RecordingTransport(status_code=401, payload={"error": "bad key"})

        with pytest.raises(AgentDEXError) as exc_info:
            await make_client(recorder).get_agent_info()

        error = exc_info.value
        assert error.status_code == 401
        assert error.method == "GET"
        assert error.path == "/api/v1/agents/me"
        assert "bad key" in error.body
