"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.signature import Signature

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["SOLANA_RPC_URL"] = "http://127.0.0.1:8899"
os.environ["AGENTDEX_API_KEY"] = ""
os.environ["DEBUG"] = "false"

from solana_agent_kit.config import get_settings
from solana_agent_kit.wallet import Wallet

SIGNATURE = str(Signature.default())


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; reset between tests so env changes apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_connection() -> MagicMock:
    """RPC connection double that accepts and confirms every transaction."""
    connection = MagicMock()
    connection.get_latest_blockhash = AsyncMock(
        return_value=MagicMock(value=MagicMock(blockhash=Hash.default()))
    )
    connection.send_raw_transaction = AsyncMock(
        return_value=MagicMock(value=Signature.default())
    )
    connection.confirm_transaction = AsyncMock(
        return_value=MagicMock(value=[MagicMock(err=None)])
    )
    connection.get_balance = AsyncMock(return_value=MagicMock(value=0))
    connection.get_account_info = AsyncMock(return_value=MagicMock(value=object()))
    connection.get_minimum_balance_for_rent_exemption = AsyncMock(
        return_value=MagicMock(value=2_282_880)
    )
    connection.close = AsyncMock()
    return connection


@pytest.fixture
def keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def connection() -> MagicMock:
    return make_connection()


@pytest.fixture
def wallet(keypair, connection) -> Wallet:
    """Wallet with a mocked RPC connection."""
    w = Wallet(keypair, "http://127.0.0.1:8899")
    w.connection = connection
    return w
