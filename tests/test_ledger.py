"""Tests for transaction submission and account lookups."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from solders.keypair import Keypair
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solana.rpc.core import RPCException

from solana_agent_kit.errors import SwapConfirmationError, TransactionFailedError
from solana_agent_kit.ledger import (
    AccountState,
    explorer_url,
    lookup_account,
    send_and_confirm,
)

SIGNATURE = str(Signature.default())


class TestLookupAccount:
    """Account lookup is tri-state."""

    @pytest.mark.asyncio
    async def test_found(self, connection):
        lookup = await lookup_account(connection, Keypair().pubkey())
        assert lookup.state == AccountState.FOUND
        assert lookup.exists

    @pytest.mark.asyncio
    async def test_not_found(self, connection):
        connection.get_account_info = AsyncMock(return_value=MagicMock(value=None))

        lookup = await lookup_account(connection, Keypair().pubkey())

        assert lookup.state == AccountState.NOT_FOUND
        assert not lookup.exists
        lookup.raise_for_error()

    @pytest.mark.asyncio
    async def test_rpc_failure_is_error_not_missing(self, connection):
        failure = httpx.ReadTimeout("timed out")
        connection.get_account_info = AsyncMock(side_effect=failure)

        lookup = await lookup_account(connection, Keypair().pubkey())

        assert lookup.state == AccountState.ERROR
        with pytest.raises(httpx.ReadTimeout) as exc_info:
            lookup.raise_for_error()
        assert exc_info.value is failure


    @pytest.mark.asyncio
    async def test_json_rpc_error_is_error_not_missing(self, connection):
        connection.get_account_info = AsyncMock(side_effect=RPCException("rate limited"))

        lookup = await lookup_account(connection, Keypair().pubkey())

        assert lookup.state == AccountState.ERROR
        with pytest.raises(RPCException):
            lookup.raise_for_error()


class TestSendAndConfirm:
    """Tests for legacy transaction submission."""

    def _instruction(self, wallet):
        return transfer(TransferParams(
            from_pubkey=wallet.pubkey, to_pubkey=Keypair().pubkey(), lamports=1
        ))

    @pytest.mark.asyncio
    async def test_returns_signature(self, wallet, connection):
        signature = await send_and_confirm(wallet, [self._instruction(wallet)], [wallet.keypair])

        assert signature == SIGNATURE
        connection.confirm_transaction.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_preflight_enabled(self, wallet, connection):
        await send_and_confirm(wallet, [self._instruction(wallet)], [wallet.keypair])

        opts = connection.send_raw_transaction.await_args.kwargs["opts"]
        assert opts.skip_preflight is False

    @pytest.mark.asyncio
    async def test_on_chain_error_raises(self, wallet, connection):
        connection.confirm_transaction = AsyncMock(
            return_value=MagicMock(value=[MagicMock(err={"InstructionError": [0, "Custom"]})])
        )

        with pytest.raises(TransactionFailedError) as exc_info:
            await send_and_confirm(wallet, [self._instruction(wallet)], [wallet.keypair])

        assert exc_info.value.signature == str(Signature.default())
        assert exc_info.value.err == {"InstructionError": [0, "Custom"]}

    def test_swap_confirmation_error_is_transaction_failure(self):
        assert issubclass(SwapConfirmationError, TransactionFailedError)


class TestExplorerUrl:

    def test_default_template(self):
        assert explorer_url("abc") == "https://solscan.io/tx/abc"

    def test_template_from_env(self, monkeypatch):
        from solana_agent_kit.config import get_settings

        monkeypatch.setenv("EXPLORER_TX_URL", "https://explorer.solana.com/tx/{signature}")
        get_settings.cache_clear()

        assert explorer_url("abc") == "https://explorer.solana.com/tx/abc"
