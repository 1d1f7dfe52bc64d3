"""Tests for the command-line interface."""

import json
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from solana_agent_kit.aliases import TOKENS, VALIDATORS
from solana_agent_kit.cli import build_parser, main
from solana_agent_kit.swap import QuoteRecord, SwapResult


@pytest.fixture
def loaded_wallet(wallet):
    with patch("solana_agent_kit.cli.load_wallet", return_value=wallet):
        yield wallet


def stdout_json(capsys):
    return json.loads(capsys.readouterr().out)


def stderr_json(capsys):
    err = capsys.readouterr().err
    return json.loads(err[err.index("{"):])


class TestParser:

    def test_swap_defaults_slippage(self):
        args = build_parser().parse_args(["swap", "quote", "SOL", "USDC", "1000"])
        assert args.slippage == 50
        assert args.amount == 1000
        assert args.needs_wallet

    def test_stake_amount_is_decimal(self):
        args = build_parser().parse_args(["stake", "delegate", "jito", "1.5"])
        assert args.amount == Decimal("1.5")

    def test_missing_command_exits_1(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 1

    def test_missing_argument_prints_error_envelope(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["swap", "quote", "SOL"])

        assert exc_info.value.code == 1
        error = stderr_json(capsys)
        assert error["success"] is False
        assert "the following arguments are required" in error["error"]
        assert "amount" in error["error"]


class TestStaticCommands:

    def test_tokens(self, capsys):
        assert main(["tokens"]) == 0
        assert stdout_json(capsys) == dict(TOKENS)

    def test_validators(self, capsys):
        assert main(["stake", "validators"]) == 0
        assert stdout_json(capsys) == dict(VALIDATORS)


class TestWalletCommands:

    def test_create_writes_key_file(self, tmp_path, capsys):
        path = tmp_path / "id.json"

        assert main(["wallet", "create", str(path)]) == 0

        data = stdout_json(capsys)
        assert data["success"] is True
        assert data["path"] == str(path)
        assert path.exists()

    def test_missing_wallet_exits_1(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("SOLANA_WALLET_PATH", str(tmp_path / "missing.json"))

        assert main(["wallet", "balance"]) == 1

        error = stderr_json(capsys)
        assert error["success"] is False
        assert "Wallet not found" in error["error"]
        assert "solana-agent wallet create" in error["error"]

    def test_address_prints_raw(self, loaded_wallet, capsys):
        assert main(["wallet", "address"]) == 0
        assert capsys.readouterr().out.strip() == loaded_wallet.address

    def test_balance(self, loaded_wallet, connection, capsys):
        connection.get_balance = AsyncMock(return_value=MagicMock(value=1_250_000_000))

        assert main(["wallet", "balance"]) == 0

        data = stdout_json(capsys)
        assert data == {"address": loaded_wallet.address, "balance": "1.25", "unit": "SOL"}
        connection.close.assert_awaited_once()


class TestSwapCommands:

    def test_quote(self, loaded_wallet, capsys):
        swapper = MagicMock()
        swapper.get_quote = AsyncMock(return_value=QuoteRecord(
            input_mint=TOKENS["SOL"],
            output_mint=TOKENS["USDC"],
            in_amount="1000000000",
            out_amount="150000000",
            price_impact_pct="0.01",
            route_plan=[{"swapInfo": {"label": "Meteora"}}],
        ))

        with patch("solana_agent_kit.cli.Swapper", return_value=swapper):
            assert main(["swap", "quote", "SOL", "USDC", "1000000000", "--slippage", "100"]) == 0

        data = stdout_json(capsys)
        assert data["output_amount"] == "150000000"
        assert data["route"] == ["Meteora"]
        swapper.get_quote.assert_awaited_once_with("SOL", "USDC", 1_000_000_000, 100)

    def test_execute(self, loaded_wallet, capsys):
        swapper = MagicMock()
        swapper.swap = AsyncMock(return_value=SwapResult(
            signature="sig",
            input_mint=TOKENS["SOL"],
            output_mint=TOKENS["USDC"],
            in_amount="10",
            out_amount="20",
            explorer_url="https://solscan.io/tx/sig",
        ))

        with patch("solana_agent_kit.cli.Swapper", return_value=swapper):
            assert main(["swap", "execute", "SOL", "USDC", "10"]) == 0

        data = stdout_json(capsys)
        assert data["success"] is True
        assert data["explorer"] == "https://solscan.io/tx/sig"

    def test_failure_exits_1(self, loaded_wallet, capsys):
        swapper = MagicMock()
        swapper.get_price = AsyncMock(side_effect=RuntimeError("upstream down"))

        with patch("solana_agent_kit.cli.Swapper", return_value=swapper):
            assert main(["price", "SOL"]) == 1

        error = stderr_json(capsys)
        assert error == {"success": False, "error": "upstream down"}


class TestTransferCommand:

    def test_token_amount_must_be_integer(self, loaded_wallet, capsys):
        assert main(["transfer", "Dest111", "1.5", "--token", "USDC"]) == 1
        error = stderr_json(capsys)
        assert "base units" in error["error"]

    def test_sol_transfer(self, loaded_wallet, capsys):
        transfer = MagicMock()
        transfer.send_sol = AsyncMock(return_value=MagicMock(
            signature="sig", explorer_url="https://solscan.io/tx/sig"
        ))

        with patch("solana_agent_kit.cli.Transfer", return_value=transfer):
            assert main(["transfer", "Dest111", "0.1"]) == 0

        transfer.send_sol.assert_awaited_once_with("Dest111", Decimal("0.1"))
        assert stdout_json(capsys)["token"] == "SOL"


class TestDexCommands:

    def test_requires_api_key(self, capsys):
        assert main(["dex", "orders"]) == 1
        error = stderr_json(capsys)
        assert "AGENTDEX_API_KEY" in error["error"]

    def test_prices(self, monkeypatch, capsys):
        monkeypatch.setenv("AGENTDEX_API_KEY", "adx_test")
        client = MagicMock()
        client.get_prices = AsyncMock(return_value=[{"mint": "A", "price": 1}])

        with patch("solana_agent_kit.cli.AgentDEXClient.from_settings", return_value=client):
            assert main(["dex", "prices", "A"]) == 0

        client.get_prices.assert_awaited_once_with(["A"])
        assert stdout_json(capsys) == [{"mint": "A", "price": 1}]

    def test_portfolio_defaults_to_own_wallet(self, loaded_wallet, connection, monkeypatch, capsys):
        monkeypatch.setenv("AGENTDEX_API_KEY", "adx_test")
        client = MagicMock()
        client.get_portfolio = AsyncMock(return_value={"tokens": []})

        with patch("solana_agent_kit.cli.AgentDEXClient.from_settings", return_value=client):
            assert main(["dex", "portfolio"]) == 0

        client.get_portfolio.assert_awaited_once_with(loaded_wallet.address)
        connection.close.assert_awaited_once()
