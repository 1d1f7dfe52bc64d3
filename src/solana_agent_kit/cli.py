"""Command-line interface for AI agents to interact with Solana.

Usage:
    solana-agent wallet create [path]
    solana-agent wallet balance [--address ADDR]
    solana-agent swap quote <from> <to> <amount>
    solana-agent swap execute <from> <to> <amount>
    solana-agent price <token>
    solana-agent transfer <to> <amount> [--token MINT]
    solana-agent stake delegate <validator> <amount>
    solana-agent dex portfolio [wallet]
    solana-agent serve [--port PORT]

Results are printed to stdout as JSON. Progress goes to stderr, failures
print {"success": false, "error": ...} to stderr and exit with status 1.
"""

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal
from typing import Any, Optional

from solana_agent_kit.aliases import list_tokens, list_validators
from solana_agent_kit.config import get_settings
from solana_agent_kit.errors import InputValidationError, WalletNotFoundError
from solana_agent_kit.integrations.agentdex import AgentDEXClient
from solana_agent_kit.stake import Staking, total_staked
from solana_agent_kit.swap import Swapper
from solana_agent_kit.transfer import Transfer
from solana_agent_kit.wallet import Wallet

logger = logging.getLogger("solana_agent_kit.cli")


def load_wallet() -> Wallet:
    """Load the wallet from SOLANA_WALLET_PATH."""
    settings = get_settings()
    return Wallet.from_file(settings.solana_wallet_path, settings.solana_rpc_url)


def _json_default(value: Any) -> str:
    # Decimal amounts keep full precision as strings
    return str(value)


def _emit(payload: Any, stream=None) -> None:
    print(json.dumps(payload, indent=2, default=_json_default), file=stream or sys.stdout)


class AgentArgumentParser(argparse.ArgumentParser):
    """Reports usage errors as a JSON error envelope on stderr, exit status 1."""

    def error(self, message: str):
        _emit({"success": False, "error": f"{self.prog}: {message}"}, sys.stderr)
        sys.exit(1)


# ======================
# Wallet
# ======================

async def cmd_wallet_create(args: argparse.Namespace) -> dict:
    settings = get_settings()
    wallet = Wallet.create(settings.solana_rpc_url)
    try:
        save_path = wallet.save(args.path or settings.solana_wallet_path)
    finally:
        await wallet.close()
    return {
        "success": True,
        "address": wallet.address,
        "path": save_path,
        "warning": "Backup your wallet file! Loss means loss of funds.",
    }


async def cmd_wallet_balance(args: argparse.Namespace, wallet: Wallet) -> dict:
    balance = await wallet.get_balance(args.address)
    return {"address": args.address or wallet.address, "balance": balance, "unit": "SOL"}


async def cmd_wallet_tokens(args: argparse.Namespace, wallet: Wallet) -> dict:
    tokens = await wallet.get_all_token_balances()
    return {"address": wallet.address, "tokens": tokens}


async def cmd_wallet_address(args: argparse.Namespace, wallet: Wallet) -> str:
    return wallet.address


# ======================
# Swap / price
# ======================

async def cmd_swap_quote(args: argparse.Namespace, wallet: Wallet) -> dict:
    quote = await Swapper(wallet).get_quote(args.from_token, args.to_token, args.amount, args.slippage)
    return {
        "from": args.from_token,
        "to": args.to_token,
        "input_amount": quote.in_amount,
        "output_amount": quote.out_amount,
        "price_impact": quote.price_impact_pct,
        "route": quote.route_labels,
    }


async def cmd_swap_execute(args: argparse.Namespace, wallet: Wallet) -> dict:
    logger.info(f"Swapping {args.amount} {args.from_token} -> {args.to_token}...")
    result = await Swapper(wallet).swap(args.from_token, args.to_token, args.amount, args.slippage)
    return {
        "success": True,
        "signature": result.signature,
        "input_amount": result.in_amount,
        "output_amount": result.out_amount,
        "explorer": result.explorer_url,
    }


async def cmd_price(args: argparse.Namespace, wallet: Wallet) -> dict:
    price = await Swapper(wallet).get_price(args.token)
    return {"token": args.token, "price": price, "unit": "USDC"}


# ======================
# Transfer
# ======================

async def cmd_transfer(args: argparse.Namespace, wallet: Wallet) -> dict:
    transfer = Transfer(wallet)
    logger.info(f"Transferring {args.amount} {args.token or 'SOL'} to {args.to}...")

    if args.token:
        try:
            amount = int(args.amount)
        except ValueError:
            raise InputValidationError(
                f"Token amounts are in base units (integer), got {args.amount}"
            ) from None
        result = await transfer.send_token(args.to, amount, args.token)
    else:
        result = await transfer.send_sol(args.to, Decimal(args.amount))

    return {
        "success": True,
        "signature": result.signature,
        "to": args.to,
        "amount": args.amount,
        "token": args.token or "SOL",
        "explorer": result.explorer_url,
    }


# ======================
# Stake
# ======================

async def cmd_stake_delegate(args: argparse.Namespace, wallet: Wallet) -> dict:
    logger.info(f"Staking {args.amount} SOL to {args.validator}...")
    result = await Staking(wallet).stake(args.validator, args.amount)
    return {"success": True, **result.to_dict()}


async def cmd_stake_list(args: argparse.Namespace, wallet: Wallet) -> dict:
    accounts = await Staking(wallet).get_stake_accounts()
    return {
        "address": wallet.address,
        "stake_accounts": [a.to_dict() for a in accounts],
        "total_staked": total_staked(accounts),
    }


async def cmd_stake_unstake(args: argparse.Namespace, wallet: Wallet) -> dict:
    logger.info(f"Deactivating stake account {args.stake_account}...")
    result = await Staking(wallet).unstake(args.stake_account)
    return {"success": True, **result.to_dict()}


async def cmd_stake_withdraw(args: argparse.Namespace, wallet: Wallet) -> dict:
    logger.info(f"Withdrawing from {args.stake_account}...")
    result = await Staking(wallet).withdraw(args.stake_account)
    return {"success": True, **result.to_dict()}


# ======================
# AgentDEX
# ======================

def _dex_client() -> AgentDEXClient:
    if not get_settings().has_agentdex:
        raise InputValidationError("AGENTDEX_API_KEY is not set")
    return AgentDEXClient.from_settings()


async def cmd_dex_portfolio(args: argparse.Namespace) -> Any:
    wallet_address = args.wallet
    if not wallet_address:
        wallet = load_wallet()
        try:
            wallet_address = wallet.address
        finally:
            await wallet.close()
    return await _dex_client().get_portfolio(wallet_address)


async def cmd_dex_prices(args: argparse.Namespace) -> Any:
    return await _dex_client().get_prices(args.mints or None)


async def cmd_dex_orders(args: argparse.Namespace) -> Any:
    return await _dex_client().get_limit_orders()


async def cmd_dex_order_create(args: argparse.Namespace) -> Any:
    return await _dex_client().create_limit_order(
        args.input_mint, args.output_mint, args.amount, args.target_price
    )


async def cmd_dex_order_cancel(args: argparse.Namespace) -> Any:
    return await _dex_client().cancel_limit_order(args.order_id)


async def cmd_dex_register(args: argparse.Namespace) -> Any:
    return await _dex_client().register()


async def cmd_dex_info(args: argparse.Namespace) -> Any:
    return await _dex_client().get_agent_info()


# ======================
# Static tables
# ======================

async def cmd_tokens(args: argparse.Namespace) -> dict:
    return list_tokens()


async def cmd_validators(args: argparse.Namespace) -> dict:
    return list_validators()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = AgentArgumentParser(
        prog="solana-agent",
        description="Solana Agent Kit - CLI for AI agents",
        epilog=(
            "Environment: SOLANA_WALLET_PATH (default ~/.config/solana/id.json), "
            "SOLANA_RPC_URL (default mainnet-beta), AGENTDEX_API_KEY"
        ),
    )
    commands = parser.add_subparsers(dest="command", required=True)

    # wallet
    wallet = commands.add_parser("wallet", help="Wallet management")
    wallet_cmds = wallet.add_subparsers(dest="subcommand", required=True)

    create = wallet_cmds.add_parser("create", help="Create a new wallet")
    create.add_argument("path", nargs="?", default=None, help="Where to save the key file")
    create.set_defaults(handler=cmd_wallet_create, needs_wallet=False)

    balance = wallet_cmds.add_parser("balance", help="Get SOL balance")
    balance.add_argument("--address", default=None, help="Query another address")
    balance.set_defaults(handler=cmd_wallet_balance, needs_wallet=True)

    tokens = wallet_cmds.add_parser("tokens", help="Get all token balances")
    tokens.set_defaults(handler=cmd_wallet_tokens, needs_wallet=True)

    address = wallet_cmds.add_parser("address", help="Print wallet address")
    address.set_defaults(handler=cmd_wallet_address, needs_wallet=True)

    # swap
    swap = commands.add_parser("swap", help="Jupiter swaps")
    swap_cmds = swap.add_subparsers(dest="subcommand", required=True)
    for name, handler, help_text in (
        ("quote", cmd_swap_quote, "Get swap quote"),
        ("execute", cmd_swap_execute, "Execute swap"),
    ):
        sub = swap_cmds.add_parser(name, help=help_text)
        sub.add_argument("from_token", metavar="from", help="Source token symbol or mint")
        sub.add_argument("to_token", metavar="to", help="Destination token symbol or mint")
        sub.add_argument("amount", type=int, help="Input amount in base units")
        sub.add_argument(
            "--slippage",
            type=int,
            default=get_settings().default_slippage_bps,
            help="Slippage tolerance in basis points (default: 50)",
        )
        sub.set_defaults(handler=handler, needs_wallet=True)

    # price
    price = commands.add_parser("price", help="Get token price in USDC")
    price.add_argument("token", help="Token symbol or mint")
    price.set_defaults(handler=cmd_price, needs_wallet=True)

    # transfer
    transfer = commands.add_parser("transfer", help="Send SOL or SPL tokens")
    transfer.add_argument("to", help="Recipient address")
    transfer.add_argument("amount", help="SOL amount, or token base units with --token")
    transfer.add_argument("--token", default=None, help="Token mint (or symbol)")
    transfer.set_defaults(handler=cmd_transfer, needs_wallet=True)

    # tokens
    token_list = commands.add_parser("tokens", help="List known token symbols")
    token_list.set_defaults(handler=cmd_tokens, needs_wallet=False)

    # stake
    stake = commands.add_parser("stake", help="Native staking")
    stake_cmds = stake.add_subparsers(dest="subcommand", required=True)

    delegate = stake_cmds.add_parser("delegate", help="Stake SOL to validator")
    delegate.add_argument("validator", help=f"Vote account or one of: {', '.join(list_validators())}")
    delegate.add_argument("amount", type=Decimal, help="Amount in SOL")
    delegate.set_defaults(handler=cmd_stake_delegate, needs_wallet=True)

    stake_list = stake_cmds.add_parser("list", help="List your stake accounts")
    stake_list.set_defaults(handler=cmd_stake_list, needs_wallet=True)

    unstake = stake_cmds.add_parser("unstake", help="Start unstaking")
    unstake.add_argument("stake_account", help="Stake account address")
    unstake.set_defaults(handler=cmd_stake_unstake, needs_wallet=True)

    withdraw = stake_cmds.add_parser("withdraw", help="Withdraw unstaked SOL")
    withdraw.add_argument("stake_account", help="Stake account address")
    withdraw.set_defaults(handler=cmd_stake_withdraw, needs_wallet=True)

    validators = stake_cmds.add_parser("validators", help="List known validators")
    validators.set_defaults(handler=cmd_validators, needs_wallet=False)

    # dex
    dex = commands.add_parser("dex", help="AgentDEX portfolio and limit orders")
    dex_cmds = dex.add_subparsers(dest="subcommand", required=True)

    portfolio = dex_cmds.add_parser("portfolio", help="Portfolio for a wallet")
    portfolio.add_argument("wallet", nargs="?", default=None, help="Wallet (default: own)")
    portfolio.set_defaults(handler=cmd_dex_portfolio, needs_wallet=False)

    prices = dex_cmds.add_parser("prices", help="Token prices")
    prices.add_argument("mints", nargs="*", help="Mint addresses (none = all)")
    prices.set_defaults(handler=cmd_dex_prices, needs_wallet=False)

    orders = dex_cmds.add_parser("orders", help="List limit orders")
    orders.set_defaults(handler=cmd_dex_orders, needs_wallet=False)

    order_create = dex_cmds.add_parser("order-create", help="Place a limit order")
    order_create.add_argument("input_mint")
    order_create.add_argument("output_mint")
    order_create.add_argument("amount", help="Input amount in base units")
    order_create.add_argument("target_price", type=float)
    order_create.set_defaults(handler=cmd_dex_order_create, needs_wallet=False)

    order_cancel = dex_cmds.add_parser("order-cancel", help="Cancel a limit order")
    order_cancel.add_argument("order_id")
    order_cancel.set_defaults(handler=cmd_dex_order_cancel, needs_wallet=False)

    register = dex_cmds.add_parser("register", help="Register this agent")
    register.set_defaults(handler=cmd_dex_register, needs_wallet=False)

    info = dex_cmds.add_parser("info", help="Info about this agent")
    info.set_defaults(handler=cmd_dex_info, needs_wallet=False)

    # serve
    serve = commands.add_parser("serve", help="Run the HTTP API server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=None, needs_wallet=False)

    return parser


async def run_command(args: argparse.Namespace) -> Any:
    """Run a parsed command and return its JSON payload."""
    if not args.needs_wallet:
        return await args.handler(args)

    wallet = load_wallet()
    try:
        return await args.handler(args, wallet)
    finally:
        await wallet.close()


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    from dotenv import load_dotenv

    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if get_settings().debug else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    if args.command == "serve":
        from solana_agent_kit.main import run_server

        run_server(host=args.host, port=args.port)
        return 0

    try:
        payload = asyncio.run(run_command(args))
    except WalletNotFoundError as e:
        _emit({"success": False, "error": f"{e}. Create one with: solana-agent wallet create"}, sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        _emit({"success": False, "error": str(e)}, sys.stderr)
        return 1

    if isinstance(payload, str):
        print(payload)
    else:
        _emit(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
