"""Request dependencies: the loaded wallet and per-request orchestrators."""

from fastapi import Depends, Request

from solana_agent_kit.errors import AgentKitError
from solana_agent_kit.stake import Staking
from solana_agent_kit.swap import Swapper
from solana_agent_kit.transfer import Transfer
from solana_agent_kit.wallet import Wallet


class WalletNotLoadedError(AgentKitError):
    """Raised when a wallet route is hit but no wallet was loaded at startup."""

    def __init__(self):
        super().__init__("Wallet not loaded")


def get_wallet(request: Request) -> Wallet:
    wallet = getattr(request.app.state, "wallet", None)
    if wallet is None:
        raise WalletNotLoadedError()
    return wallet


def get_swapper(wallet: Wallet = Depends(get_wallet)) -> Swapper:
    return Swapper(wallet)


def get_transfer(wallet: Wallet = Depends(get_wallet)) -> Transfer:
    return Transfer(wallet)


def get_staking(wallet: Wallet = Depends(get_wallet)) -> Staking:
    return Staking(wallet)
