"""Native SOL staking to validators.

Stake account lifecycle:
1. Create + fund + initialize (wallet is staker and withdrawer)
2. Delegate to a validator vote account
3. Deactivate (stake cools down until the epoch boundary)
4. Withdraw the full balance back to the wallet
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional, Union

from solana.rpc.types import MemcmpOpts
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solana_agent_kit import stake_program
from solana_agent_kit.aliases import (
    lamports_to_sol,
    list_validators,
    resolve_validator,
    sol_to_lamports,
)
from solana_agent_kit.ledger import explorer_url, send_and_confirm

if TYPE_CHECKING:
    from solana_agent_kit.wallet import Wallet

logger = logging.getLogger(__name__)

UNSTAKE_NOTE = "Stake will be withdrawable after the current epoch ends"


@dataclass
class StakeResult:
    """Result of creating and delegating a stake account."""
    signature: str
    stake_account: str
    validator: str
    amount: Decimal
    explorer_url: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class StakeAccountSummary:
    """Point-in-time view of a stake account."""
    address: str
    lamports: int
    sol: Decimal
    state: str  # delegated / inactive
    validator: Optional[str] = None
    activation_epoch: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class UnstakeResult:
    signature: str
    stake_account: str
    status: str
    note: str
    explorer_url: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WithdrawResult:
    signature: str
    stake_account: str
    withdrawn: Decimal
    explorer_url: str

    def to_dict(self) -> dict:
        return asdict(self)


def summarize_stake_account(address: str, lamports: int, parsed: dict) -> StakeAccountSummary:
    """Build a summary from jsonParsed stake account data.

    An account is delegated iff its parsed info carries a delegation.
    """
    info = parsed.get("info") or {}
    delegation = (info.get("stake") or {}).get("delegation")

    if delegation:
        return StakeAccountSummary(
            address=address,
            lamports=lamports,
            sol=lamports_to_sol(lamports),
            state="delegated",
            validator=delegation.get("voter"),
            activation_epoch=int(delegation.get("activationEpoch", 0)),
        )

    return StakeAccountSummary(
        address=address,
        lamports=lamports,
        sol=lamports_to_sol(lamports),
        state="inactive",
    )


def total_staked(accounts: Iterable[StakeAccountSummary]) -> Decimal:
    """Sum of SOL held across stake accounts."""
    return sum((a.sol for a in accounts), Decimal("0"))


class Staking:
    """Stake orchestration for a wallet."""

    def __init__(self, wallet: "Wallet"):
        self.wallet = wallet

    async def stake(
        self, validator_vote_account: str, amount_sol: Union[Decimal, float, str]
    ) -> StakeResult:
        """Create a stake account and delegate to a validator.

        The stake account is funded with the requested amount plus the
        rent-exempt minimum for a stake account.
        """
        vote_account = Pubkey.from_string(resolve_validator(validator_vote_account))
        lamports = sol_to_lamports(amount_sol)

        stake_keypair = Keypair()
        stake_pubkey = stake_keypair.pubkey()
        authority = self.wallet.pubkey

        rent_resp = await self.wallet.connection.get_minimum_balance_for_rent_exemption(
            stake_program.STAKE_ACCOUNT_SPACE
        )
        total_lamports = lamports + rent_resp.value

        instructions = stake_program.create_stake_account(
            from_pubkey=authority,
            stake_pubkey=stake_pubkey,
            authority=authority,
            lamports=total_lamports,
        )
        instructions.append(
            stake_program.delegate_stake(stake_pubkey, authority, vote_account)
        )

        logger.info(
            f"Staking {amount_sol} SOL to {vote_account} "
            f"(stake account {stake_pubkey}, funded {total_lamports} lamports)"
        )
        signature = await send_and_confirm(
            self.wallet, instructions, [self.wallet.keypair, stake_keypair]
        )

        return StakeResult(
            signature=signature,
            stake_account=str(stake_pubkey),
            validator=str(vote_account),
            amount=Decimal(str(amount_sol)),
            explorer_url=explorer_url(signature),
        )

    async def get_stake_accounts(self) -> list[StakeAccountSummary]:
        """Get all stake accounts whose authorized staker is this wallet."""
        resp = await self.wallet.connection.get_program_accounts_json_parsed(
            stake_program.STAKE_PROGRAM_ID,
            filters=[
                MemcmpOpts(offset=stake_program.STAKER_OFFSET, bytes=self.wallet.address)
            ],
        )

        accounts = []
        for keyed in resp.value:
            accounts.append(
                summarize_stake_account(
                    str(keyed.pubkey),
                    keyed.account.lamports,
                    keyed.account.data.parsed,
                )
            )
        logger.debug(f"Found {len(accounts)} stake account(s) for {self.wallet.address}")
        return accounts

    async def unstake(self, stake_account_address: str) -> UnstakeResult:
        """Deactivate a stake account (start unstaking)."""
        stake_pubkey = Pubkey.from_string(stake_account_address)

        instruction = stake_program.deactivate(stake_pubkey, self.wallet.pubkey)
        signature = await send_and_confirm(self.wallet, [instruction], [self.wallet.keypair])

        return UnstakeResult(
            signature=signature,
            stake_account=stake_account_address,
            status="deactivating",
            note=UNSTAKE_NOTE,
            explorer_url=explorer_url(signature),
        )

    async def withdraw(self, stake_account_address: str) -> WithdrawResult:
        """Withdraw the full balance of a deactivated stake account."""
        stake_pubkey = Pubkey.from_string(stake_account_address)

        balance_resp = await self.wallet.connection.get_balance(stake_pubkey)
        stake_balance = balance_resp.value

        instruction = stake_program.withdraw(
            stake_pubkey,
            authority=self.wallet.pubkey,
            to_pubkey=self.wallet.pubkey,
            lamports=stake_balance,
        )
        signature = await send_and_confirm(self.wallet, [instruction], [self.wallet.keypair])

        logger.info(f"Withdrew {stake_balance} lamports from {stake_account_address}")
        return WithdrawResult(
            signature=signature,
            stake_account=stake_account_address,
            withdrawn=lamports_to_sol(stake_balance),
            explorer_url=explorer_url(signature),
        )

    @staticmethod
    def list_validators() -> dict[str, str]:
        """List known validators."""
        return list_validators()
