"""Send SOL and SPL tokens."""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Union

from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import TransferParams as TokenTransferParams
from spl.token.instructions import (
    create_associated_token_account,
    get_associated_token_address,
)
from spl.token.instructions import transfer as token_transfer

from solana_agent_kit.aliases import resolve_mint, sol_to_lamports
from solana_agent_kit.ledger import (
    AccountState,
    explorer_url,
    lookup_account,
    send_and_confirm,
)

if TYPE_CHECKING:
    from solana_agent_kit.wallet import Wallet

logger = logging.getLogger(__name__)


@dataclass
class TransferResult:
    """Result of a SOL or token transfer."""
    signature: str
    sender: str
    recipient: str
    amount: Union[Decimal, str]
    explorer_url: str
    unit: str = "SOL"
    mint: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


class Transfer:
    """Transfers from a wallet."""

    def __init__(self, wallet: "Wallet"):
        self.wallet = wallet

    async def send_sol(self, to_address: str, amount_sol: Union[Decimal, float, str]) -> TransferResult:
        """Send SOL to an address.

        Args:
            to_address: Recipient address
            amount_sol: Amount in SOL (sub-lamport remainder is truncated)
        """
        to_pubkey = Pubkey.from_string(to_address)
        lamports = sol_to_lamports(amount_sol)

        instruction = transfer(
            TransferParams(
                from_pubkey=self.wallet.pubkey,
                to_pubkey=to_pubkey,
                lamports=lamports,
            )
        )

        logger.info(f"Sending {lamports} lamports to {to_address}")
        signature = await send_and_confirm(self.wallet, [instruction], [self.wallet.keypair])

        return TransferResult(
            signature=signature,
            sender=self.wallet.address,
            recipient=to_address,
            amount=Decimal(str(amount_sol)),
            explorer_url=explorer_url(signature),
        )

    async def send_token(self, to_address: str, amount: Union[int, str], mint_address: str) -> TransferResult:
        """Send SPL token to an address.

        Creates the recipient's associated token account first when it does
        not exist yet.

        Args:
            to_address: Recipient wallet address
            amount: Amount in token base units (not decimal-adjusted)
            mint_address: Token mint or known symbol
        """
        mint = resolve_mint(mint_address)
        to_pubkey = Pubkey.from_string(to_address)
        mint_pubkey = Pubkey.from_string(mint)
        owner = self.wallet.pubkey

        source_ata = get_associated_token_address(owner, mint_pubkey)
        dest_ata = get_associated_token_address(to_pubkey, mint_pubkey)

        lookup = await lookup_account(self.wallet.connection, dest_ata)
        lookup.raise_for_error()

        instructions = []
        if lookup.state == AccountState.NOT_FOUND:
            logger.info(f"Creating token account {dest_ata} for {to_address}")
            instructions.append(
                create_associated_token_account(payer=owner, owner=to_pubkey, mint=mint_pubkey)
            )

        instructions.append(
            token_transfer(
                TokenTransferParams(
                    program_id=TOKEN_PROGRAM_ID,
                    source=source_ata,
                    dest=dest_ata,
                    owner=owner,
                    amount=int(amount),
                )
            )
        )

        logger.info(f"Sending {amount} of {mint} to {to_address}")
        signature = await send_and_confirm(self.wallet, instructions, [self.wallet.keypair])

        return TransferResult(
            signature=signature,
            sender=self.wallet.address,
            recipient=to_address,
            amount=str(amount),
            explorer_url=explorer_url(signature),
            unit="base_units",
            mint=mint,
        )
