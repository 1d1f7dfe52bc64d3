"""Transaction submission and account lookups against the Solana RPC.

Submission flow:
1. Fetch latest blockhash
2. Build and sign transaction (wallet pays fees)
3. Send with preflight enabled
4. Block until the ledger reports the signature as confirmed
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction, VersionedTransaction

from solana_agent_kit.config import get_settings
from solana_agent_kit.errors import TransactionFailedError

if TYPE_CHECKING:
    from solana_agent_kit.wallet import Wallet

logger = logging.getLogger(__name__)


class AccountState(str, Enum):
    """Outcome of an account existence check."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class AccountLookup:
    """Tri-state result of looking up an on-chain account."""
    state: AccountState
    error: Optional[Exception] = None

    @property
    def exists(self) -> bool:
        return self.state == AccountState.FOUND

    def raise_for_error(self) -> None:
        """Re-raise the lookup failure unchanged."""
        if self.state == AccountState.ERROR and self.error is not None:
            raise self.error


async def lookup_account(connection: AsyncClient, pubkey: Pubkey) -> AccountLookup:
    """Check whether an account exists.

    RPC failures are reported as ERROR, never as NOT_FOUND.
    """
    try:
        resp = await connection.get_account_info(pubkey)
    except (SolanaRpcException, RPCException, httpx.HTTPError) as e:
        logger.warning(f"Account lookup failed for {pubkey}: {e}")
        return AccountLookup(state=AccountState.ERROR, error=e)

    if resp.value is None:
        return AccountLookup(state=AccountState.NOT_FOUND)
    return AccountLookup(state=AccountState.FOUND)


def explorer_url(signature: str) -> str:
    """Explorer link for a transaction signature."""
    return get_settings().explorer_tx_url.format(signature=signature)


def _tx_opts(max_retries: Optional[int]) -> TxOpts:
    return TxOpts(
        skip_preflight=False,
        preflight_commitment=Confirmed,
        max_retries=max_retries,
    )


async def _confirm(connection: AsyncClient, signature, error_cls=TransactionFailedError) -> None:
    resp = await connection.confirm_transaction(signature, commitment=Confirmed)
    status = resp.value[0] if resp.value else None
    if status is not None and status.err is not None:
        logger.error(f"Transaction {signature} failed on-chain: {status.err}")
        raise error_cls(str(signature), status.err)


async def send_and_confirm(
    wallet: "Wallet",
    instructions: Sequence[Instruction],
    signers: Sequence[Keypair],
    max_retries: Optional[int] = None,
) -> str:
    """Build, sign, send and confirm a legacy transaction.

    Args:
        wallet: Fee payer and RPC connection
        instructions: Instructions executed atomically, in order
        signers: Every keypair whose signature the instructions require
        max_retries: RPC-side resubmission count (None = node default)

    Returns:
        Transaction signature (base58)

    Raises:
        TransactionFailedError: If the confirmed status carries an error
    """
    connection = wallet.connection
    blockhash_resp = await connection.get_latest_blockhash()

    tx = Transaction.new_signed_with_payer(
        list(instructions),
        wallet.pubkey,
        list(signers),
        blockhash_resp.value.blockhash,
    )

    logger.debug(f"Sending transaction with {len(instructions)} instruction(s)")
    resp = await connection.send_raw_transaction(bytes(tx), opts=_tx_opts(max_retries))
    signature = resp.value
    logger.info(f"Submitted transaction {signature}")

    await _confirm(connection, signature)
    logger.info(f"Transaction {signature} confirmed")
    return str(signature)


async def send_versioned_and_confirm(
    wallet: "Wallet",
    transaction: VersionedTransaction,
    max_retries: Optional[int] = 3,
    error_cls=TransactionFailedError,
) -> str:
    """Send an already signed versioned transaction and wait for confirmation."""
    connection = wallet.connection
    resp = await connection.send_raw_transaction(
        bytes(transaction), opts=_tx_opts(max_retries)
    )
    signature = resp.value
    logger.info(f"Submitted transaction {signature}")

    await _confirm(connection, signature, error_cls=error_cls)
    logger.info(f"Transaction {signature} confirmed")
    return str(signature)
