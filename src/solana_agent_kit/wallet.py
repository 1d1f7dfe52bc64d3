"""Wallet management.

A Wallet bundles a signing keypair with an RPC connection. Key files use the
solana-keygen format: a JSON array of the 64 secret key bytes.
"""

import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TokenAccountOpts
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import get_associated_token_address

from solana_agent_kit.aliases import lamports_to_sol
from solana_agent_kit.errors import InvalidKeyError, WalletNotFoundError
from solana_agent_kit.ledger import AccountState, lookup_account

logger = logging.getLogger(__name__)

DEFAULT_RPC = "https://api.mainnet-beta.solana.com"


class Wallet:
    """Signing keypair plus a connection to a Solana RPC node."""

    def __init__(self, keypair: Keypair, rpc_url: str = DEFAULT_RPC):
        self.keypair = keypair
        self.rpc_url = rpc_url
        self.connection = AsyncClient(rpc_url, commitment=Confirmed)

    @classmethod
    def create(cls, rpc_url: str = DEFAULT_RPC) -> "Wallet":
        """Create a new random wallet."""
        return cls(Keypair(), rpc_url)

    @classmethod
    def from_private_key(
        cls, private_key: Union[str, list[int]], rpc_url: str = DEFAULT_RPC
    ) -> "Wallet":
        """Import wallet from private key (base58 string or byte array)."""
        try:
            if isinstance(private_key, str):
                keypair = Keypair.from_base58_string(private_key.strip())
            elif isinstance(private_key, list):
                keypair = Keypair.from_bytes(bytes(private_key))
            else:
                raise InvalidKeyError("Private key must be base58 string or byte array")
        except (ValueError, TypeError) as e:
            raise InvalidKeyError(f"Invalid private key: {e}") from e
        return cls(keypair, rpc_url)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], rpc_url: str = DEFAULT_RPC) -> "Wallet":
        """Import wallet from JSON file (solana-keygen format)."""
        path = Path(file_path).expanduser()
        if not path.exists():
            raise WalletNotFoundError(str(path))

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidKeyError(f"Invalid key file {path}: {e}") from e
        return cls.from_private_key(data, rpc_url)

    @property
    def pubkey(self) -> Pubkey:
        return self.keypair.pubkey()

    @property
    def address(self) -> str:
        """Wallet public key as base58."""
        return str(self.keypair.pubkey())

    @property
    def private_key(self) -> str:
        """Secret key as base58."""
        return str(self.keypair)

    async def get_balance(self, address: Optional[str] = None) -> Decimal:
        """Get SOL balance of this wallet, or of another address."""
        pubkey = Pubkey.from_string(address) if address else self.pubkey
        resp = await self.connection.get_balance(pubkey)
        return lamports_to_sol(resp.value)

    async def get_token_balance(self, mint_address: str) -> int:
        """Get token balance (base units) for a specific mint.

        Returns 0 if the wallet has no token account for the mint.
        """
        mint = Pubkey.from_string(mint_address)
        ata = get_associated_token_address(self.pubkey, mint)

        lookup = await lookup_account(self.connection, ata)
        lookup.raise_for_error()
        if lookup.state == AccountState.NOT_FOUND:
            return 0

        resp = await self.connection.get_token_account_balance(ata)
        return int(resp.value.amount)

    async def get_all_token_balances(self) -> list[dict]:
        """Get all non-zero SPL token balances."""
        resp = await self.connection.get_token_accounts_by_owner_json_parsed(
            self.pubkey, TokenAccountOpts(program_id=TOKEN_PROGRAM_ID)
        )

        balances = []
        for keyed in resp.value:
            info = keyed.account.data.parsed["info"]
            token_amount = info["tokenAmount"]
            ui_amount = token_amount.get("uiAmount") or 0
            if ui_amount <= 0:
                continue
            balances.append({
                "mint": info["mint"],
                "amount": ui_amount,
                "decimals": token_amount["decimals"],
                "ui_amount": token_amount.get("uiAmountString"),
            })
        return balances

    def save(self, file_path: Union[str, Path]) -> str:
        """Save wallet to file, readable by the owner only."""
        path = Path(file_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(list(bytes(self.keypair))), encoding="utf-8")
        os.chmod(path, 0o600)
        logger.info(f"Saved wallet {self.address} to {path}")
        return str(path)

    async def close(self) -> None:
        """Close the RPC connection."""
        await self.connection.close()

    def to_dict(self) -> dict:
        """Export wallet info (safe to log - no private key)."""
        return {
            "address": self.address,
            "public_key": self.address,
        }

    def __repr__(self) -> str:
        return f"Wallet(address={self.address}, rpc={self.rpc_url})"
