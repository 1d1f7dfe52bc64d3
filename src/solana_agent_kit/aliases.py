"""Static symbol tables and unit conversions.

Token tickers resolve to SPL mint addresses and validator names to vote
accounts. Anything not in a table is assumed to already be an address.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Union

LAMPORTS_PER_SOL = 1_000_000_000

# Decimal assumptions used for price quotes
NATIVE_DECIMALS = 9
DEFAULT_TOKEN_DECIMALS = 6  # Most SPL tokens
REFERENCE_DECIMALS = 6  # USDC

# Token mint addresses on Solana mainnet
TOKENS = MappingProxyType({
    "SOL": "So11111111111111111111111111111111111111112",  # Wrapped SOL
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",
    "BONK": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
    "JUP": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "WIF": "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm",
    "PYTH": "HZ1JovNiVvGrGNiiYvEozEVgZ58xaU3RKwX8eACQBCt3",
})

# Validator vote accounts
VALIDATORS = MappingProxyType({
    "jito": "J1to1yufRnoWn81KYg1XkTWzmKjnYSnmE2VY8DGUJ9Qv",
    "marinade": "mrgn28BhocwdAUEenen3Sw2MR9cPKDpLkDvzDdR7DBD",
    "solflare": "SoLFLaReRVNagJzYYGppSkqzkhmHZ5ZR8EUpzqLEAaL",
    "everstake": "EverSFw9uN5t1V8kS3ficHUcKffSjwpGzUSGd7mgmSks",
})

NATIVE_MINT = TOKENS["SOL"]
REFERENCE_MINT = TOKENS["USDC"]


def resolve_mint(token_or_mint: str) -> str:
    """Resolve token symbol or mint address to mint address."""
    return TOKENS.get(token_or_mint.upper(), token_or_mint)


def resolve_validator(validator_or_address: str) -> str:
    """Resolve validator name or vote account address."""
    return VALIDATORS.get(validator_or_address.lower(), validator_or_address)


def sol_to_lamports(amount: Union[Decimal, float, int, str]) -> int:
    """Convert a SOL amount to lamports, truncating any sub-lamport remainder."""
    return int(Decimal(str(amount)) * LAMPORTS_PER_SOL)


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert lamports to SOL."""
    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)


def list_tokens() -> dict[str, str]:
    """Known token symbols and their mints."""
    return dict(TOKENS)


def list_validators() -> dict[str, str]:
    """Known validator names and their vote accounts."""
    return dict(VALIDATORS)
