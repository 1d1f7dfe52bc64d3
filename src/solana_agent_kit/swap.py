"""Token swaps via the Jupiter aggregator.

Uses Jupiter Swap API v6:
- GET  /quote  -> best route for a pair/amount
- POST /swap   -> unsigned transaction for that route (base64)
API docs: https://station.jup.ag/docs/apis/swap-api
"""

import base64
import logging
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Union

import httpx
from solders.transaction import VersionedTransaction

from solana_agent_kit.aliases import (
    DEFAULT_TOKEN_DECIMALS,
    NATIVE_DECIMALS,
    NATIVE_MINT,
    REFERENCE_DECIMALS,
    REFERENCE_MINT,
    resolve_mint,
)
from solana_agent_kit.config import get_settings
from solana_agent_kit.errors import (
    AgentKitError,
    PriceError,
    QuoteError,
    SwapBuildError,
    SwapConfirmationError,
)
from solana_agent_kit.ledger import explorer_url, send_versioned_and_confirm

if TYPE_CHECKING:
    from solana_agent_kit.wallet import Wallet

logger = logging.getLogger(__name__)

SWAP_MAX_RETRIES = 3


@dataclass
class QuoteRecord:
    """A swap quote from Jupiter."""

    input_mint: str
    output_mint: str
    in_amount: str
    out_amount: str
    price_impact_pct: Optional[str]
    route_plan: list = field(default_factory=list)
    raw: dict = field(default_factory=dict)  # Full response, needed verbatim for /swap

    @property
    def route_labels(self) -> list[str]:
        """DEX labels along the route."""
        labels = []
        for step in self.route_plan:
            label = (step.get("swapInfo") or {}).get("label")
            if label:
                labels.append(label)
        return labels

    def to_dict(self) -> dict:
        return {
            "input_mint": self.input_mint,
            "output_mint": self.output_mint,
            "in_amount": self.in_amount,
            "out_amount": self.out_amount,
            "price_impact_pct": self.price_impact_pct,
            "route": self.route_labels,
        }


@dataclass
class SwapResult:
    """Outcome of an executed swap."""

    signature: str
    input_mint: str
    output_mint: str
    in_amount: str
    out_amount: str
    explorer_url: str

    def to_dict(self) -> dict:
        return asdict(self)


class Swapper:
    """Quote and execute swaps for a wallet through Jupiter."""

    def __init__(
        self,
        wallet: "Wallet",
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize swapper.

        Args:
            wallet: Wallet that signs and pays for swaps
            base_url: Jupiter API base URL override
            transport: Optional httpx transport (tests)
        """
        settings = get_settings()
        self.wallet = wallet
        self.base_url = (base_url or settings.jupiter_api_url).rstrip("/")
        self.timeout = settings.http_timeout
        self.default_slippage_bps = settings.default_slippage_bps
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: Union[int, str],
        slippage_bps: Optional[int] = None,
    ) -> QuoteRecord:
        """Get a quote for a swap.

        Args:
            input_mint: Source token symbol or mint
            output_mint: Destination token symbol or mint
            amount: Input amount in base units
            slippage_bps: Slippage tolerance in basis points
                (default: DEFAULT_SLIPPAGE_BPS)

        Raises:
            QuoteError: If Jupiter returns a non-success status
        """
        if slippage_bps is None:
            slippage_bps = self.default_slippage_bps
        input_addr = resolve_mint(input_mint)
        output_addr = resolve_mint(output_mint)

        params = {
            "inputMint": input_addr,
            "outputMint": output_addr,
            "amount": str(amount),
            "slippageBps": str(slippage_bps),
        }

        logger.debug(f"Requesting quote: {amount} {input_addr} -> {output_addr}")
        async with self._client() as client:
            response = await client.get(f"{self.base_url}/quote", params=params)

        if not response.is_success:
            logger.warning(f"Jupiter quote error: {response.status_code} - {response.text}")
            raise QuoteError(response.status_code, response.text)

        data = response.json()
        return QuoteRecord(
            input_mint=input_addr,
            output_mint=output_addr,
            in_amount=data.get("inAmount"),
            out_amount=data.get("outAmount"),
            price_impact_pct=data.get("priceImpactPct"),
            route_plan=data.get("routePlan") or [],
            raw=data,
        )

    async def swap(
        self,
        input_mint: str,
        output_mint: str,
        amount: Union[int, str],
        slippage_bps: Optional[int] = None,
    ) -> SwapResult:
        """Execute a swap.

        Raises:
            QuoteError: Quote request failed
            SwapBuildError: Swap-build request failed
            SwapConfirmationError: Transaction landed with an on-chain error
        """
        quote = await self.get_quote(input_mint, output_mint, amount, slippage_bps)

        async with self._client() as client:
            response = await client.post(
                f"{self.base_url}/swap",
                json={
                    "quoteResponse": quote.raw,
                    "userPublicKey": self.wallet.address,
                    "wrapAndUnwrapSol": True,
                },
            )

        if not response.is_success:
            logger.warning(f"Jupiter swap error: {response.status_code} - {response.text}")
            raise SwapBuildError(response.status_code, response.text)

        swap_transaction = response.json().get("swapTransaction")
        if not swap_transaction:
            raise SwapBuildError(response.status_code, "No swap transaction returned")

        # Decode and sign transaction
        unsigned = VersionedTransaction.from_bytes(base64.b64decode(swap_transaction))
        signed = VersionedTransaction(unsigned.message, [self.wallet.keypair])

        signature = await send_versioned_and_confirm(
            self.wallet,
            signed,
            max_retries=SWAP_MAX_RETRIES,
            error_cls=SwapConfirmationError,
        )

        logger.info(
            f"Swapped {quote.in_amount} {quote.input_mint} -> "
            f"{quote.out_amount} {quote.output_mint} ({signature})"
        )
        return SwapResult(
            signature=signature,
            input_mint=quote.input_mint,
            output_mint=quote.output_mint,
            in_amount=quote.in_amount,
            out_amount=quote.out_amount,
            explorer_url=explorer_url(signature),
        )

    async def get_price(self, token: str) -> Decimal:
        """Get price of a token in USDC.

        Quotes one whole token against USDC. Decimals are assumed: 9 for SOL,
        6 for everything else.
        """
        mint = resolve_mint(token)
        decimals = NATIVE_DECIMALS if mint == NATIVE_MINT else DEFAULT_TOKEN_DECIMALS
        amount = 10 ** decimals

        try:
            quote = await self.get_quote(mint, REFERENCE_MINT, amount)
            return Decimal(quote.out_amount) / Decimal(10 ** REFERENCE_DECIMALS)
        except (AgentKitError, httpx.HTTPError, ArithmeticError, TypeError) as e:
            raise PriceError(token, str(e)) from e
