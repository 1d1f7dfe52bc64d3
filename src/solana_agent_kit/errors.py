"""Exception hierarchy for agent kit operations.

Error classes:
- Input validation (raised before any remote call)
- Upstream HTTP failures (quote/swap/AgentDEX services)
- Ledger submission/confirmation failures
"""

from typing import Any, Optional


class AgentKitError(Exception):
    """Base exception for all agent kit errors."""
    pass


class InputValidationError(AgentKitError):
    """Raised when required caller input is missing or invalid."""
    pass


class WalletNotFoundError(AgentKitError):
    """Raised when the wallet key file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Wallet not found at {path}")


class InvalidKeyError(AgentKitError):
    """Raised when key material cannot be decoded into a keypair."""
    pass


class UpstreamHTTPError(AgentKitError):
    """Non-success response from an external HTTP service."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class QuoteError(UpstreamHTTPError):
    """Quote endpoint returned a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Quote failed ({status_code}): {body}", status_code, body)


class SwapBuildError(UpstreamHTTPError):
    """Swap-build endpoint returned a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(
            f"Swap transaction failed ({status_code}): {body}", status_code, body
        )


class AgentDEXError(UpstreamHTTPError):
    """AgentDEX API returned a non-success status."""

    def __init__(self, method: str, path: str, status_code: int, body: str = ""):
        self.method = method
        self.path = path
        super().__init__(
            f"AgentDEX API {method} {path} failed ({status_code}): {body}",
            status_code,
            body,
        )


class TransactionFailedError(AgentKitError):
    """The ledger reported an error for a submitted transaction.

    Attributes:
        signature: Transaction signature
        err: Ledger error payload, unmodified
    """

    def __init__(self, signature: str, err: Any):
        self.signature = signature
        self.err = err
        super().__init__(f"Transaction {signature} failed: {err}")


class SwapConfirmationError(TransactionFailedError):
    """A swap transaction landed with an on-chain error."""
    pass


class PriceError(AgentKitError):
    """Price could not be derived for a token."""

    def __init__(self, token: str, reason: Optional[str] = None):
        self.token = token
        super().__init__(f"Could not get price for {token}: {reason}")
