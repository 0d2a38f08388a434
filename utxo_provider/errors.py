"""Exceptions raised by the UTxO provider."""

from typing import Optional


class ProviderError(Exception):
    """Base exception for provider errors."""


class FetchError(ProviderError):
    """Retryable failure fetching from the indexer. Retry the whole call."""


class ApiError(FetchError):
    """Error reported by the Blockfrost API itself."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Blockfrost error {status_code}: {message or 'unknown error'}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class DomainError(ProviderError):
    """Non-retryable violation of a ledger or data invariant."""

class UnitNotFoundError(DomainError):
    """No holder found for a unit."""

class NotSingletonError(DomainError):
    """Unit is held by more than one address or UTxO."""

class UnsupportedScriptError(DomainError):
    """Reference script kind cannot be resolved."""

class DatumNotFoundError(DomainError):
    """No datum is known for a datum hash."""

class UnsupportedDatumError(DomainError, ValueError):
    """Tagged JSON datum matches none of the Plutus Data shapes."""


class SubmitError(ProviderError):
    """Transaction submission was rejected."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AwaitTxTimeoutError(ProviderError):
    """Transaction was not confirmed before the deadline."""
