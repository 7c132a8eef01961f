"""Exceptions raised by the Fusion+ SDK gateway."""

from typing import Any, Optional


class FusionSDKError(Exception):
    """Base exception for SDK failures."""
    pass


class FusionAPIError(FusionSDKError):
    """Relayer returned a non-success response or could not be reached.

    ``status_code`` is 0 for transport failures (DNS, timeout, reset).
    """

    def __init__(self, message: str, status_code: int = 0, payload: Optional[Any] = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class SignerNotConfiguredError(FusionSDKError):
    """An operation needed a blockchain signer but none was configured."""
    pass


class InvalidPresetError(FusionSDKError):
    """Requested auction preset is not present in the quote."""

    def __init__(self, preset: str, available: list[str]):
        self.preset = preset
        self.available = available
        super().__init__(
            f"Invalid preset: {preset}. Available: {', '.join(available)}"
        )


class HashLockError(FusionSDKError, ValueError):
    """Secrets or leaves cannot form a valid hash lock."""
    pass


class WalletMismatchError(FusionSDKError, ValueError):
    """Order was requested for a wallet other than the one the quote was made for."""
    pass
