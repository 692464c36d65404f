"""
Exception hierarchy for the DipCoin client.

Internal layers raise these; the SDK facade converts every one of them
into a failed ``SDKResponse`` carrying only the message.
"""

from typing import Any, Optional


class DipCoinError(Exception):
    """Base exception for all DipCoin client errors."""
    pass


class KeyImportError(DipCoinError):
    """Raised when a private key cannot be decoded or uses an unsupported scheme."""
    pass


class NumericFormatError(DipCoinError):
    """Raised when a decimal amount is not a valid non-negative number."""
    pass


class ValidationError(DipCoinError):
    """Raised when caller input is missing or ill-formed."""
    pass


class SigningError(DipCoinError):
    """Raised when the signing primitive rejects a message."""
    pass


class TransportError(DipCoinError):
    """Network failure, timeout or non-2xx HTTP response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class ServerError(DipCoinError):
    """Envelope returned with a code other than 200."""

    def __init__(self, message: str, code: Optional[int] = None, response_data: Any = None):
        super().__init__(message)
        self.code = code
        self.response_data = response_data
