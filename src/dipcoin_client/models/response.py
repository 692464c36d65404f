"""
Response envelopes for DipCoin client.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResponse:
    """Normalized server envelope ``{code, data, message}``."""
    code: int
    data: Any = None
    message: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ApiResponse":
        if not isinstance(payload, dict):
            # Bare payloads without an envelope are treated as data
            return cls(code=0, data=payload)

        raw_code = payload.get("code", 0)
        try:
            code = int(raw_code)
        except (TypeError, ValueError):
            code = 0

        message = payload.get("message") or payload.get("msg")
        return cls(
            code=code,
            data=payload.get("data"),
            message=str(message) if message else None,
        )


@dataclass(frozen=True)
class SDKResponse(Generic[T]):
    """Uniform result returned by every public SDK operation."""
    status: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "SDKResponse[T]":
        return cls(status=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "SDKResponse[T]":
        return cls(status=False, error=error)

    def __bool__(self) -> bool:
        return self.status
