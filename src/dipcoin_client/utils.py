"""
Utility functions for DipCoin client.

Fixed-point ("wei") conversion and small helpers for payload handling.
All amount arithmetic goes through Decimal; floats are converted via str().
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext
from typing import Any, Dict, List, Union

from .constants import WEI_DECIMALS
from .errors import NumericFormatError

logger = logging.getLogger(__name__)

# Minimum working precision; widened to the input when it has more digits
_PRECISION = 80


def _to_decimal(value: Union[str, int, float, Decimal]) -> Decimal:
    """Parse a human-entered amount into a finite, non-negative Decimal."""
    if isinstance(value, bool) or value is None:
        raise NumericFormatError(f"Invalid numeric value: {value!r}")

    try:
        decimal_value = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        raise NumericFormatError(f"Invalid numeric value: {value!r}") from None

    if not decimal_value.is_finite():
        raise NumericFormatError(f"Numeric value must be finite: {value!r}")
    if decimal_value < 0:
        raise NumericFormatError(f"Numeric value must not be negative: {value!r}")
    return decimal_value


def to_wei(value: Union[str, int, float, Decimal], decimals: int = WEI_DECIMALS) -> int:
    """Scale a decimal amount to a fixed-point integer, truncating extra digits."""
    decimal_value = _to_decimal(value)
    with localcontext() as ctx:
        # scaleb must not round: keep every digit of the input
        ctx.prec = max(_PRECISION, len(decimal_value.as_tuple().digits))
        scaled = decimal_value.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def to_wei_str(value: Union[str, int, float, Decimal], decimals: int = WEI_DECIMALS) -> str:
    """Fixed-point integer rendered as a decimal string, as sent on the wire."""
    return str(to_wei(value, decimals))


def from_wei(value: Union[str, int], decimals: int = WEI_DECIMALS) -> str:
    """Convert a fixed-point integer back to a plain decimal string (e.g. "1.5")."""
    try:
        integer_value = int(value)
    except (TypeError, ValueError):
        raise NumericFormatError(f"Invalid fixed-point value: {value!r}") from None

    with localcontext() as ctx:
        ctx.prec = max(_PRECISION, len(str(abs(integer_value))))
        normalized = Decimal(integer_value).scaleb(-decimals).normalize()
    return format(normalized, "f")


def format_error(error: Any) -> str:
    """Best-effort human readable message for any raised error."""
    if isinstance(error, BaseException):
        message = str(error)
        if message:
            return message
        return type(error).__name__ or "Unknown error"
    if isinstance(error, dict):
        return str(error.get("message") or error.get("msg") or error)
    if error:
        return str(error)
    return "Unknown error"


def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove None values from dictionary."""
    return {key: value for key, value in data.items() if value is not None}


def normalize_list_payload(payload: Any) -> List[Any]:
    """
    Normalize a list-bearing payload to a plain list.

    Accepts either a bare list or a paginated wrapper ``{"data": [...]}``
    and always returns a list. Missing payloads yield an empty list.
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        inner = payload.get("data")
        if isinstance(inner, list):
            return inner
        if inner is None:
            return []

    logger.warning(f"Unexpected list payload shape: {type(payload).__name__}")
    return []


def validate_url(url: str) -> bool:
    """Validate URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://"))
