"""
Account-related models for DipCoin client.

Immutable data structures for account, position and open order information.
Amounts stay as the decimal strings the server sends.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional


def _str(data: Dict[str, Any], key: str, default: str = "0") -> str:
    value = data.get(key)
    if value is None or value == "":
        return default
    return str(value)


def _bool(data: Dict[str, Any], key: str) -> bool:
    """Booleans may arrive as JSON booleans or as "true"/"false" strings."""
    value = data.get(key)
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _timestamp(data: Dict[str, Any], key: str) -> int:
    """Millisecond timestamp; unparseable values become 0."""
    value = data.get(key)
    if value is None or value == "" or isinstance(value, bool):
        return 0
    try:
        return int(Decimal(str(value)))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class AccountInfo:
    """Account information data structure."""
    wallet_balance: str = "0"
    total_unrealized_profit: str = "0"
    account_value: str = "0"
    free_collateral: str = "0"
    total_margin: str = "0"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountInfo":
        return cls(
            wallet_balance=_str(data, "walletBalance"),
            total_unrealized_profit=_str(data, "totalUnrealizedProfit"),
            account_value=_str(data, "accountValue"),
            free_collateral=_str(data, "freeCollateral"),
            total_margin=_str(data, "totalMargin"),
        )


@dataclass(frozen=True)
class Position:
    """Position data structure."""
    symbol: str
    side: str  # LONG or SHORT
    is_long: bool
    quantity: str
    avg_entry_price: str
    leverage: str
    margin: str
    margin_type: str
    oracle_price: str
    liquidation_price: str
    position_value: str
    unrealized_profit: str
    roe: str
    funding_due: str
    position_id: Optional[str] = None
    user_address: Optional[str] = None
    tp_price: Optional[str] = None
    sl_price: Optional[str] = None
    created_at: int = 0
    updated_at: int = 0
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Position":
        return cls(
            symbol=_str(data, "symbol", ""),
            side=_str(data, "side", ""),
            is_long=_bool(data, "isLong"),
            quantity=_str(data, "quantity"),
            avg_entry_price=_str(data, "avgEntryPrice"),
            leverage=_str(data, "leverage"),
            margin=_str(data, "margin"),
            margin_type=_str(data, "marginType", ""),
            oracle_price=_str(data, "oraclePrice"),
            liquidation_price=_str(data, "liquidationPrice", _str(data, "liqPrice")),
            position_value=_str(data, "positionValue"),
            unrealized_profit=_str(data, "unrealizedProfit"),
            roe=_str(data, "roe"),
            funding_due=_str(data, "fundingDue"),
            position_id=data.get("positionId") or data.get("id"),
            user_address=data.get("userAddress"),
            tp_price=data.get("tpPrice"),
            sl_price=data.get("slPrice"),
            created_at=_timestamp(data, "createdAt"),
            updated_at=_timestamp(data, "updatedAt"),
            raw=dict(data),
        )


@dataclass(frozen=True)
class OpenOrder:
    """Open order data structure."""
    hash: str
    symbol: str
    side: str
    order_type: str
    price: str
    quantity: str
    filled_qty: str
    leverage: str
    status: str
    is_long: bool
    reduce_only: bool
    created_at: int = 0
    updated_at: int = 0
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpenOrder":
        return cls(
            hash=_str(data, "hash", ""),
            symbol=_str(data, "symbol", ""),
            side=_str(data, "side", ""),
            order_type=_str(data, "orderType", ""),
            price=_str(data, "price"),
            quantity=_str(data, "quantity"),
            filled_qty=_str(data, "filledQty"),
            leverage=_str(data, "leverage"),
            status=_str(data, "status", ""),
            is_long=_bool(data, "isLong"),
            reduce_only=_bool(data, "reduceOnly"),
            created_at=_timestamp(data, "createdAt"),
            updated_at=_timestamp(data, "updatedAt"),
            raw=dict(data),
        )
