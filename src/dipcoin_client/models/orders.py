"""
Order-related models for DipCoin client.

Immutable data structures for order intents, canonical (signable) orders
and the signed legs produced from them.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple, Union

Amount = Union[str, int, float, Decimal]


class OrderSide(str, Enum):
    """Order side enumeration."""
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Order type enumeration."""
    MARKET = "MARKET"
    LIMIT = "LIMIT"


@dataclass(frozen=True)
class TriggerOrder:
    """Take-profit or stop-loss specification attached to an order.

    Attributes:
        trigger_price: Oracle price that activates the leg
        order_type: MARKET (default) or LIMIT
        order_price: Limit price; falls back to trigger_price for LIMIT legs
    """
    trigger_price: Amount
    order_type: OrderType = OrderType.MARKET
    order_price: Optional[Amount] = None


@dataclass(frozen=True)
class PlaceOrderParams:
    """Order intent supplied by the caller."""
    symbol: str  # e.g. "BTC-PERP"
    side: OrderSide
    order_type: OrderType
    quantity: Amount
    leverage: Amount
    price: Optional[Amount] = None  # required for LIMIT
    market: Optional[str] = None  # PerpetualID, falls back to symbol
    reduce_only: bool = False
    client_id: str = ""
    take_profit: Optional[TriggerOrder] = None
    stop_loss: Optional[TriggerOrder] = None


@dataclass(frozen=True)
class CancelOrderParams:
    """Cancel request for one or more order hashes."""
    symbol: str
    order_hashes: Tuple[str, ...]
    parent_address: Optional[str] = None  # defaults to the wallet address

    def __post_init__(self):
        # Accept any sequence but store it immutably
        object.__setattr__(self, "order_hashes", tuple(self.order_hashes or ()))


@dataclass(frozen=True)
class CanonicalOrder:
    """Signable order object; amounts are fixed-point integers."""
    market: str
    creator: str
    is_long: bool
    reduce_only: bool
    quantity: int
    price: int
    leverage: int
    salt: int
    post_only: bool = False
    orderbook_only: bool = True
    ioc: bool = False
    expiration: int = 0


@dataclass(frozen=True)
class SignedLeg:
    """A canonical order together with its signature."""
    order: CanonicalOrder
    signature: str
    trigger: Optional[TriggerOrder] = None

    @property
    def salt(self) -> int:
        return self.order.salt


@dataclass(frozen=True)
class SignedOrder:
    """Main leg plus the optional take-profit and stop-loss legs."""
    main: SignedLeg
    take_profit: Optional[SignedLeg] = None
    stop_loss: Optional[SignedLeg] = None


@dataclass(frozen=True)
class OrderResponse:
    """Acknowledgement envelope returned by place/cancel endpoints."""
    code: int
    data: Any = None
    message: Optional[str] = None
