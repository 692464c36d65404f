"""
Market-related models for DipCoin client.

Immutable data structures for trading pairs and order book snapshots.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TradingPair:
    """Trading pair information."""
    symbol: str
    perp_id: str  # PerpetualID, used as the order "market"
    coin_name: Optional[str] = None
    max_leverage: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradingPair":
        max_leverage = data.get("maxLeverage")
        return cls(
            symbol=str(data.get("symbol", "")),
            perp_id=str(data.get("perpId", "")),
            coin_name=data.get("coinName"),
            max_leverage=str(max_leverage) if max_leverage is not None else None,
            raw=dict(data),
        )


@dataclass(frozen=True)
class OrderBookLevel:
    """Single price level."""
    price: str
    quantity: str


@dataclass(frozen=True)
class OrderBook:
    """Order book snapshot; bids best-first (descending), asks ascending."""
    symbol: str
    bids: Tuple[OrderBookLevel, ...] = ()
    asks: Tuple[OrderBookLevel, ...] = ()
    timestamp: Optional[int] = None

    @property
    def best_bid(self) -> Optional[OrderBookLevel]:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> Optional[OrderBookLevel]:
        return self.asks[0] if self.asks else None

    @classmethod
    def from_dict(cls, symbol: str, data: Dict[str, Any]) -> "OrderBook":
        timestamp = data.get("timestamp")
        return cls(
            symbol=symbol,
            bids=_parse_levels(data.get("bids") or []),
            asks=_parse_levels(data.get("asks") or []),
            timestamp=int(timestamp) if timestamp is not None else None,
        )


def _parse_levels(levels: List[Any]) -> Tuple[OrderBookLevel, ...]:
    """Levels arrive either as {price, quantity} objects or [price, quantity] pairs."""
    parsed = []
    for level in levels:
        if isinstance(level, dict):
            parsed.append(OrderBookLevel(
                price=str(level.get("price", "0")),
                quantity=str(level.get("quantity", "0")),
            ))
        else:
            price, quantity = level[0], level[1]
            parsed.append(OrderBookLevel(price=str(price), quantity=str(quantity)))
    return tuple(parsed)
