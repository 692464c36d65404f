"""
Data models for DipCoin client.

This package contains all data structures used throughout the DipCoin client,
following the state-first principle with immutable data structures.
"""

from .config import Network, SDKConfig, init_sdk_options
from .orders import (
    OrderSide,
    OrderType,
    TriggerOrder,
    PlaceOrderParams,
    CancelOrderParams,
    CanonicalOrder,
    SignedLeg,
    SignedOrder,
    OrderResponse,
)
from .account import AccountInfo, Position, OpenOrder
from .market import TradingPair, OrderBook, OrderBookLevel
from .response import ApiResponse, SDKResponse

__all__ = [
    # Configuration
    "Network",
    "SDKConfig",
    "init_sdk_options",
    # Orders
    "OrderSide",
    "OrderType",
    "TriggerOrder",
    "PlaceOrderParams",
    "CancelOrderParams",
    "CanonicalOrder",
    "SignedLeg",
    "SignedOrder",
    "OrderResponse",
    # Account
    "AccountInfo",
    "Position",
    "OpenOrder",
    # Market
    "TradingPair",
    "OrderBook",
    "OrderBookLevel",
    # Envelopes
    "ApiResponse",
    "SDKResponse",
]
