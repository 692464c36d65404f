"""
DipCoin Client - Python client for the DipCoin perpetuals API.

This package provides an async client that signs and submits perpetual
futures orders and queries account, position and market state.
"""

from .sdk import DipCoinPerpSDK, init_dipcoin_perp_sdk
from .errors import (
    DipCoinError,
    KeyImportError,
    NumericFormatError,
    ValidationError,
    SigningError,
    TransportError,
    ServerError,
)
from .keys import SuiKeypair, from_exported_keypair
from .models import (
    # Configuration
    Network,
    SDKConfig,
    init_sdk_options,
    # Orders
    OrderSide,
    OrderType,
    TriggerOrder,
    PlaceOrderParams,
    CancelOrderParams,
    OrderResponse,
    # Account
    AccountInfo,
    Position,
    OpenOrder,
    # Market
    TradingPair,
    OrderBook,
    OrderBookLevel,
    SDKResponse,
)
from .utils import to_wei, from_wei

__all__ = [
    # Main Client
    "DipCoinPerpSDK",
    "init_dipcoin_perp_sdk",
    "Network",
    "SDKConfig",
    "init_sdk_options",
    "SuiKeypair",
    "from_exported_keypair",
    "OrderSide",
    "OrderType",
    "TriggerOrder",
    "PlaceOrderParams",
    "CancelOrderParams",
    "OrderResponse",
    "AccountInfo",
    "Position",
    "OpenOrder",
    "TradingPair",
    "OrderBook",
    "OrderBookLevel",
    "SDKResponse",
    "to_wei",
    "from_wei",
    # Errors
    "DipCoinError",
    "KeyImportError",
    "NumericFormatError",
    "ValidationError",
    "SigningError",
    "TransportError",
    "ServerError",
]
