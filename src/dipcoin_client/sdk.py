"""
DipCoin Client - Main orchestration module.

This module provides the DipCoinPerpSDK facade that coordinates
all client functionality:
- Data models are immutable structures in models/
- Keys and signatures are handled by keys.py and signer.py
- HTTP operations are handled by http_client.py
- Session management is handled by session_manager.py
- API methods are implemented in api_methods.py

Every public operation returns an SDKResponse; errors never escape.
"""

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable, List, Optional, Union

import nacl.signing
from dotenv import load_dotenv

from .api_methods import APIMethods
from .constants import DEFAULT_NETWORK, DEFAULT_TIMEOUT
from .errors import DipCoinError
from .http_client import HttpClient
from .keys import SuiKeypair, resolve_keypair
from .models import (
    AccountInfo,
    CancelOrderParams,
    Network,
    OpenOrder,
    OrderBook,
    OrderResponse,
    PlaceOrderParams,
    Position,
    SDKConfig,
    SDKResponse,
    TradingPair,
)
from .monitoring import OperationRecord, PerformanceMonitor, Statistics
from .session_manager import SessionManager
from .signer import OrderSigner, SaltSource
from .utils import format_error

load_dotenv()
logger = logging.getLogger(__name__)

PrivateKey = Union[str, SuiKeypair, nacl.signing.SigningKey]


class DipCoinPerpSDK:
    """
    DipCoin perpetual trading SDK.

    Construction resolves the keypair and configuration once; both stay
    immutable for the lifetime of the instance. Only the bearer token can
    change afterwards (see ``set_auth_token``), and rotating it while
    requests are in flight is the caller's responsibility.
    """

    def __init__(
        self,
        private_key: PrivateKey,
        config: SDKConfig,
        salt_source: Optional[SaltSource] = None,
    ):
        """
        Initialize SDK.

        Args:
            private_key: Exported private key string or keypair
            config: Resolved SDK configuration

        Raises:
            KeyImportError: If the private key cannot be imported
        """
        self._config = config
        self._keypair = resolve_keypair(private_key)
        self._wallet_address = self._keypair.address

        self._session_manager = SessionManager(config)
        self._http_client = HttpClient(config, self._session_manager)
        self._http_client.set_wallet_address(self._wallet_address)

        self._signer = OrderSigner(self._keypair, salt_source)
        self._api_methods = APIMethods(self._http_client, self._signer)
        self._monitor = PerformanceMonitor()
        self._closed = False

        logger.info(f"DipCoin SDK initialized for {self._wallet_address} on {config.network.value}")

    @classmethod
    def from_env(cls) -> "DipCoinPerpSDK":
        """Create SDK from environment variables."""
        private_key = os.getenv("DIPCOIN_PRIVATE_KEY", "")
        config = SDKConfig.for_network(
            os.getenv("DIPCOIN_NETWORK", DEFAULT_NETWORK),
            api_base_url=os.getenv("DIPCOIN_API_BASE_URL") or None,
            custom_rpc=os.getenv("DIPCOIN_CUSTOM_RPC") or None,
            timeout=float(os.getenv("DIPCOIN_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
        return cls(private_key, config)

    @property
    def address(self) -> str:
        """Wallet address."""
        return self._wallet_address

    @property
    def config(self) -> SDKConfig:
        """SDK configuration."""
        return self._config

    def set_auth_token(self, token: Optional[str]) -> None:
        """Set the bearer token used on subsequent requests."""
        self._http_client.set_auth_token(token)

    # Order methods
    async def place_order(self, params: PlaceOrderParams) -> SDKResponse[OrderResponse]:
        """Place an order, with optional take-profit and stop-loss legs."""
        return await self._execute("place_order", self._api_methods.place_order, params)

    async def cancel_order(self, params: CancelOrderParams) -> SDKResponse[OrderResponse]:
        """Cancel one or more orders by hash."""
        return await self._execute(
            "cancel_order", self._api_methods.cancel_order, params, self._wallet_address
        )

    # Account methods
    async def get_account_info(self) -> SDKResponse[AccountInfo]:
        """Get account information."""
        return await self._execute("get_account_info", self._api_methods.get_account_info)

    async def get_positions(self, symbol: Optional[str] = None) -> SDKResponse[List[Position]]:
        """Get positions, optionally filtered by symbol."""
        return await self._execute("get_positions", self._api_methods.get_positions, symbol)

    async def get_open_orders(self, symbol: Optional[str] = None) -> SDKResponse[List[OpenOrder]]:
        """Get open orders, optionally filtered by symbol."""
        return await self._execute("get_open_orders", self._api_methods.get_open_orders, symbol)

    # Market methods
    async def get_trading_pairs(self) -> SDKResponse[List[TradingPair]]:
        """Get available trading pairs."""
        return await self._execute("get_trading_pairs", self._api_methods.get_trading_pairs)

    async def get_order_book(self, symbol: str) -> SDKResponse[OrderBook]:
        """Get the order book for a trading pair."""
        return await self._execute("get_order_book", self._api_methods.get_order_book, symbol)

    async def authenticate(self) -> SDKResponse[str]:
        """Onboard the wallet and keep the returned JWT for later requests."""
        result = await self._execute("authenticate", self._api_methods.authorize, self._keypair)
        if result.status:
            self._http_client.set_auth_token(result.data)
            logger.info(f"Authenticated {self._wallet_address}")
        return result

    # Monitoring
    def get_statistics(self) -> Statistics:
        """Get request statistics."""
        return self._monitor.statistics

    def get_operation_stats(self, operation: str) -> Statistics:
        """Get statistics for one operation, e.g. "place_order"."""
        return self._monitor.get_operation_stats(operation)

    def get_recent_requests(self, count: int = 10) -> List[OperationRecord]:
        """Get the most recent operation records, oldest first."""
        return self._monitor.get_recent_requests(count)

    def reset_statistics(self) -> None:
        """Clear all recorded statistics."""
        self._monitor.reset()

    async def close(self) -> None:
        """Close SDK and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            self._closed = True
            logger.info("DipCoin SDK closed")

    async def _execute(
        self,
        operation: str,
        api_call: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> SDKResponse:
        """Run an API method and fold its outcome into an SDKResponse."""
        if self._closed:
            return SDKResponse.fail("Client is closed")

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        try:
            result = SDKResponse.ok(await api_call(*args))
        except DipCoinError as e:
            logger.warning(f"{operation} failed: {format_error(e)}")
            result = SDKResponse.fail(format_error(e))
        except Exception as e:
            logger.exception(f"Unexpected error in {operation}")
            result = SDKResponse.fail(format_error(e))

        duration_ms = (loop.time() - start_time) * 1000
        self._monitor.record(operation, result.status, duration_ms, result.error)
        return result

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def init_dipcoin_perp_sdk(
    private_key: PrivateKey,
    network: Union[Network, str] = DEFAULT_NETWORK,
    api_base_url: Optional[str] = None,
    custom_rpc: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> DipCoinPerpSDK:
    """
    Factory function to create the SDK with network defaults.

    Args:
        private_key: Exported private key string or keypair
        network: "mainnet" or "testnet"
        api_base_url: Overrides the network's default API URL
        custom_rpc: Optional custom Sui RPC endpoint
        timeout: Request timeout in seconds

    Returns:
        Configured DipCoinPerpSDK instance
    """
    config = SDKConfig.for_network(network, api_base_url, custom_rpc, timeout)
    return DipCoinPerpSDK(private_key, config)
