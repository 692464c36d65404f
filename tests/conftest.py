# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing DipCoin client.
"""

import pytest
from typing import Any, Dict, List

from dipcoin_client.keys import SuiKeypair
from dipcoin_client.models import (
    OrderSide,
    OrderType,
    PlaceOrderParams,
    SDKConfig,
    TriggerOrder,
)
from dipcoin_client.sdk import DipCoinPerpSDK
from dipcoin_client.signer import OrderSigner, SaltSource

FIXED_MILLIS = 1_700_000_000_000


@pytest.fixture
def keypair() -> SuiKeypair:
    """Deterministic keypair for testing."""
    return SuiKeypair.from_seed(bytes(range(32)))


@pytest.fixture
def fixed_salt_source() -> SaltSource:
    """Salt source with a frozen clock."""
    return SaltSource(clock=lambda: FIXED_MILLIS)


@pytest.fixture
def signer(keypair, fixed_salt_source) -> OrderSigner:
    """Order signer using the deterministic keypair and clock."""
    return OrderSigner(keypair, fixed_salt_source)


@pytest.fixture
def sdk_config() -> SDKConfig:
    """Testnet configuration pointing at a fake host."""
    return SDKConfig.for_network("testnet", api_base_url="https://test-api.example.com")


@pytest.fixture
def sdk(keypair, sdk_config, fixed_salt_source) -> DipCoinPerpSDK:
    """SDK instance with deterministic identity and salts."""
    return DipCoinPerpSDK(keypair, sdk_config, salt_source=fixed_salt_source)


@pytest.fixture
def market_order_params() -> PlaceOrderParams:
    """BUY MARKET order on BTC-PERP."""
    return PlaceOrderParams(
        symbol="BTC-PERP",
        side=OrderSide.BUY,
        order_type=OrderType.MARKET,
        quantity="0.01",
        leverage="10",
        market="0xabc",
    )


@pytest.fixture
def limit_order_with_tpsl() -> PlaceOrderParams:
    """SELL LIMIT order with a LIMIT take-profit and MARKET stop-loss."""
    return PlaceOrderParams(
        symbol="ETH-PERP",
        side=OrderSide.SELL,
        order_type=OrderType.LIMIT,
        quantity="1.5",
        price="3500.25",
        leverage="5",
        market="0xc1b1cf3d774bcfcbd6d71158a4259f2d99fccbf64ffc34f32700f8a771587d99",
        client_id="client-42",
        take_profit=TriggerOrder(trigger_price="3300", order_type=OrderType.LIMIT),
        stop_loss=TriggerOrder(trigger_price="3700"),
    )


# Mock data fixtures
@pytest.fixture
def account_info_response_data() -> Dict[str, Any]:
    """Mock account info envelope."""
    return {
        "code": 200,
        "data": {
            "walletBalance": "1000.5",
            "totalUnrealizedProfit": "-12.25",
            "accountValue": "988.25",
            "freeCollateral": "900",
        },
    }


@pytest.fixture
def positions_data() -> List[Dict[str, Any]]:
    """Mock position records."""
    return [
        {
            "id": "pos-1",
            "userAddress": "0x1234",
            "symbol": "BTC-PERP",
            "avgEntryPrice": "65000",
            "margin": "65",
            "leverage": "10",
            "quantity": "0.01",
            "side": "LONG",
            "isLong": True,
            "marginType": "ISOLATED",
            "oraclePrice": "65100",
            "liqPrice": "59000",
            "positionValue": "651",
            "unrealizedProfit": "1",
            "roe": "0.015",
            "fundingDue": "0",
            "createdAt": 1700000000000,
            "updatedAt": 1700000001000,
        }
    ]


@pytest.fixture
def open_orders_data() -> List[Dict[str, Any]]:
    """Mock open order records."""
    return [
        {
            "hash": "0xorderhash1",
            "symbol": "BTC-PERP",
            "side": "BUY",
            "orderType": "LIMIT",
            "price": "60000",
            "quantity": "0.02",
            "filledQty": "0",
            "leverage": "10",
            "status": "OPEN",
            "isLong": True,
            "reduceOnly": False,
            "createdAt": 1700000000000,
            "updatedAt": 1700000000000,
        }
    ]
