"""
Constants for the DipCoin client.
"""

from types import MappingProxyType

# API Configuration
DEFAULT_API_URLS = MappingProxyType({
    "mainnet": "https://gray-api.dipcoin.io",
    "testnet": "https://demoapi.dipcoin.io/exchange",
})
DEFAULT_NETWORK = "testnet"
DEFAULT_TIMEOUT = 30.0

# Fixed-point scaling used for every signed amount
WEI_DECIMALS = 18

# Envelope code reported on success
SUCCESS_CODE = 200

# Request headers
WALLET_ADDRESS_HEADER = "X-Wallet-Address"
AUTHORIZATION_HEADER = "Authorization"

# TP/SL legs are triggered off the oracle price
TRIGGER_WAY = "oracle"

# Onboarding
ONBOARDING_URL = "https://www.dipcoin.io"

API_ENDPOINTS = MappingProxyType({
    "place_order": "/api/perp-trade-api/trade/placeorder",
    "cancel_order": "/api/perp-trade-api/trade/cancelorder",
    "account_info": "/api/perp-trade-api/curr-info/account",
    "positions": "/api/perp-trade-api/curr-info/positions",
    "open_orders": "/api/perp-trade-api/curr-info/orders",
    "trading_pairs": "/api/perp-market-api/list",
    "order_book": "/api/perp-market-api/orderBook",
    "authorize": "/api/authorize",
})

# HTTP session
USER_AGENT = "dipcoin-client/1.0"
CONNECTION_LIMIT = 100
CONNECTION_LIMIT_PER_HOST = 20
DNS_CACHE_TTL = 300
