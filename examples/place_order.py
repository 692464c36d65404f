#!/usr/bin/env python3
"""
Example: Place a BUY limit order on BTC-PERP with take-profit and stop-loss.

This example demonstrates how to:
1. Create the SDK from environment variables
2. Look up the PerpetualID of a trading pair
3. Place a LIMIT order with attached TP/SL legs
4. Cancel the order again by hash

Prerequisites:
- Set DIPCOIN_PRIVATE_KEY (suiprivkey...) in the environment or a .env file
- Install dependencies with Poetry (recommended): poetry install
- OR install dipcoin-client in development mode: pip install -e .

Usage:
    poetry run python examples/place_order.py

Environment Variables:
    DIPCOIN_PRIVATE_KEY=suiprivkey1...
    DIPCOIN_NETWORK=testnet
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from dipcoin_client import (
    CancelOrderParams,
    DipCoinPerpSDK,
    OrderSide,
    OrderType,
    PlaceOrderParams,
    TriggerOrder,
)

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Place and cancel a protected limit order."""

    # Configuration
    SYMBOL = "BTC-PERP"
    QUANTITY = "0.01"
    PRICE = "60000"
    LEVERAGE = "10"

    async with DipCoinPerpSDK.from_env() as sdk:
        logger.info(f"Wallet address: {sdk.address}")

        auth = await sdk.authenticate()
        if not auth:
            logger.error(f"Authentication failed: {auth.error}")
            return

        pairs = await sdk.get_trading_pairs()
        if not pairs:
            logger.error(f"Could not load trading pairs: {pairs.error}")
            return

        pair = next((p for p in pairs.data if p.symbol == SYMBOL), None)
        if pair is None:
            logger.error(f"{SYMBOL} is not listed")
            return

        params = PlaceOrderParams(
            symbol=SYMBOL,
            side=OrderSide.BUY,
            order_type=OrderType.LIMIT,
            quantity=QUANTITY,
            price=PRICE,
            leverage=LEVERAGE,
            market=pair.perp_id,
            take_profit=TriggerOrder(trigger_price="66000"),
            stop_loss=TriggerOrder(trigger_price="57000"),
        )

        logger.info(f"Placing BUY {QUANTITY} {SYMBOL} @ {PRICE} ({LEVERAGE}x)")
        result = await sdk.place_order(params)
        if not result:
            logger.error(f"Order rejected: {result.error}")
            return
        logger.info(f"✅ Order accepted: {result.data.data}")

        orders = await sdk.get_open_orders(SYMBOL)
        hashes = [order.hash for order in orders.data or [] if order.hash]
        if hashes:
            cancel = await sdk.cancel_order(CancelOrderParams(symbol=SYMBOL, order_hashes=hashes))
            if cancel:
                logger.info(f"Cancelled {len(hashes)} order(s)")
            else:
                logger.error(f"Cancel failed: {cancel.error}")


if __name__ == "__main__":
    if not os.getenv("DIPCOIN_PRIVATE_KEY"):
        logger.warning("⚠️  DIPCOIN_PRIVATE_KEY is not set!")
    asyncio.run(main())
