"""
Order Book Example

This example demonstrates:
- Listing the tradable perpetual pairs
- Fetching an order book snapshot
- Displaying best bid/ask and the spread

A private key is still required because every SDK instance carries a wallet
identity; a freshly generated keypair is enough for public market data.
"""

import asyncio
import sys
from decimal import Decimal

from dipcoin_client import SuiKeypair, init_dipcoin_perp_sdk


async def display_order_book(symbol: str, depth: int = 5):
    """Fetch and display the order book for a symbol."""
    sdk = init_dipcoin_perp_sdk(SuiKeypair.generate(), network="testnet")

    async with sdk:
        pairs = await sdk.get_trading_pairs()
        if pairs:
            print("Available pairs: " + ", ".join(p.symbol for p in pairs.data))

        print(f"\n📊 Fetching Order Book for {symbol}...\n")
        result = await sdk.get_order_book(symbol)
        if not result:
            print(f"❌ Failed to fetch order book for {symbol}: {result.error}")
            return

        book = result.data
        if book.best_bid is None or book.best_ask is None:
            print("⚠️  Order book is empty")
            return

        best_bid = Decimal(book.best_bid.price)
        best_ask = Decimal(book.best_ask.price)
        spread = best_ask - best_bid

        print("=" * 60)
        for level in reversed(book.asks[:depth]):
            print(f"   ASK  {Decimal(level.price):>14,.2f}  |  {Decimal(level.quantity):>10,.4f}")
        print("-" * 60)
        for level in book.bids[:depth]:
            print(f"   BID  {Decimal(level.price):>14,.2f}  |  {Decimal(level.quantity):>10,.4f}")
        print("=" * 60)
        print(f"Spread: {spread:,.2f} ({spread / best_bid * 100:.4f}%)")


if __name__ == "__main__":
    asyncio.run(display_order_book(sys.argv[1] if len(sys.argv) > 1 else "BTC-PERP"))
