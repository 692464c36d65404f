#!/usr/bin/env python3
"""
Example: Fetch and display account, position and open order information.

Prerequisites:
- Set DIPCOIN_PRIVATE_KEY in the environment or a .env file

Usage:
    poetry run python examples/account_info.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from dipcoin_client import DipCoinPerpSDK

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def print_section_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f" {title.upper()} ".center(70, "="))
    print("=" * 70)


def print_account_summary(account_info):
    """Print formatted account summary."""
    print_section_header("Account Overview")
    print(f"Wallet Balance:      {account_info.wallet_balance}")
    print(f"Unrealized PnL:      {account_info.total_unrealized_profit}")
    print(f"Account Value:       {account_info.account_value}")
    print(f"Free Collateral:     {account_info.free_collateral}")
    print(f"Total Margin:        {account_info.total_margin}")


def print_positions(positions):
    """Print formatted positions table."""
    print_section_header(f"Open Positions ({len(positions)} total)")

    if not positions:
        print("No open positions found.")
        return

    print(f"{'Symbol':<12} {'Side':<6} {'Quantity':<12} {'Entry':<12} "
          f"{'Oracle':<12} {'Liq. Price':<12} {'PnL':<12}")
    print("-" * 84)
    for position in positions:
        print(f"{position.symbol:<12} {position.side:<6} {position.quantity:<12} "
              f"{position.avg_entry_price:<12} {position.oracle_price:<12} "
              f"{position.liquidation_price:<12} {position.unrealized_profit:<12}")


def print_orders(orders):
    """Print open orders."""
    print_section_header(f"Open Orders ({len(orders)} total)")

    if not orders:
        print("No open orders found.")
        return

    for order in orders:
        price = order.price if order.order_type == "LIMIT" else "MARKET"
        print(f"{order.hash[:18]:<20} {order.symbol:<12} {order.side:<6} "
              f"{order.quantity:<10} {price:<12} {order.status}")


async def main():
    """Fetch and print account state."""
    async with DipCoinPerpSDK.from_env() as sdk:
        logger.info(f"Fetching account information for {sdk.address}...")

        account = await sdk.get_account_info()
        if account:
            print_account_summary(account.data)
        else:
            logger.error(f"Account info failed: {account.error}")

        positions = await sdk.get_positions()
        if positions:
            print_positions(positions.data)
        else:
            logger.error(f"Positions failed: {positions.error}")

        orders = await sdk.get_open_orders()
        if orders:
            print_orders(orders.data)
        else:
            logger.error(f"Open orders failed: {orders.error}")

        stats = sdk.get_statistics()
        logger.info(
            f"{stats.total_requests} requests, {stats.failed_requests} failed, "
            f"avg {stats.avg_duration_ms:.1f}ms"
        )


if __name__ == "__main__":
    asyncio.run(main())
