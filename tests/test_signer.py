# -*- coding: utf-8 -*-
"""
Unit tests for order construction and signing.

Tests cover:
- Input validation
- Canonical main order fields
- Take-profit / stop-loss legs
- Salt assignment and uniqueness
- Message serialization and signatures
"""

import dataclasses
import json

import pytest

from conftest import FIXED_MILLIS
from dipcoin_client.errors import NumericFormatError, ValidationError
from dipcoin_client.models import OrderType, TriggerOrder
from dipcoin_client.signer import (
    OrderSigner,
    SaltSource,
    cancel_message,
    order_hash,
    order_message,
    serialize_order,
)
from dipcoin_client.utils import to_wei


class TestValidation:
    """Test intent validation before anything is signed."""

    def test_limit_without_price_rejected(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, order_type=OrderType.LIMIT)
        with pytest.raises(ValidationError, match="Price is required for LIMIT orders"):
            signer.build_and_sign(params)

    @pytest.mark.parametrize("field", ["symbol", "quantity", "leverage"])
    def test_missing_required_field(self, signer, market_order_params, field):
        params = dataclasses.replace(market_order_params, **{field: ""})
        with pytest.raises(ValidationError, match=field):
            signer.build_and_sign(params)

    def test_missing_side(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, side=None)
        with pytest.raises(ValidationError, match="side"):
            signer.build_and_sign(params)

    def test_invalid_side(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, side="HOLD")
        with pytest.raises(ValidationError, match="Invalid order side"):
            signer.build_and_sign(params)

    def test_invalid_order_type(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, order_type="STOP")
        with pytest.raises(ValidationError, match="Invalid order type"):
            signer.build_and_sign(params)

    def test_lowercase_strings_accepted(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, side="sell", order_type="market")
        signed = signer.build_and_sign(params)
        assert signed.main.order.is_long is False

    def test_bad_quantity(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, quantity="-1")
        with pytest.raises(NumericFormatError):
            signer.build_and_sign(params)


class TestMainOrder:
    """Test the canonical main order."""

    def test_market_buy_scenario(self, signer, keypair, market_order_params):
        """BUY MARKET 0.01 BTC-PERP at 10x on market 0xabc."""
        order = signer.build_and_sign(market_order_params).main.order

        assert order.is_long is True
        assert order.price == 0
        assert order.quantity == to_wei("0.01") == 10 ** 16
        assert order.leverage == 10 * 10 ** 18
        assert order.reduce_only is False
        assert order.market == "0xabc"
        assert order.creator == keypair.address
        assert order.post_only is False
        assert order.orderbook_only is True
        assert order.ioc is False
        assert order.expiration == 0
        assert order.salt == FIXED_MILLIS

    def test_market_order_ignores_price(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, price="70000")
        assert signer.build_and_sign(params).main.order.price == 0

    def test_limit_order_price(self, signer, limit_order_with_tpsl):
        order = signer.build_and_sign(limit_order_with_tpsl).main.order
        assert order.price == to_wei("3500.25")
        assert order.is_long is False

    def test_market_defaults_to_symbol(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, market=None)
        assert signer.build_and_sign(params).main.order.market == "BTC-PERP"

    def test_no_legs_without_triggers(self, signer, market_order_params):
        signed = signer.build_and_sign(market_order_params)
        assert signed.take_profit is None
        assert signed.stop_loss is None

    def test_canonical_order_is_immutable(self, signer, market_order_params):
        order = signer.build_and_sign(market_order_params).main.order
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.price = 1


class TestTriggerLegs:
    """Test take-profit and stop-loss legs."""

    def test_legs_are_reduce_only_and_opposite(self, signer, limit_order_with_tpsl):
        signed = signer.build_and_sign(limit_order_with_tpsl)
        for leg in (signed.take_profit, signed.stop_loss):
            assert leg.order.reduce_only is True
            assert leg.order.is_long is not signed.main.order.is_long
            assert leg.order.quantity == signed.main.order.quantity
            assert leg.order.leverage == signed.main.order.leverage
            assert leg.order.market == signed.main.order.market

    def test_limit_tp_price_from_trigger(self, signer, market_order_params):
        params = dataclasses.replace(
            market_order_params,
            take_profit=TriggerOrder(trigger_price="70000", order_type=OrderType.LIMIT),
        )
        leg = signer.build_and_sign(params).take_profit
        assert leg.order.price == to_wei("70000")

    def test_limit_tp_explicit_order_price_wins(self, signer, market_order_params):
        params = dataclasses.replace(
            market_order_params,
            take_profit=TriggerOrder(
                trigger_price="70000", order_type=OrderType.LIMIT, order_price="69950.5"
            ),
        )
        leg = signer.build_and_sign(params).take_profit
        assert leg.order.price == to_wei("69950.5")

    def test_market_tp_price_is_zero(self, signer, market_order_params):
        params = dataclasses.replace(
            market_order_params,
            take_profit=TriggerOrder(trigger_price="70000", order_price="69000"),
        )
        assert signer.build_and_sign(params).take_profit.order.price == 0

    def test_stop_loss_only(self, signer, market_order_params):
        params = dataclasses.replace(
            market_order_params,
            stop_loss=TriggerOrder(trigger_price="60000", order_type=OrderType.LIMIT),
        )
        signed = signer.build_and_sign(params)
        assert signed.take_profit is None
        assert signed.stop_loss.order.price == to_wei("60000")
        assert signed.stop_loss.order.is_long is False

    def test_trigger_without_price_rejected(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, stop_loss=TriggerOrder(trigger_price=""))
        with pytest.raises(ValidationError, match="stop_loss"):
            signer.build_and_sign(params)


class TestSalts:
    """Test salt assignment."""

    def test_tp_and_sl_salts(self, signer, limit_order_with_tpsl):
        signed = signer.build_and_sign(limit_order_with_tpsl)
        base = signed.main.salt
        assert signed.take_profit.salt == base + 1
        assert signed.stop_loss.salt == base + 2
        assert len({base, signed.take_profit.salt, signed.stop_loss.salt}) == 3

    def test_consecutive_orders_in_same_millisecond(self, signer, limit_order_with_tpsl):
        """A frozen clock must still yield non-overlapping salts."""
        first = signer.build_and_sign(limit_order_with_tpsl)
        second = signer.build_and_sign(limit_order_with_tpsl)

        first_salts = {first.main.salt, first.take_profit.salt, first.stop_loss.salt}
        second_salts = {second.main.salt, second.take_profit.salt, second.stop_loss.salt}
        assert first_salts.isdisjoint(second_salts)
        assert second.main.salt == first.main.salt + 3

    def test_salt_source_follows_clock(self):
        ticks = iter([1000, 5000, 5001])
        source = SaltSource(clock=lambda: next(ticks))
        assert source.next_base() == 1000
        assert source.next_base() == 5000
        assert source.next_base() == 5003

    def test_salt_source_survives_clock_going_backwards(self):
        ticks = iter([5000, 4000])
        source = SaltSource(clock=lambda: next(ticks))
        assert source.next_base() == 5000
        assert source.next_base() == 5003

    def test_default_clock_is_milliseconds(self):
        base = SaltSource().next_base()
        assert 1_600_000_000_000 < base < 10_000_000_000_000


class TestMessages:
    """Test serialization, hashing and signatures."""

    def test_serialization_is_deterministic(self, signer, market_order_params):
        order = signer.build_and_sign(market_order_params).main.order
        assert serialize_order(order) == serialize_order(dataclasses.replace(order))
        assert len(order_hash(order)) == 64

    def test_any_field_changes_hash(self, signer, market_order_params):
        order = signer.build_and_sign(market_order_params).main.order
        variants = [
            dataclasses.replace(order, price=1),
            dataclasses.replace(order, quantity=order.quantity + 1),
            dataclasses.replace(order, salt=order.salt + 1),
            dataclasses.replace(order, is_long=False),
            dataclasses.replace(order, reduce_only=True),
            dataclasses.replace(order, market="0xabd"),
        ]
        hashes = {order_hash(variant) for variant in variants}
        assert order_hash(order) not in hashes
        assert len(hashes) == len(variants)

    def test_order_message_format(self, signer, market_order_params):
        order = signer.build_and_sign(market_order_params).main.order
        assert json.loads(order_message(order)) == {"orderHash": order_hash(order)}

    def test_overflowing_amount_rejected(self, signer, market_order_params):
        params = dataclasses.replace(market_order_params, quantity="1" + "0" * 30)
        with pytest.raises(ValidationError, match="quantity"):
            signer.build_and_sign(params)

    def test_every_leg_signature_verifies(self, signer, keypair, limit_order_with_tpsl):
        signed = signer.build_and_sign(limit_order_with_tpsl)
        for leg in (signed.main, signed.take_profit, signed.stop_loss):
            message = order_message(leg.order).encode("utf-8")
            assert keypair.verify_personal_message(message, leg.signature)

    def test_sign_cancel(self, signer, keypair):
        signature = signer.sign_cancel(["0xaa", "0xbb"])
        assert cancel_message(["0xaa", "0xbb"]) == '{"orderHashes":["0xaa","0xbb"]}'
        assert keypair.verify_personal_message(b'{"orderHashes":["0xaa","0xbb"]}', signature)

    def test_sign_cancel_requires_hashes(self, signer):
        with pytest.raises(ValidationError, match="Order hashes are required"):
            signer.sign_cancel([])

    def test_default_salt_source(self, keypair, market_order_params):
        signed = OrderSigner(keypair).build_and_sign(market_order_params)
        assert signed.main.salt > 0
