"""
Order construction and signing for DipCoin client.

Builds the canonical main order plus optional take-profit and stop-loss
legs from a caller's order intent and signs each of them. Pure computation:
nothing in this module touches the network.
"""

import hashlib
import json
import logging
import time
from typing import Callable, Iterable, Optional

from .errors import SigningError, ValidationError
from .keys import SuiKeypair
from .models.orders import (
    CanonicalOrder,
    OrderSide,
    OrderType,
    PlaceOrderParams,
    SignedLeg,
    SignedOrder,
    TriggerOrder,
)
from .utils import to_wei

logger = logging.getLogger(__name__)

ORDER_DOMAIN = b"DipCoin"

# Flag bits packed into the serialized order
FLAG_IOC = 1 << 0
FLAG_POST_ONLY = 1 << 1
FLAG_REDUCE_ONLY = 1 << 2
FLAG_IS_LONG = 1 << 3
FLAG_ORDERBOOK_ONLY = 1 << 4

# Base salt, TP (+1) and SL (+2)
SALTS_PER_ORDER = 3


def _now_ms() -> int:
    return int(time.time() * 1000)


class SaltSource:
    """
    Millisecond salts that never repeat within a process.

    Each base is at least SALTS_PER_ORDER above the previous one, so the
    main, TP and SL salts of consecutive orders stay distinct even when
    they are built within the same millisecond.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms):
        self._clock = clock
        self._last_base: Optional[int] = None

    def next_base(self) -> int:
        base = self._clock()
        if self._last_base is not None and base < self._last_base + SALTS_PER_ORDER:
            base = self._last_base + SALTS_PER_ORDER
        self._last_base = base
        return base


def coerce_side(side) -> OrderSide:
    try:
        return OrderSide(side.upper() if isinstance(side, str) else side)
    except ValueError:
        raise ValidationError(f"Invalid order side: {side!r}") from None


def coerce_order_type(order_type) -> OrderType:
    try:
        return OrderType(order_type.upper() if isinstance(order_type, str) else order_type)
    except ValueError:
        raise ValidationError(f"Invalid order type: {order_type!r}") from None


def _address_bytes(value: str) -> bytes:
    """32-byte form of an on-chain id; non-hex identifiers are hashed."""
    text = value[2:] if value.lower().startswith("0x") else None
    if text:
        try:
            return int(text, 16).to_bytes(32, "big")
        except (ValueError, OverflowError):
            pass
    return hashlib.blake2b(value.encode("utf-8"), digest_size=32).digest()


def _uint(value: int, size: int, name: str) -> bytes:
    try:
        return value.to_bytes(size, "big")
    except OverflowError:
        raise ValidationError(f"{name} is too large to sign") from None


def serialize_order(order: CanonicalOrder) -> bytes:
    """Fixed big-endian byte layout of a canonical order."""
    flags = 0
    if order.ioc:
        flags |= FLAG_IOC
    if order.post_only:
        flags |= FLAG_POST_ONLY
    if order.reduce_only:
        flags |= FLAG_REDUCE_ONLY
    if order.is_long:
        flags |= FLAG_IS_LONG
    if order.orderbook_only:
        flags |= FLAG_ORDERBOOK_ONLY

    return b"".join([
        _uint(order.price, 16, "price"),
        _uint(order.quantity, 16, "quantity"),
        _uint(order.leverage, 16, "leverage"),
        _uint(order.salt, 16, "salt"),
        _uint(order.expiration, 8, "expiration"),
        _address_bytes(order.market),
        _address_bytes(order.creator),
        bytes([flags]),
        ORDER_DOMAIN,
    ])


def order_hash(order: CanonicalOrder) -> str:
    """Hex SHA-256 of the serialized order."""
    return hashlib.sha256(serialize_order(order)).hexdigest()


def order_message(order: CanonicalOrder) -> str:
    """Message string signed for an order."""
    return json.dumps({"orderHash": order_hash(order)}, separators=(",", ":"))


def cancel_message(order_hashes: Iterable[str]) -> str:
    """Message string signed for a cancellation."""
    return json.dumps({"orderHashes": list(order_hashes)}, separators=(",", ":"))


class OrderSigner:
    """Builds and signs the order legs of a single place-order call."""

    def __init__(self, keypair: SuiKeypair, salt_source: Optional[SaltSource] = None):
        self._keypair = keypair
        self._salt_source = salt_source or SaltSource()

    @property
    def creator(self) -> str:
        return self._keypair.address

    def validate(self, params: PlaceOrderParams) -> None:
        """Reject intents that must never reach the network."""
        missing = [
            name for name in ("symbol", "side", "order_type", "quantity", "leverage")
            if getattr(params, name) in (None, "")
        ]
        if missing:
            raise ValidationError(f"Missing required order parameters: {', '.join(missing)}")

        coerce_side(params.side)
        order_type = coerce_order_type(params.order_type)
        if order_type is OrderType.LIMIT and params.price in (None, ""):
            raise ValidationError("Price is required for LIMIT orders")

        for name, trigger in (("take_profit", params.take_profit), ("stop_loss", params.stop_loss)):
            if trigger is not None and trigger.trigger_price in (None, ""):
                raise ValidationError(f"{name} requires a trigger price")

    def build_and_sign(self, params: PlaceOrderParams) -> SignedOrder:
        """
        Build the main order and any TP/SL legs, then sign each one.

        Args:
            params: Order intent

        Returns:
            SignedOrder with the main leg and the optional TP/SL legs

        Raises:
            ValidationError: Missing or ill-formed parameters
            NumericFormatError: Amounts that are not valid decimals
            SigningError: The signing primitive rejected a message
        """
        self.validate(params)
        side = coerce_side(params.side)
        order_type = coerce_order_type(params.order_type)

        quantity = to_wei(params.quantity)
        leverage = to_wei(params.leverage)
        price = to_wei(params.price) if order_type is OrderType.LIMIT else 0
        salt = self._salt_source.next_base()

        main = CanonicalOrder(
            market=params.market or params.symbol,
            creator=self.creator,
            is_long=side is OrderSide.BUY,
            reduce_only=bool(params.reduce_only),
            quantity=quantity,
            price=price,
            leverage=leverage,
            salt=salt,
        )

        signed = SignedOrder(
            main=self._sign_leg(main),
            take_profit=self._build_trigger_leg(main, params.take_profit, salt + 1),
            stop_loss=self._build_trigger_leg(main, params.stop_loss, salt + 2),
        )
        logger.debug(
            f"Signed {side.value} {order_type.value} order for {params.symbol} "
            f"(salt={salt}, tp={signed.take_profit is not None}, sl={signed.stop_loss is not None})"
        )
        return signed

    def sign_cancel(self, order_hashes: Iterable[str]) -> str:
        """Sign the cancellation message for the given order hashes."""
        hashes = list(order_hashes)
        if not hashes:
            raise ValidationError("Order hashes are required")
        return self._sign(cancel_message(hashes))

    def _build_trigger_leg(
        self,
        main: CanonicalOrder,
        trigger: Optional[TriggerOrder],
        salt: int,
    ) -> Optional[SignedLeg]:
        if trigger is None:
            return None

        if coerce_order_type(trigger.order_type) is OrderType.LIMIT:
            price = to_wei(trigger.order_price or trigger.trigger_price)
        else:
            price = 0

        leg = CanonicalOrder(
            market=main.market,
            creator=main.creator,
            is_long=not main.is_long,
            reduce_only=True,
            quantity=main.quantity,
            price=price,
            leverage=main.leverage,
            salt=salt,
        )
        return self._sign_leg(leg, trigger)

    def _sign_leg(self, order: CanonicalOrder, trigger: Optional[TriggerOrder] = None) -> SignedLeg:
        return SignedLeg(order=order, signature=self._sign(order_message(order)), trigger=trigger)

    def _sign(self, message: str) -> str:
        try:
            return self._keypair.sign_personal_message(message.encode("utf-8"))
        except SigningError:
            raise
        except Exception as e:
            raise SigningError(f"Failed to sign message: {e}") from e
