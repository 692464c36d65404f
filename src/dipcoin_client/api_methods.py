"""
API method implementations for DipCoin client.

Assembles wire payloads, calls the HTTP client and turns response envelopes
into typed results. Methods here raise; the SDK facade converts errors into
SDKResponse failures.
"""

import logging
from typing import Any, Dict, List, Optional

from .auth import build_authorize_payload, extract_token
from .constants import API_ENDPOINTS, SUCCESS_CODE, TRIGGER_WAY
from .errors import ServerError, ValidationError
from .http_client import HttpClient
from .keys import SuiKeypair
from .models.account import AccountInfo, OpenOrder, Position
from .models.market import OrderBook, TradingPair
from .models.orders import (
    CancelOrderParams,
    OrderResponse,
    OrderType,
    PlaceOrderParams,
    SignedLeg,
    SignedOrder,
)
from .models.response import ApiResponse
from .signer import OrderSigner, coerce_order_type, coerce_side
from .utils import normalize_list_payload, to_wei_str

logger = logging.getLogger(__name__)


def _trigger_fields(prefix: str, leg: SignedLeg) -> Dict[str, Any]:
    trigger = leg.trigger
    order_type = coerce_order_type(trigger.order_type)
    if order_type is OrderType.LIMIT:
        order_price = to_wei_str(trigger.order_price or trigger.trigger_price)
    else:
        order_price = ""

    return {
        f"{prefix}OrderSignature": leg.signature,
        f"{prefix}TriggerPrice": to_wei_str(trigger.trigger_price),
        f"{prefix}OrderType": order_type.value,
        f"{prefix}OrderPrice": order_price,
        f"{prefix}Salt": str(leg.salt),
    }


def build_place_order_fields(params: PlaceOrderParams, signed: SignedOrder) -> Dict[str, Any]:
    """Form fields of a place-order request; TP/SL fields only for legs that exist."""
    order_type = coerce_order_type(params.order_type)
    if order_type is OrderType.LIMIT and params.price not in (None, ""):
        price = to_wei_str(params.price)
    else:
        price = ""

    fields = {
        "symbol": params.symbol,
        "side": coerce_side(params.side).value,
        "orderType": order_type.value,
        "quantity": to_wei_str(params.quantity),
        "price": price,
        "leverage": to_wei_str(params.leverage),
        "salt": str(signed.main.salt),
        "creator": signed.main.order.creator,
        "clientId": params.client_id or "",
        "reduceOnly": "true" if params.reduce_only else "false",
        "orderSignature": signed.main.signature,
    }

    if signed.take_profit is not None:
        fields.update(_trigger_fields("tp", signed.take_profit))
        fields["triggerWay"] = TRIGGER_WAY

    if signed.stop_loss is not None:
        fields.update(_trigger_fields("sl", signed.stop_loss))

    return fields


def ensure_success(response: ApiResponse, fallback: str) -> ApiResponse:
    """Raise ServerError unless the envelope reports success."""
    if response.code != SUCCESS_CODE:
        raise ServerError(response.message or fallback, code=response.code, response_data=response.data)
    return response


class APIMethods:
    """Container for all API method implementations."""

    def __init__(self, http_client: HttpClient, signer: OrderSigner):
        """Initialize API methods with HTTP client and order signer."""
        self._http_client = http_client
        self._signer = signer

    async def place_order(self, params: PlaceOrderParams) -> OrderResponse:
        """Sign and submit an order with its optional TP/SL legs."""
        signed = self._signer.build_and_sign(params)
        fields = build_place_order_fields(params, signed)

        response = await self._http_client.post_form(API_ENDPOINTS["place_order"], fields)
        ensure_success(response, "Failed to place order")
        return OrderResponse(code=response.code, data=response.data, message=response.message)

    async def cancel_order(self, params: CancelOrderParams, default_parent: str) -> OrderResponse:
        """Sign and submit a cancellation for the given order hashes."""
        if not params.order_hashes:
            raise ValidationError("Order hashes are required")

        hashes = list(params.order_hashes)
        fields = {
            "symbol": params.symbol,
            "orderHashes": hashes,
            "signature": self._signer.sign_cancel(hashes),
            "parentAddress": params.parent_address or default_parent,
        }

        response = await self._http_client.post_form(API_ENDPOINTS["cancel_order"], fields)
        ensure_success(response, "Failed to cancel order")
        return OrderResponse(code=response.code, data=response.data, message=response.message)

    async def get_account_info(self) -> AccountInfo:
        """Get account information."""
        response = await self._http_client.get(API_ENDPOINTS["account_info"])
        ensure_success(response, "Failed to get account info")
        if not isinstance(response.data, dict) or not response.data:
            raise ServerError("Failed to get account info", code=response.code)
        return AccountInfo.from_dict(response.data)

    async def get_positions(self, symbol: Optional[str] = None) -> List[Position]:
        """Get open positions, optionally filtered by symbol."""
        response = await self._http_client.get(API_ENDPOINTS["positions"], _symbol_query(symbol))
        ensure_success(response, "Failed to get positions")
        return [Position.from_dict(item) for item in normalize_list_payload(response.data)]

    async def get_open_orders(self, symbol: Optional[str] = None) -> List[OpenOrder]:
        """Get open orders, optionally filtered by symbol."""
        response = await self._http_client.get(API_ENDPOINTS["open_orders"], _symbol_query(symbol))
        ensure_success(response, "Failed to get open orders")
        return [OpenOrder.from_dict(item) for item in normalize_list_payload(response.data)]

    async def get_trading_pairs(self) -> List[TradingPair]:
        """Get all tradable perpetual pairs."""
        response = await self._http_client.get(API_ENDPOINTS["trading_pairs"])
        ensure_success(response, "Failed to get trading pairs")
        return [TradingPair.from_dict(item) for item in normalize_list_payload(response.data)]

    async def get_order_book(self, symbol: str) -> OrderBook:
        """Get the order book for a symbol."""
        if not symbol:
            raise ValidationError("Symbol is required")

        response = await self._http_client.get(API_ENDPOINTS["order_book"], {"symbol": symbol})
        ensure_success(response, "Failed to get order book")
        return OrderBook.from_dict(symbol, response.data or {})

    async def authorize(self, keypair: SuiKeypair) -> str:
        """Exchange an onboarding signature for a JWT."""
        response = await self._http_client.post(
            API_ENDPOINTS["authorize"], build_authorize_payload(keypair)
        )
        ensure_success(response, "Authentication failed")
        return extract_token(response.data)


def _symbol_query(symbol: Optional[str]) -> Dict[str, str]:
    return {"symbol": symbol} if symbol else {}
