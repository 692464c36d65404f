"""
HTTP client for DipCoin API.

Handles request execution, identity headers and response envelope
normalization. Every failure surfaces once as a TransportError; retrying
is left to the caller.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import aiohttp
from aiohttp import ClientResponse

from .constants import AUTHORIZATION_HEADER, WALLET_ADDRESS_HEADER
from .errors import TransportError
from .models.config import SDKConfig
from .models.response import ApiResponse
from .session_manager import SessionManager
from .utils import sanitize_dict

logger = logging.getLogger(__name__)


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_form(fields: Dict[str, Any]) -> str:
    """URL-encode a flat mapping, skipping None and JSON-encoding structured values."""
    return urlencode([
        (key, _form_value(value)) for key, value in fields.items() if value is not None
    ])


class HttpClient:
    """HTTP client specialized for DipCoin API interactions."""

    def __init__(self, config: SDKConfig, session_manager: Optional[SessionManager] = None):
        """Initialize HTTP client with configuration."""
        self._config = config
        self._session_manager = session_manager or SessionManager(config)
        self._wallet_address: Optional[str] = None
        self._auth_token: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self._config.api_base_url

    def set_wallet_address(self, address: str) -> None:
        """Set wallet address sent with every request."""
        self._wallet_address = address

    def set_auth_token(self, token: Optional[str]) -> None:
        """Set (or clear) the bearer token. Not safe to rotate concurrently."""
        self._auth_token = token or None

    @property
    def has_auth_token(self) -> bool:
        return self._auth_token is not None

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """GET request."""
        query = {key: _form_value(value) for key, value in sanitize_dict(params or {}).items()}
        return await self.request("GET", path, params=query)

    async def post(self, path: str, json_body: Optional[Any] = None) -> ApiResponse:
        """POST request with a JSON body."""
        return await self.request("POST", path, json_body=json_body)

    async def post_form(self, path: str, fields: Dict[str, Any]) -> ApiResponse:
        """POST request with form-urlencoded fields."""
        return await self.request(
            "POST",
            path,
            data=encode_form(fields),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        data: Optional[str] = None,
        json_body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """Execute a request and return the normalized envelope."""
        url = f"{self._config.api_base_url}{path}"
        request_kwargs: Dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": self._prepare_headers(headers),
        }
        if params:
            request_kwargs["params"] = params
        if data is not None:
            request_kwargs["data"] = data
        if json_body is not None:
            request_kwargs["json"] = json_body

        session = await self._session_manager.create_session()
        logger.debug(f"{method} {url}")

        try:
            async with session.request(**request_kwargs) as response:
                payload = await self._process_response(response)

                if 200 <= response.status < 300:
                    return ApiResponse.from_payload(payload)

                raise TransportError(
                    self._error_message(payload, f"HTTP {response.status}"),
                    status_code=response.status,
                    response_data=payload,
                )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request timed out after {self._config.timeout:g}s"
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(str(e) or f"Request to {path} failed") from e

    def _prepare_headers(self, custom_headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        """Prepare request headers."""
        headers = {}
        if self._wallet_address:
            headers[WALLET_ADDRESS_HEADER] = self._wallet_address
        if self._auth_token:
            headers[AUTHORIZATION_HEADER] = f"Bearer {self._auth_token}"
        if custom_headers:
            headers.update(custom_headers)
        return headers

    async def _process_response(self, response: ClientResponse) -> Any:
        """Process HTTP response and return decoded body."""
        response_text = await response.text()

        if not response_text:
            return None

        try:
            return json.loads(response_text)
        except json.JSONDecodeError as e:
            if response.status >= 400:
                # Error pages are often plain text; keep it as the message
                return response_text
            raise TransportError(
                f"Invalid JSON response (Status {response.status}): {response_text[:200]}",
                status_code=response.status,
            ) from e

    @staticmethod
    def _error_message(payload: Any, fallback: str) -> str:
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("msg")
            if message:
                return str(message)
        elif isinstance(payload, str) and payload.strip():
            return payload.strip()[:200]
        return fallback
