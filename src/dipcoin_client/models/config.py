"""
Configuration models for DipCoin client.

Immutable configuration structures resolved once at SDK construction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..constants import DEFAULT_API_URLS, DEFAULT_TIMEOUT
from ..utils import validate_url


class Network(Enum):
    """Network enumeration."""
    MAINNET = "mainnet"
    TESTNET = "testnet"


@dataclass(frozen=True)
class SDKConfig:
    """Configuration for a DipCoin SDK instance."""
    network: Network
    api_base_url: str
    custom_rpc: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.network, Network):
            raise ValueError(f"Unsupported network: {self.network!r}")
        self._validate_base_url()
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    def _validate_base_url(self):
        """Validate API base URL format."""
        url = self.api_base_url
        if not url or not isinstance(url, str):
            raise ValueError("API base URL cannot be empty")
        if not validate_url(url):
            raise ValueError(f"API base URL must be a valid HTTP/HTTPS URL, got {url!r}")

    @classmethod
    def for_network(
        cls,
        network: Union[Network, str],
        api_base_url: Optional[str] = None,
        custom_rpc: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "SDKConfig":
        """Resolve a network name to its default URL unless one is supplied."""
        try:
            network = Network(network)
        except ValueError:
            raise ValueError(
                f"Unsupported network: {network!r} (expected 'mainnet' or 'testnet')"
            ) from None

        base_url = api_base_url or DEFAULT_API_URLS[network.value]
        return cls(
            network=network,
            api_base_url=base_url.rstrip("/"),
            custom_rpc=custom_rpc,
            timeout=timeout,
        )


def init_sdk_options(
    network: Union[Network, str],
    api_base_url: Optional[str] = None,
    custom_rpc: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> SDKConfig:
    """Initialize SDK options with defaults."""
    return SDKConfig.for_network(network, api_base_url, custom_rpc, timeout)
