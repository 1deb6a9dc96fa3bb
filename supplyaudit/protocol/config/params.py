# MIT License
# Copyright (c) 2025 Hashborn

import os
from typing import Dict

from ..types.common import ConfigurationError

# Global Constants
DEFAULT_NETWORK = "creditcoin"
DEFAULT_PAGE_SIZE = 1000
DEFAULT_PROGRESS_INTERVAL = 10_000
# Substrate balances are u128
BALANCE_BITS = 128

class NetworkConfig:
    def __init__(self,
                 network_id: str,
                 endpoint: str,
                 subscan_network: str,
                 token_symbol: str = "CTC",
                 decimals: int = 18,
                 page_size: int = DEFAULT_PAGE_SIZE,
                 progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
                 balance_bits: int = BALANCE_BITS,
                 # Reporting service HTTP timeout (seconds)
                 request_timeout: float = 30.0):
        self.network_id = network_id
        self.endpoint = endpoint
        self.subscan_network = subscan_network
        self.token_symbol = token_symbol
        self.decimals = decimals
        self.page_size = page_size
        self.progress_interval = progress_interval
        self.balance_bits = balance_bits
        self.request_timeout = request_timeout

    @property
    def subscan_base_url(self) -> str:
        return f"https://{self.subscan_network}.api.subscan.io"

NETWORKS: Dict[str, NetworkConfig] = {
    "creditcoin": NetworkConfig(
        network_id="creditcoin",
        endpoint="wss://rpc.mainnet.creditcoin.network/ws",
        subscan_network="creditcoin",
    ),
    "creditcoin-testnet": NetworkConfig(
        network_id="creditcoin-testnet",
        endpoint="wss://rpc.testnet.creditcoin.network/ws",
        subscan_network="creditcoin-testnet",
    ),
}

def get_network(network_id: str) -> NetworkConfig:
    try:
        return NETWORKS[network_id]
    except KeyError:
        raise ConfigurationError(f"Unknown network '{network_id}'. Known: {', '.join(sorted(NETWORKS))}")

def default_network_id() -> str:
    return os.environ.get("SUPPLYAUDIT_NETWORK", DEFAULT_NETWORK)

def current_network() -> NetworkConfig:
    """Network selected by SUPPLYAUDIT_NETWORK, resolved on each call."""
    return get_network(default_network_id())
