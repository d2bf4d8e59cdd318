"""
Network configuration for the rollup SDK.
"""
import json
import logging
import os
import importlib.resources
from typing import Any, Dict, Optional

from eth_typing import ChecksumAddress

from .utils import to_checksum

logger = logging.getLogger(__name__)


class NetworkConfig:
    """
    Known rollup networks and their defaults.

    Values resolve in order: explicit override, environment variable
    (e.g. ZKSYNC_ERA_SEPOLIA_RPC_URL, ZKSYNC_ERA_SEPOLIA_L2_BRIDGE), then the
    bundled networks.json.
    """

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load the bundled network definitions, cached after the first call

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("rollup_sdk").joinpath("networks.json")
            with resource.open("r", encoding="utf-8") as f:
                cls._networks_cache = json.load(f)
            logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of a single network

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            raise ValueError(
                f"Unknown network: {network}. Available networks: {', '.join(sorted(networks))}"
            )
        return networks[network]

    @staticmethod
    def _env_var(network: str, suffix: str) -> str:
        return f"{network.upper().replace('-', '_')}_{suffix}"

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """Get the RPC endpoint URL of a network."""
        if override:
            return override
        env_value = os.environ.get(cls._env_var(network, "RPC_URL"))
        if env_value:
            return env_value
        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        """Get the chain ID of a network."""
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_default_l2_bridge(cls, network: str, override: Optional[str] = None) -> Optional[ChecksumAddress]:
        """
        Get the default L2 bridge used for token withdrawals

        Args:
            network: Network name
            override: Bridge address to use instead of the configured one

        Returns:
            Checksummed bridge address, or None if the network has no default

        Raises:
            ValueError: If the network is unknown or the address is malformed
        """
        if override:
            return to_checksum(override)
        env_value = os.environ.get(cls._env_var(network, "L2_BRIDGE"))
        if env_value:
            return to_checksum(env_value)
        bridge = cls.get_network(network).get("l2DefaultBridge")
        if bridge is None:
            logger.warning(f"No default L2 bridge configured for network {network}")
            return None
        return to_checksum(bridge)
