"""
Pytest fixtures for the rollup SDK tests.
"""
import pytest
from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3

from rollup_sdk.config import NetworkConfig

# Constants for testing
TEST_SENDER = "0x36615cf349d7f6344891b1e7ca7c72883f5dc049"
TEST_RECIPIENT = "0xa61464658afeaf65cccaafd3a512b69a83b77618"
TEST_TOKEN = "0x0faf6df7054946141266420b43783387a78d82a9"
TEST_BRIDGE = "0x1234567890123456789012345678901234567890"
TEST_DEFAULT_BRIDGE = "0x0987654321098765432109876543210987654321"
TEST_AMOUNT = 7_000_000_000_000_000  # 0.007 ETH


def checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


def expected_call_data(signature: str, types, args) -> bytes:
    """Selector plus ABI-encoded arguments, computed without the SDK."""
    return function_signature_to_4byte_selector(signature) + encode(types, args)


@pytest.fixture(autouse=True)
def _reset_network_cache():
    """Every test starts with the bundled networks.json unloaded."""
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None
