"""
Rollup SDK - call-message construction and JSON-RPC result models for a ZK rollup.
"""
from .version import __version__
from .constants import ETH_ADDRESS, L2_ETH_TOKEN_ADDRESS
from .exceptions import RollupSDKError, EncodingError, ParseError
from .models import (
    NATIVE_CURRENCY,
    AccessListEntry,
    CallMessage,
    Erc20Token,
    NativeCurrency,
    TransferCallMsg,
    WithdrawalCallMsg,
    as_token,
)
from .types import Block, BlockRange
from .config import NetworkConfig

__all__ = [
    "__version__",
    "ETH_ADDRESS",
    "L2_ETH_TOKEN_ADDRESS",
    "RollupSDKError",
    "EncodingError",
    "ParseError",
    "NATIVE_CURRENCY",
    "AccessListEntry",
    "CallMessage",
    "Erc20Token",
    "NativeCurrency",
    "TransferCallMsg",
    "WithdrawalCallMsg",
    "as_token",
    "Block",
    "BlockRange",
    "NetworkConfig",
]
