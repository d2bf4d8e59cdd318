"""
Contract ABIs used to build rollup call messages.

The three interfaces are fixed, so each one is turned into a web3 contract
factory once per process and shared by every encoder call.
"""
import logging
from functools import lru_cache
from typing import Any, Dict, List, Sequence, Type

from eth_abi.exceptions import EncodingError as AbiEncodingError
from hexbytes import HexBytes
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import Web3Exception

from .exceptions import EncodingError

logger = logging.getLogger(__name__)

ERC20 = "IERC20"
ETH_TOKEN = "IEthToken"
L2_BRIDGE = "IL2Bridge"

IERC20_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "address", "name": "owner", "type": "address"},
            {"internalType": "address", "name": "spender", "type": "address"}
        ],
        "name": "allowance",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "address", "name": "spender", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"}
        ],
        "name": "approve",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "address", "name": "to", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"}
        ],
        "name": "transfer",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "address", "name": "from", "type": "address"},
            {"internalType": "address", "name": "to", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"}
        ],
        "name": "transferFrom",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "from", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "to", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "value", "type": "uint256"}
        ],
        "name": "Transfer",
        "type": "event"
    }
]

IETH_TOKEN_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "_l1Receiver", "type": "address"}],
        "name": "withdraw",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "address", "name": "_l1Receiver", "type": "address"},
            {"internalType": "bytes", "name": "_additionalData", "type": "bytes"}
        ],
        "name": "withdrawWithMessage",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "_l2Sender", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "_l1Receiver", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "_amount", "type": "uint256"}
        ],
        "name": "Withdrawal",
        "type": "event"
    }
]

IL2_BRIDGE_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "address", "name": "_l1Sender", "type": "address"},
            {"internalType": "address", "name": "_l2Receiver", "type": "address"},
            {"internalType": "address", "name": "_l1Token", "type": "address"},
            {"internalType": "uint256", "name": "_amount", "type": "uint256"},
            {"internalType": "bytes", "name": "_data", "type": "bytes"}
        ],
        "name": "finalizeDeposit",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "l1Bridge",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "_l2Token", "type": "address"}],
        "name": "l1TokenAddress",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "_l1Token", "type": "address"}],
        "name": "l2TokenAddress",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "address", "name": "_l1Receiver", "type": "address"},
            {"internalType": "address", "name": "_l2Token", "type": "address"},
            {"internalType": "uint256", "name": "_amount", "type": "uint256"}
        ],
        "name": "withdraw",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]

_ABIS: Dict[str, List[Dict[str, Any]]] = {
    ERC20: IERC20_ABI,
    ETH_TOKEN: IETH_TOKEN_ABI,
    L2_BRIDGE: IL2_BRIDGE_ABI,
}

# Encoding only, never connected to a node
_w3 = Web3()

# Errors web3 / eth-abi raise for a bad ABI or arguments that don't fit it
_ENCODE_ERRORS = (Web3Exception, AbiEncodingError, TypeError, ValueError, OverflowError)


@lru_cache(maxsize=None)
def load_contract(name: str) -> Type[Contract]:
    """
    Build the (address-less) web3 contract factory for one of the known interfaces

    Args:
        name: Interface name (ERC20, ETH_TOKEN or L2_BRIDGE)

    Returns:
        Contract factory usable for call-data encoding

    Raises:
        ValueError: If the interface is unknown
        Web3Exception: If web3 rejects the ABI
    """
    if name not in _ABIS:
        raise ValueError(f"Unknown contract interface: {name} (known: {', '.join(sorted(_ABIS))})")
    logger.debug(f"Loading {name} ABI")
    return _w3.eth.contract(abi=_ABIS[name])


def encode_call(contract_name: str, function_name: str, args: Sequence[Any]) -> HexBytes:
    """
    Pack a function call into call data

    Args:
        contract_name: Interface the function belongs to
        function_name: Function to call
        args: Positional function arguments

    Returns:
        4-byte selector followed by the ABI-encoded arguments

    Raises:
        EncodingError: If the ABI cannot be loaded or the arguments cannot be packed
    """
    try:
        contract = load_contract(contract_name)
    except _ENCODE_ERRORS as e:
        logger.error(f"Failed to load {contract_name} ABI: {e}")
        raise EncodingError(f"Failed to load {contract_name} ABI: {str(e)}", function_name=function_name) from e

    try:
        data = contract.encode_abi(function_name, args=list(args))
    except _ENCODE_ERRORS as e:
        logger.error(f"Failed to pack {function_name} function: {e}")
        raise EncodingError(f"Failed to pack {function_name} function: {str(e)}", function_name=function_name) from e

    return HexBytes(data)
