"""
Well-known addresses and values of the rollup.
"""
from eth_typing import ChecksumAddress, HexStr
from web3 import Web3

# Reserved address meaning "the chain's native coin" in token fields
ETH_ADDRESS: ChecksumAddress = Web3.to_checksum_address("0x0000000000000000000000000000000000000000")

# Native-token system contract (IEthToken) deployed on every L2
L2_ETH_TOKEN_ADDRESS: ChecksumAddress = Web3.to_checksum_address("0x000000000000000000000000000000000000800a")

ZERO_HASH: HexStr = HexStr("0x" + "00" * 32)
