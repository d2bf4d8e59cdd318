#!/usr/bin/env python3
"""
Simple example of using the rollup SDK.
"""
import os
import logging

from web3 import Web3

from rollup_sdk import NetworkConfig, TransferCallMsg, WithdrawalCallMsg, BlockRange, RollupSDKError


def main():
    """
    Demonstrate basic usage of the call message builders.

    This example shows how to:
    1. Build an ERC20 transfer and a token withdrawal
    2. Estimate their gas against a node
    3. Decode an L1 batch block range
    """
    logging.basicConfig(level=logging.DEBUG)

    # Read configuration from environment
    NETWORK = os.environ.get("NETWORK", "zksync-era-sepolia")
    SENDER = os.environ.get("SENDER_ADDRESS")
    TOKEN = os.environ.get("TOKEN_ADDRESS")

    if not SENDER or not TOKEN:
        print("ERROR: SENDER_ADDRESS and TOKEN_ADDRESS environment variables are required")
        return

    w3 = Web3(Web3.HTTPProvider(NetworkConfig.get_rpc_url(NETWORK)))
    default_bridge = NetworkConfig.get_default_l2_bridge(NETWORK)

    try:
        transfer = TransferCallMsg(to=SENDER, amount=10**6, token=TOKEN, from_address=SENDER).to_call_msg()
        withdrawal = WithdrawalCallMsg(to=SENDER, amount=10**6, token=TOKEN, from_address=SENDER).to_call_msg(default_bridge)
    except RollupSDKError as e:
        print(f"Error building call messages: {str(e)}")
        return

    for name, call in [("transfer", transfer), ("withdrawal", withdrawal)]:
        gas = w3.eth.estimate_gas(call.to_tx_params())
        print(f"{name}: to={call.to} gas={gas}")

    # zks_getL1BatchBlockRange returns ["0x<first>", "0x<last>"]
    response = w3.provider.make_request("zks_getL1BatchBlockRange", [1])
    block_range = BlockRange.from_rpc(response["result"])
    print(f"L1 batch 1 spans blocks {block_range.beginning}..{block_range.end}")


if __name__ == "__main__":
    main()
