"""
Tests for the contract ABI encoders.
"""
import pytest
from eth_utils import function_signature_to_4byte_selector

from rollup_sdk import abi
from rollup_sdk.abi import ERC20, ETH_TOKEN, L2_BRIDGE, encode_call, load_contract
from rollup_sdk.exceptions import EncodingError
from conftest import TEST_RECIPIENT, TEST_TOKEN, checksum, expected_call_data


def test_load_contract_is_cached():
    """Each interface is parsed once per process"""
    assert load_contract(ERC20) is load_contract(ERC20)
    assert load_contract(ETH_TOKEN) is not load_contract(L2_BRIDGE)


def test_load_unknown_contract():
    with pytest.raises(ValueError, match="Unknown contract interface"):
        load_contract("IDoesNotExist")


def test_unknown_contract_wrapped():
    with pytest.raises(EncodingError, match="Failed to load IDoesNotExist ABI"):
        encode_call("IDoesNotExist", "transfer", [])


def test_encode_transfer():
    data = encode_call(ERC20, "transfer", [checksum(TEST_RECIPIENT), 42])

    assert data == expected_call_data(
        "transfer(address,uint256)", ["address", "uint256"], [checksum(TEST_RECIPIENT), 42]
    )


def test_encode_selectors():
    eth_withdraw = encode_call(ETH_TOKEN, "withdraw", [checksum(TEST_RECIPIENT)])
    bridge_withdraw = encode_call(L2_BRIDGE, "withdraw", [checksum(TEST_RECIPIENT), checksum(TEST_TOKEN), 1])

    assert eth_withdraw[:4] == function_signature_to_4byte_selector("withdraw(address)")
    assert bridge_withdraw[:4] == function_signature_to_4byte_selector("withdraw(address,address,uint256)")
    assert len(eth_withdraw) == 4 + 32
    assert len(bridge_withdraw) == 4 + 3 * 32


def test_unknown_function():
    with pytest.raises(EncodingError, match="Failed to pack mint function") as exc_info:
        encode_call(ERC20, "mint", [checksum(TEST_RECIPIENT), 1])

    assert exc_info.value.function_name == "mint"


@pytest.mark.parametrize("args", [
    [],
    [12345, 1],
    ["RECIPIENT", "lots"],
    ["RECIPIENT", -1],
    ["RECIPIENT", 2**256],
])
def test_bad_arguments(args):
    args = [checksum(TEST_RECIPIENT) if a == "RECIPIENT" else a for a in args]

    with pytest.raises(EncodingError, match="Failed to pack transfer function"):
        encode_call(ERC20, "transfer", args)


def test_abis_declare_built_functions():
    names = {(entry["name"], len(entry["inputs"])) for entry in abi.IL2_BRIDGE_ABI if entry["type"] == "function"}

    assert ("withdraw", 3) in names
