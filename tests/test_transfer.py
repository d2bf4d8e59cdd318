"""
Tests for building transfer call messages.
"""
import logging
from unittest.mock import patch

import pytest

from rollup_sdk import NATIVE_CURRENCY, Erc20Token, TransferCallMsg, EncodingError
from rollup_sdk.constants import ETH_ADDRESS
from conftest import (
    TEST_SENDER, TEST_RECIPIENT, TEST_TOKEN, TEST_AMOUNT, checksum, expected_call_data
)


def test_native_transfer_is_plain_value_transfer():
    """Native currency goes straight to the recipient with no call data"""
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=TEST_AMOUNT, from_address=TEST_SENDER)

    call = msg.to_call_msg()

    assert msg.token == NATIVE_CURRENCY
    assert call.to == checksum(TEST_RECIPIENT)
    assert call.value == TEST_AMOUNT
    assert call.data == b""
    assert call.from_address == checksum(TEST_SENDER)


def test_sentinel_address_means_native_currency():
    """The zero address in the token field is the native currency"""
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=5, token=ETH_ADDRESS, from_address=TEST_SENDER)

    assert msg.token.is_native
    call = msg.to_call_msg()
    assert call.value == 5
    assert call.data == b""


def test_token_transfer_calls_erc20_transfer():
    """Token transfers target the token contract with value 0"""
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=TEST_AMOUNT, token=TEST_TOKEN, from_address=TEST_SENDER)

    call = msg.to_call_msg()

    assert isinstance(msg.token, Erc20Token)
    assert call.to == checksum(TEST_TOKEN)
    assert call.value == 0
    assert call.data == expected_call_data(
        "transfer(address,uint256)", ["address", "uint256"], [checksum(TEST_RECIPIENT), TEST_AMOUNT]
    )
    assert bytes(call.data[:4]).hex() == "a9059cbb"


def test_token_given_as_variant():
    """An Erc20Token instance is accepted as-is"""
    token = Erc20Token(address=TEST_TOKEN)
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=1, token=token, from_address=TEST_SENDER)

    assert msg.token is token
    assert msg.to_call_msg().to == checksum(TEST_TOKEN)


def test_gas_fields_and_access_list_copied():
    """Gas parameters and the access list pass through unchanged"""
    access_list = [{"address": TEST_TOKEN, "storageKeys": ["0x" + "00" * 31 + "01"]}]
    msg = TransferCallMsg(
        to=TEST_RECIPIENT,
        amount=1,
        token=TEST_TOKEN,
        from_address=TEST_SENDER,
        gas=210000,
        gas_fee_cap=3_000_000_000,
        gas_tip_cap=1_000_000_000,
        access_list=access_list,
    )

    call = msg.to_call_msg()

    assert call.gas == 210000
    assert call.gas_price is None
    assert call.gas_fee_cap == 3_000_000_000
    assert call.gas_tip_cap == 1_000_000_000
    assert call.access_list == msg.access_list
    assert call.access_list[0].address == checksum(TEST_TOKEN)


def test_legacy_gas_price_copied():
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=1, from_address=TEST_SENDER, gas_price=10**9)

    call = msg.to_call_msg()

    assert call.gas_price == 10**9
    assert call.gas_fee_cap is None
    assert call.gas == 0


def test_from_alias():
    """The sender can be given under its wire name"""
    msg = TransferCallMsg.model_validate({"to": TEST_RECIPIENT, "amount": 1, "from": TEST_SENDER})

    assert msg.from_address == checksum(TEST_SENDER)


def test_input_is_not_mutated():
    """Building a message leaves the transfer untouched"""
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=3, token=TEST_TOKEN, from_address=TEST_SENDER)
    before = msg.model_dump()

    msg.to_call_msg()

    assert msg.model_dump() == before


def test_abi_load_failure_raises_encoding_error():
    """A broken ERC20 ABI surfaces as EncodingError with the cause chained"""
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=1, token=TEST_TOKEN, from_address=TEST_SENDER)

    with patch("rollup_sdk.abi.load_contract", side_effect=ValueError("bad abi")):
        with pytest.raises(EncodingError, match="Failed to load IERC20 ABI") as exc_info:
            msg.to_call_msg()

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert exc_info.value.function_name == "transfer"


def test_native_transfer_never_touches_abi():
    """No encoding happens for native transfers"""
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=1, from_address=TEST_SENDER)

    with patch("rollup_sdk.abi.load_contract", side_effect=ValueError("bad abi")):
        call = msg.to_call_msg()

    assert call.value == 1


def test_zero_amount_logs_warning(caplog):
    msg = TransferCallMsg(to=TEST_RECIPIENT, amount=0, from_address=TEST_SENDER)

    with caplog.at_level(logging.WARNING, logger="rollup_sdk.models"):
        msg.to_call_msg()

    assert "zero-amount transfer" in caplog.text
