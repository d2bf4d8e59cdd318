"""
Data models for the rollup SDK.
"""
import logging
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from eth_typing import ChecksumAddress
from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator

from .abi import ERC20, ETH_TOKEN, L2_BRIDGE, encode_call
from .constants import ETH_ADDRESS, L2_ETH_TOKEN_ADDRESS
from .utils import int_to_hex, to_checksum

logger = logging.getLogger(__name__)

Address = Annotated[str, BeforeValidator(to_checksum)]


class NativeCurrency(BaseModel):
    """The chain's native coin (ETH), as opposed to a token contract"""
    kind: Literal["native"] = "native"

    class Config:
        frozen = True

    @property
    def is_native(self) -> bool:
        return True

    @property
    def address(self) -> ChecksumAddress:
        """Sentinel address used for the native coin in token fields"""
        return ETH_ADDRESS


class Erc20Token(BaseModel):
    """An ERC20 token identified by its L2 contract address"""
    kind: Literal["erc20"] = "erc20"
    address: Address

    class Config:
        frozen = True

    @field_validator("address")
    @classmethod
    def _not_sentinel(cls, value: str) -> str:
        if value == ETH_ADDRESS:
            raise ValueError("The zero address denotes the native currency, use NATIVE_CURRENCY")
        return value

    @property
    def is_native(self) -> bool:
        return False


NATIVE_CURRENCY = NativeCurrency()

Token = Annotated[Union[NativeCurrency, Erc20Token], Field(discriminator="kind")]


def as_token(value: Union[str, NativeCurrency, Erc20Token]) -> Union[NativeCurrency, Erc20Token]:
    """
    Resolve a token reference to its variant

    Args:
        value: A token variant, or a raw address where the zero address means native currency

    Returns:
        NATIVE_CURRENCY or an Erc20Token

    Raises:
        ValueError: If the address is malformed
    """
    if isinstance(value, (NativeCurrency, Erc20Token)):
        return value
    address = to_checksum(value)
    if address == ETH_ADDRESS:
        return NATIVE_CURRENCY
    return Erc20Token(address=address)


class AccessListEntry(BaseModel):
    """EIP-2930 access list entry"""
    address: Address
    storage_keys: Tuple[str, ...] = Field((), alias="storageKeys")

    class Config:
        frozen = True
        populate_by_name = True


class _GasOptions(BaseModel):
    """Gas and access-list fields shared by call messages and their builders"""
    gas: int = Field(0, ge=0)  # 0 leaves the limit to gas estimation
    gas_price: Optional[int] = Field(None, ge=0)
    gas_fee_cap: Optional[int] = Field(None, ge=0)
    gas_tip_cap: Optional[int] = Field(None, ge=0)
    access_list: Tuple[AccessListEntry, ...] = ()

    class Config:
        frozen = True
        populate_by_name = True

    @model_validator(mode="after")
    def _legacy_or_dynamic_fee(self):
        if self.gas_price is not None and (self.gas_fee_cap is not None or self.gas_tip_cap is not None):
            raise ValueError("gas_price cannot be combined with gas_fee_cap or gas_tip_cap")
        return self

    def _gas_fields(self) -> Dict[str, Any]:
        return {
            "gas": self.gas,
            "gas_price": self.gas_price,
            "gas_fee_cap": self.gas_fee_cap,
            "gas_tip_cap": self.gas_tip_cap,
            "access_list": self.access_list,
        }


class CallMessage(_GasOptions):
    """Unsigned, unsent contract invocation"""
    from_address: Address = Field(..., alias="from")
    to: Optional[Address] = None
    value: int = Field(0, ge=0)
    data: bytes = b""

    def to_tx_params(self) -> Dict[str, Any]:
        """
        Render the message as web3 transaction parameters

        The result can be passed to eth_estimateGas or eth_call. Unset gas
        fields are omitted so the node or the estimation layer fills them in.

        Returns:
            TxParams-style dict with camelCase keys
        """
        params: Dict[str, Any] = {
            "from": self.from_address,
            "value": self.value,
        }
        if self.to is not None:
            params["to"] = self.to
        if self.data:
            params["data"] = "0x" + bytes(self.data).hex()
        if self.gas:
            params["gas"] = self.gas
        if self.gas_price is not None:
            params["gasPrice"] = self.gas_price
        if self.gas_fee_cap is not None:
            params["maxFeePerGas"] = self.gas_fee_cap
        if self.gas_tip_cap is not None:
            params["maxPriorityFeePerGas"] = self.gas_tip_cap
        if self.access_list:
            params["accessList"] = [
                {"address": entry.address, "storageKeys": list(entry.storage_keys)}
                for entry in self.access_list
            ]
        return params

    def to_rpc(self) -> Dict[str, Any]:
        """Same as to_tx_params, with quantities hex-encoded for a raw JSON-RPC request"""
        params = self.to_tx_params()
        for key in ("value", "gas", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas"):
            if key in params:
                params[key] = int_to_hex(params[key])
        return params


class TransferCallMsg(_GasOptions):
    """Parameters of an L2 transfer of the native currency or an ERC20 token"""
    to: Address
    amount: int = Field(..., ge=0)
    token: Token = NATIVE_CURRENCY
    from_address: Address = Field(..., alias="from")

    @field_validator("token", mode="before")
    @classmethod
    def _resolve_token(cls, value: Any) -> Any:
        if isinstance(value, str):
            return as_token(value)
        return value

    def to_call_msg(self) -> CallMessage:
        """
        Build the call message for this transfer

        Native currency is sent as a plain value transfer to the recipient.
        Tokens are sent by calling transfer(to, amount) on the token contract.

        Returns:
            CallMessage for the transfer

        Raises:
            EncodingError: If the ERC20 call cannot be encoded
        """
        if self.amount == 0:
            logger.warning(f"Building zero-amount transfer to {self.to}")

        if self.token.is_native:
            to = self.to
            value = self.amount
            data = b""
        else:
            to = self.token.address
            value = 0
            data = encode_call(ERC20, "transfer", [self.to, self.amount])

        msg = CallMessage(
            from_address=self.from_address,
            to=to,
            value=value,
            data=data,
            **self._gas_fields()
        )
        logger.debug(f"Built transfer call message: to={msg.to}, value={msg.value}, data={len(msg.data)} bytes")
        return msg


class WithdrawalCallMsg(_GasOptions):
    """Parameters of an L2 -> L1 withdrawal"""
    to: Address  # recipient on L1
    amount: int = Field(..., ge=0)
    token: Token = NATIVE_CURRENCY
    bridge_address: Optional[Address] = None
    from_address: Address = Field(..., alias="from")

    @field_validator("token", mode="before")
    @classmethod
    def _resolve_token(cls, value: Any) -> Any:
        if isinstance(value, str):
            return as_token(value)
        return value

    def to_call_msg(self, default_l2_bridge: Optional[str] = None) -> CallMessage:
        """
        Build the call message for this withdrawal

        Native currency is withdrawn through the native-token system contract,
        tokens through the L2 bridge. An explicit bridge_address always takes
        precedence over default_l2_bridge.

        Args:
            default_l2_bridge: Bridge used for token withdrawals when the
                message has no bridge_address

        Returns:
            CallMessage for the withdrawal

        Raises:
            EncodingError: If the withdraw call cannot be encoded
            ValueError: If a token withdrawal has no bridge to go through
        """
        if self.token.is_native:
            if self.bridge_address is not None:
                logger.debug("Ignoring bridge_address for native currency withdrawal")
            data = encode_call(ETH_TOKEN, "withdraw", [self.to])
            msg = CallMessage(
                from_address=self.from_address,
                to=L2_ETH_TOKEN_ADDRESS,
                value=self.amount,
                data=data,
                **self._gas_fields()
            )
        else:
            data = encode_call(L2_BRIDGE, "withdraw", [self.to, self.token.address, self.amount])
            bridge = self.bridge_address or default_l2_bridge
            if bridge is None:
                logger.error(f"No L2 bridge for withdrawal of token {self.token.address}")
                raise ValueError("Token withdrawal requires bridge_address or a default L2 bridge")
            msg = CallMessage(
                from_address=self.from_address,
                to=bridge,
                value=0,
                data=data,
                **self._gas_fields()
            )

        logger.debug(f"Built withdrawal call message: to={msg.to}, value={msg.value}, data={len(msg.data)} bytes")
        return msg
