"""
Models for rollup node JSON-RPC results.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from hexbytes import HexBytes
from pydantic import BaseModel, Field

from .constants import ZERO_HASH
from .exceptions import ParseError
from .utils import hex_to_bytes, hex_to_int, int_to_hex, parse_error, to_checksum

logger = logging.getLogger(__name__)


def _loads(raw: Union[str, bytes], what: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error(f"Malformed {what} JSON: {e}")
        raise ParseError(f"Malformed {what} JSON: {str(e)}") from e


class BlockRange(BaseModel):
    """Range of L2 blocks, e.g. the blocks of one L1 batch"""
    beginning: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    class Config:
        frozen = True

    @classmethod
    def from_rpc(cls, value: Any) -> "BlockRange":
        """
        Build a range from its wire form, a pair of hex quantities

        Args:
            value: Decoded JSON value, e.g. ["0x10", "0x20"]

        Returns:
            BlockRange with both bounds set

        Raises:
            ParseError: If the value is not exactly two hex quantities
        """
        if not isinstance(value, (list, tuple)):
            raise parse_error(f"Block range must be an array, got {type(value).__name__}")
        if len(value) != 2:
            raise parse_error(f"Block range must have exactly 2 elements, got {len(value)}")
        beginning = hex_to_int(value[0], field="beginning")
        end = hex_to_int(value[1], field="end")
        return cls(beginning=beginning, end=end)

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "BlockRange":
        """Parse a range from raw JSON text such as '["0x1","0xa"]'."""
        return cls.from_rpc(_loads(raw, "block range"))

    def to_rpc(self) -> List[str]:
        return [int_to_hex(self.beginning), int_to_hex(self.end)]


def _hash(value: Any, field: str) -> HexBytes:
    return hex_to_bytes(value, field=field, size=32)


def _address(value: Any, field: str) -> str:
    try:
        return to_checksum(value)
    except ValueError as e:
        raise parse_error(f"Invalid address in {field}: {value!r}", field) from e


def _bloom(value: Any, field: str) -> HexBytes:
    return hex_to_bytes(value, field=field, size=256)


def _nonce(value: Any, field: str) -> HexBytes:
    return hex_to_bytes(value, field=field, size=8)


def _data(value: Any, field: str) -> HexBytes:
    return hex_to_bytes(value, field=field)


def _quantity(value: Any, field: str) -> int:
    return hex_to_int(value, field=field)


def _hash_list(value: Any, field: str) -> Tuple[HexBytes, ...]:
    if not isinstance(value, list):
        raise parse_error(f"Expected array in {field}, got {type(value).__name__}", field)
    return tuple(_hash(item, field) for item in value)


def _seal_fields(value: Any, field: str) -> Tuple[Any, ...]:
    if not isinstance(value, list):
        raise parse_error(f"Expected array in {field}, got {type(value).__name__}", field)
    return tuple(value)


def _transactions(value: Any, field: str) -> Tuple[Union[HexBytes, Dict[str, Any]], ...]:
    # Hashes only, or full transaction objects when requested with full=True
    if not isinstance(value, list):
        raise parse_error(f"Expected array in {field}, got {type(value).__name__}", field)
    result: List[Union[HexBytes, Dict[str, Any]]] = []
    for item in value:
        if isinstance(item, dict):
            result.append(item)
        else:
            result.append(_hash(item, field))
    return tuple(result)


# (wire key, attribute, decoder, required)
_BLOCK_FIELDS: Sequence[Tuple[str, str, Callable[[Any, str], Any], bool]] = (
    ("parentHash", "parent_hash", _hash, True),
    ("sha3Uncles", "sha3_uncles", _hash, True),
    ("miner", "miner", _address, False),
    ("stateRoot", "state_root", _hash, True),
    ("transactionsRoot", "transactions_root", _hash, True),
    ("receiptsRoot", "receipts_root", _hash, True),
    ("logsBloom", "logs_bloom", _bloom, True),
    ("difficulty", "difficulty", _quantity, True),
    ("number", "number", _quantity, True),
    ("gasLimit", "gas_limit", _quantity, True),
    ("gasUsed", "gas_used", _quantity, True),
    ("timestamp", "timestamp", _quantity, True),
    ("extraData", "extra_data", _data, True),
    ("mixHash", "mix_hash", _hash, False),
    ("nonce", "nonce", _nonce, False),
    ("baseFeePerGas", "base_fee_per_gas", _quantity, False),
    ("uncles", "uncles", _hash_list, False),
    ("hash", "hash", _hash, False),
    ("l1BatchNumber", "l1_batch_number", _quantity, False),
    ("l1BatchTimestamp", "l1_batch_timestamp", _quantity, False),
    ("totalDifficulty", "total_difficulty", _quantity, False),
    ("size", "size", _quantity, False),
    ("sealFields", "seal_fields", _seal_fields, False),
    ("transactions", "transactions", _transactions, False),
)


class Block(BaseModel):
    """
    L2 block as returned by eth_getBlockByNumber / eth_getBlockByHash.

    Carries the rollup extensions l1BatchNumber and l1BatchTimestamp, which
    are null while the block's L1 batch is still open.
    """
    parent_hash: bytes
    sha3_uncles: bytes
    miner: Optional[str] = None
    state_root: bytes
    transactions_root: bytes
    receipts_root: bytes
    logs_bloom: bytes
    difficulty: int
    number: int
    gas_limit: int
    gas_used: int
    timestamp: int
    extra_data: bytes
    mix_hash: bytes = HexBytes(ZERO_HASH)
    nonce: bytes = b"\x00" * 8
    base_fee_per_gas: Optional[int] = None
    uncles: Tuple[bytes, ...] = ()
    hash: Optional[bytes] = None
    l1_batch_number: Optional[int] = None
    l1_batch_timestamp: Optional[int] = None
    total_difficulty: Optional[int] = None
    size: Optional[int] = None
    seal_fields: Tuple[Any, ...] = ()
    transactions: Tuple[Union[bytes, Dict[str, Any]], ...] = ()

    class Config:
        frozen = True

    @property
    def is_sealed_in_batch(self) -> bool:
        """Whether the block has been included in an L1 batch"""
        return self.l1_batch_number is not None

    @classmethod
    def from_rpc(cls, value: Any) -> "Block":
        """
        Build a block from its JSON-RPC object

        Args:
            value: Decoded JSON object with camelCase keys

        Returns:
            Block with quantities as ints and hex data as bytes

        Raises:
            ParseError: If a required field is missing or any field is malformed
        """
        if not isinstance(value, dict):
            raise parse_error(f"Block must be an object, got {type(value).__name__}")

        fields: Dict[str, Any] = {}
        for key, attr, decode, required in _BLOCK_FIELDS:
            raw = value.get(key)
            if raw is None:
                if required:
                    raise parse_error(f"Missing required field '{key}' for block", key)
                continue
            fields[attr] = decode(raw, key)

        return cls(**fields)

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "Block":
        """Parse a block from raw JSON text."""
        return cls.from_rpc(_loads(raw, "block"))
