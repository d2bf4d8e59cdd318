"""
Exceptions for the rollup SDK.
"""
from typing import Optional


class RollupSDKError(Exception):
    """Base exception for all rollup SDK errors."""
    pass


class EncodingError(RollupSDKError):
    """Raised when a contract ABI cannot be loaded or call arguments cannot be packed."""

    def __init__(self, message: str, function_name: Optional[str] = None):
        self.function_name = function_name
        super().__init__(message)


class ParseError(RollupSDKError):
    """Raised when a JSON-RPC payload cannot be deserialized."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
