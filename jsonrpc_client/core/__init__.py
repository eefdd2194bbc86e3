"""Core types and interfaces."""

from jsonrpc_client.core.errors import (
    ConfigError,
    ErrorKind,
    JsonRpcClientError,
    JsonRpcError,
    ResponseError,
    RpcClientError,
    SerializeError,
    TransportError,
    describe_error_code,
)
from jsonrpc_client.core.interfaces import Transport

__all__ = [
    "JsonRpcClientError",
    "ConfigError",
    # Call outcomes
    "ErrorKind",
    "RpcClientError",
    "TransportError",
    "SerializeError",
    "ResponseError",
    "JsonRpcError",
    "describe_error_code",
    # Interfaces
    "Transport",
]
