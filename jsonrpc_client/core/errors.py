"""Typed exception hierarchy for jsonrpc_client.

Every failure of an RPC call is reported as one of four ``RpcClientError``
subclasses. Callers discriminate either by ``isinstance`` or by the ``kind``
tag:

- TransportError: the transport failed to deliver bytes
- SerializeError: the arguments could not be turned into wire bytes
- ResponseError: bytes came back but were not the expected JSON-RPC response
- JsonRpcError: the server answered with a JSON-RPC error object
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jsonrpc_client.rpc.types import ErrorObject

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000  # Server error range: -32000 to -32099

_CODE_DESCRIPTIONS: dict[int, str] = {
    PARSE_ERROR: "Parse error",
    INVALID_REQUEST: "Invalid request",
    METHOD_NOT_FOUND: "Method not found",
    INVALID_PARAMS: "Invalid params",
    INTERNAL_ERROR: "Internal error",
}


def describe_error_code(code: int) -> str:
    """Return the standard description for a JSON-RPC 2.0 error code.

    Codes outside the reserved set are reported as "Server error".
    """
    return _CODE_DESCRIPTIONS.get(code, "Server error")


class JsonRpcClientError(Exception):
    """Base class for all jsonrpc_client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(JsonRpcClientError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class ErrorKind(str, Enum):
    """Classification tag carried by every RpcClientError."""

    TRANSPORT = "transport"
    SERIALIZE = "serialize"
    RESPONSE = "response"
    JSONRPC = "jsonrpc"


class RpcClientError(JsonRpcClientError):
    """Base class for the outcome of a failed RPC call.

    Attributes:
        kind: Which of the four failure classes this is.
        message: Human-readable description.
    """

    kind: ErrorKind


class TransportError(RpcClientError):
    """The underlying transport failed to deliver the request or its response."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, cause: BaseException | None = None) -> None:
        message = "Unable to send the JSON-RPC 2.0 request"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class SerializeError(RpcClientError):
    """The method parameters could not be serialized."""

    kind = ErrorKind.SERIALIZE

    def __init__(self, cause: BaseException | None = None) -> None:
        message = "Unable to serialize the method parameters"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class ResponseError(RpcClientError):
    """The response was not a well-formed or expected JSON-RPC 2.0 response.

    Attributes:
        reason: Which structural or type expectation was violated.
    """

    kind = ErrorKind.RESPONSE

    def __init__(self, reason: str) -> None:
        super().__init__(f"Unable to deserialize the response: {reason}")
        self.reason = reason


class JsonRpcError(RpcClientError):
    """The server replied with a JSON-RPC 2.0 error object.

    This is the remote method's answer, not a client-side fault.

    Attributes:
        code: Error code from the error object.
        rpc_message: Message string from the error object, verbatim.
        data: Optional data member from the error object (None if absent).
    """

    kind = ErrorKind.JSONRPC

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(f"JSON-RPC 2.0 Error: {describe_error_code(code)} ({message})")
        self.code = code
        self.rpc_message = message
        self.data = data

    @property
    def error_object(self) -> ErrorObject:
        """The error as an ErrorObject."""
        from jsonrpc_client.rpc.types import ErrorObject

        return ErrorObject(code=self.code, message=self.rpc_message, data=self.data)
