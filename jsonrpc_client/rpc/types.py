"""JSON-RPC 2.0 types for the client core."""

from dataclasses import dataclass
from typing import Any

JSONRPC_VERSION = "2.0"

RequestId = int | str | None


@dataclass
class Request:
    """JSON-RPC 2.0 request.

    Attributes:
        method: Name of the method to invoke.
        id: Request identifier, allocated by the transport.
        params: Positional (list) or named (dict) parameters. None omits the field.
        jsonrpc: Protocol version, always "2.0".
    """

    method: str
    id: RequestId
    params: list[Any] | dict[str, Any] | None = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Build the wire representation.

        The id member is always present; only params may be omitted.
        """
        data: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
        }
        if self.params is not None:
            data["params"] = self.params
        data["id"] = self.id
        return data


@dataclass
class ErrorObject:
    """JSON-RPC 2.0 error object.

    Attributes:
        code: Integer error code.
        message: Short description from the server.
        data: Optional additional information (None when absent).
    """

    code: int
    message: str
    data: Any = None


@dataclass
class Response:
    """JSON-RPC 2.0 response.

    Attributes:
        id: Request identifier echoed by the server.
        result: Result of the method call (mutually exclusive with error).
        error: Error object if the method failed (mutually exclusive with result).
        jsonrpc: Protocol version.
    """

    id: RequestId
    result: Any = None
    error: ErrorObject | None = None
    jsonrpc: str = JSONRPC_VERSION
