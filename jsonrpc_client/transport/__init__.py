"""Transport implementations."""

from jsonrpc_client.transport.http import HttpTransport, HttpTransportError

__all__ = [
    "HttpTransport",
    "HttpTransportError",
]
