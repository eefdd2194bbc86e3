"""Transport agnostic, auto serializing, strongly typed JSON-RPC 2.0 clients.

Declare a client with rpc_method, hand it any Transport, and await the
returned RpcRequest (or call .call() from synchronous code):

    from jsonrpc_client import HttpTransport, JsonRpcClient, RpcRequest, rpc_method

    class FizzBuzzClient(JsonRpcClient):
        @rpc_method
        def fizz_buzz(self, number: int) -> RpcRequest[str]: ...

    client = FizzBuzzClient(HttpTransport("http://api.fizzbuzzexample.org/rpc/"))
    print(client.fizz_buzz(3).call())
"""

from jsonrpc_client.client import JsonRpcClient, rpc_method
from jsonrpc_client.core.errors import (
    ErrorKind,
    JsonRpcClientError,
    JsonRpcError,
    ResponseError,
    RpcClientError,
    SerializeError,
    TransportError,
)
from jsonrpc_client.core.interfaces import Transport
from jsonrpc_client.rpc.request import RequestState, RpcRequest, call_method
from jsonrpc_client.transport.http import HttpTransport, HttpTransportError

__version__ = "0.1.0"

__all__ = [
    "JsonRpcClient",
    "rpc_method",
    "RpcRequest",
    "RequestState",
    "call_method",
    "Transport",
    "HttpTransport",
    "HttpTransportError",
    "JsonRpcClientError",
    "ErrorKind",
    "RpcClientError",
    "TransportError",
    "SerializeError",
    "ResponseError",
    "JsonRpcError",
]
