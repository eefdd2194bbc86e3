"""JSON-RPC 2.0 client core.

Example usage:
    request = call_method(transport, "fizz_buzz", [3], result_type=str)
    print(await request)
"""

from jsonrpc_client.rpc.protocol import (
    build_request,
    decode_response,
    map_params,
    parse_response,
    serialize_request,
)
from jsonrpc_client.rpc.request import RequestState, RpcRequest, call_method
from jsonrpc_client.rpc.types import JSONRPC_VERSION, ErrorObject, Request, RequestId, Response

__all__ = [
    # Types
    "JSONRPC_VERSION",
    "RequestId",
    "Request",
    "Response",
    "ErrorObject",
    # Protocol functions
    "map_params",
    "build_request",
    "serialize_request",
    "decode_response",
    "parse_response",
    # Lazy requests
    "RequestState",
    "RpcRequest",
    "call_method",
]
