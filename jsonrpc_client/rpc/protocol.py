"""JSON-RPC 2.0 request serialization and response parsing (client side)."""

import json
import logging
from functools import lru_cache
from typing import Any, TypeVar, cast

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from jsonrpc_client.core.errors import JsonRpcError, ResponseError, SerializeError
from jsonrpc_client.rpc.types import JSONRPC_VERSION, ErrorObject, Request, RequestId, Response

logger = logging.getLogger(__name__)

T = TypeVar("T")


# === Request side ===


def map_params(value: Any) -> list[Any] | dict[str, Any] | None:
    """Map the JSON form of the call arguments onto the params member.

    - None: no params (the member is omitted)
    - list: positional params, verbatim
    - dict: named params, verbatim
    - anything else: wrapped as a single positional param

    Args:
        value: Arguments already converted to JSON-compatible Python values.

    Returns:
        The value for the params member, or None to omit it.
    """
    if value is None:
        return None
    if isinstance(value, (list, dict)):
        return value
    return [value]


def build_request(request_id: RequestId, method: str, params: Any = None) -> Request:
    """Build a Request from raw call arguments.

    Args:
        request_id: Id allocated by the transport.
        method: Method name, must be non-empty.
        params: Call arguments. Anything pydantic can convert to JSON is accepted:
            tuples and lists, dicts, dataclasses, pydantic models, scalars.

    Returns:
        The Request with params mapped.

    Raises:
        SerializeError: If the method name is empty or the arguments have
            no JSON representation.
    """
    if not isinstance(method, str) or not method:
        raise SerializeError(ValueError(f"method must be a non-empty string, got: {method!r}"))

    try:
        value = to_jsonable_python(params)
    except (PydanticSerializationError, ValueError, TypeError) as e:
        # circular references surface as a plain ValueError
        raise SerializeError(e) from e

    return Request(method=method, id=request_id, params=map_params(value))


def serialize_request(request_id: RequestId, method: str, params: Any = None) -> bytes:
    """Create the wire bytes of a JSON-RPC 2.0 request.

    Args:
        request_id: Id allocated by the transport.
        method: Method name.
        params: Call arguments (see build_request).

    Returns:
        Compact UTF-8 encoded JSON.

    Raises:
        SerializeError: If any part of the request cannot be serialized.
            No partial output is produced.
    """
    request = build_request(request_id, method, params)
    try:
        text = json.dumps(request.to_dict(), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializeError(e) from e
    return text.encode("utf-8")


# === Response side ===


def decode_response(data: bytes | str) -> Response:
    """Parse raw bytes into a structurally valid Response.

    A missing "jsonrpc" member is tolerated; a wrong one is not.

    Args:
        data: Raw response body. Bytes must be UTF-8.

    Returns:
        The parsed Response. ``error`` is set for error responses.

    Raises:
        ResponseError: If the bytes are not a well-formed JSON-RPC 2.0 response.
    """
    if isinstance(data, (bytes, bytearray)):
        # json.loads would sniff UTF-16 and UTF-32 from raw bytes
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ResponseError(f"response is not valid UTF-8: {e}") from e

    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        raise ResponseError(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise ResponseError("response nested too deeply") from e

    if not isinstance(payload, dict):
        raise ResponseError(f"response must be a JSON object, got: {type(payload).__name__}")

    if "jsonrpc" in payload:
        if payload["jsonrpc"] != JSONRPC_VERSION:
            raise ResponseError(f"jsonrpc must be '2.0', got: {payload['jsonrpc']!r}")
    else:
        logger.debug("Response has no 'jsonrpc' member, assuming 2.0")

    response_id = payload.get("id")
    if response_id is not None and (
        isinstance(response_id, bool) or not isinstance(response_id, (str, int, float))
    ):
        raise ResponseError(
            f"id must be string, number, or null, got: {type(response_id).__name__}"
        )

    has_result = "result" in payload
    has_error = "error" in payload
    if has_result and has_error:
        raise ResponseError("response cannot have both 'result' and 'error'")
    if not has_result and not has_error:
        raise ResponseError("response must have either 'result' or 'error'")

    if has_error:
        error = payload["error"]
        if not isinstance(error, dict):
            raise ResponseError(f"error must be an object, got: {type(error).__name__}")
        code = error.get("code")
        message = error.get("message")
        if isinstance(code, bool) or not isinstance(code, int):
            raise ResponseError("error must have an integer 'code' field")
        if not isinstance(message, str):
            raise ResponseError("error must have a string 'message' field")
        return Response(
            jsonrpc=payload.get("jsonrpc", JSONRPC_VERSION),
            id=response_id,
            error=ErrorObject(code=code, message=message, data=error.get("data")),
        )

    if "id" not in payload:
        raise ResponseError("response must have 'id' field")

    return Response(
        jsonrpc=payload.get("jsonrpc", JSONRPC_VERSION),
        id=response_id,
        result=payload["result"],
    )


def _ids_match(expected: RequestId, actual: RequestId) -> bool:
    # bool is an int subclass; true must not match id 1
    if isinstance(actual, bool) or isinstance(expected, bool):
        return False
    if isinstance(expected, str) != isinstance(actual, str):
        return False
    return expected == actual


@lru_cache(maxsize=256)
def _cached_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def get_type_adapter(result_type: Any) -> TypeAdapter[Any]:
    """Return a (cached where possible) pydantic TypeAdapter for result_type."""
    try:
        return _cached_adapter(result_type)
    except TypeError:
        # unhashable type expression
        return TypeAdapter(result_type)


def parse_response(
    data: bytes | str,
    expected_id: RequestId,
    result_type: type[T] | Any = Any,
) -> T:
    """Turn a raw response into the call's result.

    Args:
        data: Raw response body from the transport.
        expected_id: Id the request was sent with.
        result_type: Type the result is validated into. Any returns raw JSON.

    Returns:
        The validated result.

    Raises:
        ResponseError: Malformed response, mismatched id, or a result that
            does not fit result_type.
        JsonRpcError: The server answered with an error object.
    """
    response = decode_response(data)

    if response.id is not None and not _ids_match(expected_id, response.id):
        raise ResponseError(
            f"response id {response.id!r} does not match request id {expected_id!r}"
        )

    if response.error is not None:
        error = response.error
        logger.debug("Request %r answered with JSON-RPC error %d", expected_id, error.code)
        raise JsonRpcError(error.code, error.message, error.data)

    if response.id is None and expected_id is not None:
        raise ResponseError(f"response id is null, expected {expected_id!r}")

    if result_type is Any:
        return cast(T, response.result)

    # strict JSON mode: no string-to-number coercion, arrays still fill tuples
    try:
        return cast(
            T,
            get_type_adapter(result_type).validate_json(
                json.dumps(response.result), strict=True
            ),
        )
    except ValidationError as e:
        raise ResponseError(f"result does not match the expected type: {e}") from e
