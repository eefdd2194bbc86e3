"""Unit tests for request serialization and response parsing."""

import json
from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel

from jsonrpc_client.core.errors import JsonRpcError, ResponseError, SerializeError
from jsonrpc_client.rpc.protocol import (
    decode_response,
    map_params,
    parse_response,
    serialize_request,
)


@dataclass
class Point:
    x: int
    y: int


class Greeting(BaseModel):
    name: str
    excited: bool = False


# === Request side ===


class TestMapParams:
    """Tests for the params mapping rule."""

    def test_null_omits_params(self):
        assert map_params(None) is None

    def test_array_is_positional(self):
        assert map_params([1, "two", None]) == [1, "two", None]

    def test_object_is_named(self):
        assert map_params({"a": 1}) == {"a": 1}

    @pytest.mark.parametrize("value", [3, "Hello", 1.5, True, False])
    def test_scalar_is_wrapped(self, value: Any):
        assert map_params(value) == [value]


class TestSerializeRequest:
    """Tests for serialize_request."""

    def test_fizz_buzz_request(self):
        """The canonical example encodes to compact JSON in member order."""
        data = serialize_request(1, "fizz_buzz", 3)

        assert json.loads(data) == {
            "jsonrpc": "2.0",
            "method": "fizz_buzz",
            "params": [3],
            "id": 1,
        }
        assert data == b'{"jsonrpc":"2.0","method":"fizz_buzz","params":[3],"id":1}'

    def test_returns_bytes(self):
        assert isinstance(serialize_request(1, "ping"), bytes)

    def test_none_params_omitted(self):
        data = json.loads(serialize_request(5, "ping", None))

        assert "params" not in data
        assert data["id"] == 5

    def test_list_params_verbatim(self):
        params = [1, "two", [3], {"four": 4}]
        data = json.loads(serialize_request(1, "m", params))

        assert data["params"] == params

    def test_tuple_params_positional(self):
        data = json.loads(serialize_request(1, "add", (2, 3)))

        assert data["params"] == [2, 3]

    def test_dict_params_named(self):
        data = json.loads(serialize_request(1, "greet", {"name": "Ada", "times": 2}))

        assert data["params"] == {"name": "Ada", "times": 2}

    def test_dataclass_params_named(self):
        data = json.loads(serialize_request(1, "plot", Point(x=1, y=2)))

        assert data["params"] == {"x": 1, "y": 2}

    def test_pydantic_model_params_named(self):
        data = json.loads(serialize_request(1, "greet", Greeting(name="Ada")))

        assert data["params"] == {"name": "Ada", "excited": False}

    def test_scalar_params_wrapped(self):
        data = json.loads(serialize_request(1, "echo", "Hello"))

        assert data["params"] == ["Hello"]

    def test_string_id_carried_through(self):
        data = json.loads(serialize_request("req-7", "ping"))

        assert data["id"] == "req-7"

    def test_null_id_is_still_present(self):
        data = json.loads(serialize_request(None, "ping"))

        assert "id" in data
        assert data["id"] is None

    def test_unserializable_argument(self):
        """Arguments without a JSON form raise SerializeError with the cause attached."""
        with pytest.raises(SerializeError) as exc_info:
            serialize_request(1, "m", [object()])

        assert exc_info.value.cause is not None
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert "serialize" in str(exc_info.value)

    def test_circular_argument(self):
        values: list[Any] = []
        values.append(values)

        with pytest.raises(SerializeError) as exc_info:
            serialize_request(1, "m", values)

        assert isinstance(exc_info.value.cause, ValueError)

    def test_empty_method(self):
        with pytest.raises(SerializeError) as exc_info:
            serialize_request(1, "", [1])

        assert isinstance(exc_info.value.cause, ValueError)


# === Response side ===


class TestDecodeResponse:
    """Tests for structural validation of responses."""

    def test_success(self):
        response = decode_response(b'{"jsonrpc":"2.0","id":1,"result":{"a":1}}')

        assert response.id == 1
        assert response.result == {"a": 1}
        assert response.error is None

    def test_null_result_is_a_result(self):
        response = decode_response(b'{"jsonrpc":"2.0","id":1,"result":null}')

        assert response.result is None
        assert response.error is None

    def test_error(self):
        response = decode_response(
            b'{"jsonrpc":"2.0","id":1,"error":{"code":-32601,"message":"Method not found"}}'
        )

        assert response.error is not None
        assert response.error.code == -32601
        assert response.error.message == "Method not found"
        assert response.error.data is None

    def test_accepts_str(self):
        response = decode_response('{"jsonrpc":"2.0","id":"a","result":1}')

        assert response.id == "a"

    @pytest.mark.parametrize(
        ("raw", "fragment"),
        [
            (b"not valid json {", "invalid JSON"),
            (b"\xff\xff", "UTF-8"),
            (b"[1, 2]", "JSON object"),
            (b'{"jsonrpc":"1.0","id":1,"result":1}', "jsonrpc"),
            (b'{"jsonrpc":"2.0","id":1}', "either"),
            (b'{"jsonrpc":"2.0","id":1,"result":1,"error":{"code":1,"message":"x"}}', "both"),
            (b'{"jsonrpc":"2.0","result":1}', "'id'"),
            (b'{"jsonrpc":"2.0","id":[1],"result":1}', "id must be"),
            (b'{"jsonrpc":"2.0","id":true,"result":1}', "id must be"),
            (b'{"jsonrpc":"2.0","id":1,"error":"boom"}', "error must be an object"),
            (b'{"jsonrpc":"2.0","id":1,"error":{"message":"x"}}', "code"),
            (b'{"jsonrpc":"2.0","id":1,"error":{"code":"x","message":"x"}}', "code"),
            (b'{"jsonrpc":"2.0","id":1,"error":{"code":1}}', "message"),
        ],
    )
    def test_malformed(self, raw: bytes, fragment: str):
        with pytest.raises(ResponseError) as exc_info:
            decode_response(raw)

        assert fragment in exc_info.value.reason

    @pytest.mark.parametrize("encoding", ["utf-16", "utf-16-le", "utf-32"])
    def test_only_utf8_bytes(self, encoding: str):
        raw = '{"jsonrpc":"2.0","id":1,"result":1}'.encode(encoding)

        with pytest.raises(ResponseError):
            decode_response(raw)

    def test_deeply_nested(self):
        raw = b'{"jsonrpc":"2.0","id":1,"result":' + b"[" * 200_000

        with pytest.raises(ResponseError) as exc_info:
            decode_response(raw)

        assert "nested too deeply" in exc_info.value.reason


class TestParseResponse:
    """Tests for parse_response."""

    def test_result_returned_raw_by_default(self):
        result = parse_response(b'{"jsonrpc":"2.0","id":1,"result":[1,"a",null]}', 1)

        assert result == [1, "a", None]

    def test_result_validated_into_type(self):
        result = parse_response(b'{"jsonrpc":"2.0","id":1,"result":"fizz"}', 1, str)

        assert result == "fizz"

    def test_result_into_dataclass(self):
        result = parse_response(b'{"jsonrpc":"2.0","id":3,"result":{"x":1,"y":2}}', 3, Point)

        assert result == Point(x=1, y=2)

    def test_result_into_model(self):
        result = parse_response(
            b'{"jsonrpc":"2.0","id":3,"result":{"name":"Ada","excited":true}}', 3, Greeting
        )

        assert result == Greeting(name="Ada", excited=True)

    def test_result_into_generic(self):
        result = parse_response(b'{"jsonrpc":"2.0","id":1,"result":[1,2,3]}', 1, list[int])

        assert result == [1, 2, 3]

    def test_result_type_mismatch(self):
        with pytest.raises(ResponseError) as exc_info:
            parse_response(b'{"jsonrpc":"2.0","id":1,"result":"abc"}', 1, int)

        assert "expected type" in exc_info.value.reason

    @pytest.mark.parametrize(
        ("raw_result", "result_type"),
        [
            (b'"3"', int),
            (b"true", int),
            (b"1", str),
            (b'"1.5"', float),
            (b'{"x":"1","y":2}', Point),
        ],
    )
    def test_result_not_coerced(self, raw_result: bytes, result_type: Any):
        raw = b'{"jsonrpc":"2.0","id":1,"result":' + raw_result + b"}"

        with pytest.raises(ResponseError):
            parse_response(raw, 1, result_type)

    def test_result_array_into_tuple(self):
        result = parse_response(b'{"jsonrpc":"2.0","id":1,"result":[1,"a"]}', 1, tuple[int, str])

        assert result == (1, "a")

    def test_integer_result_into_float(self):
        assert parse_response(b'{"jsonrpc":"2.0","id":1,"result":2}', 1, float) == 2.0

    def test_error_object_verbatim(self):
        raw = json.dumps(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "error": {
                    "code": -32600,
                    "message": "This was an invalid request",
                    "data": [1, 2, 3],
                },
            }
        ).encode()

        with pytest.raises(JsonRpcError) as exc_info:
            parse_response(raw, 1, str)

        error = exc_info.value
        assert error.code == -32600
        assert error.rpc_message == "This was an invalid request"
        assert error.data == [1, 2, 3]

    def test_bare_error_envelope(self):
        """An error envelope without jsonrpc or id members is still a JSON-RPC error."""
        raw = b'{"error":{"code":-32600,"message":"This was an invalid request","data":[1,2,3]}}'

        with pytest.raises(JsonRpcError) as exc_info:
            parse_response(raw, 1)

        assert exc_info.value.code == -32600
        assert exc_info.value.data == [1, 2, 3]

    def test_error_with_null_id(self):
        raw = b'{"jsonrpc":"2.0","id":null,"error":{"code":-32700,"message":"Parse error"}}'

        with pytest.raises(JsonRpcError):
            parse_response(raw, 4)

    def test_error_with_other_id_rejected(self):
        raw = b'{"jsonrpc":"2.0","id":9,"error":{"code":-32700,"message":"Parse error"}}'

        with pytest.raises(ResponseError) as exc_info:
            parse_response(raw, 4)

        assert "does not match" in exc_info.value.reason

    def test_id_mismatch_rejected(self):
        with pytest.raises(ResponseError) as exc_info:
            parse_response(b'{"jsonrpc":"2.0","id":2,"result":1}', 1)

        assert "does not match" in exc_info.value.reason

    def test_string_id_does_not_match_number(self):
        with pytest.raises(ResponseError):
            parse_response(b'{"jsonrpc":"2.0","id":"1","result":1}', 1)

    def test_null_id_on_success_rejected(self):
        with pytest.raises(ResponseError):
            parse_response(b'{"jsonrpc":"2.0","id":null,"result":1}', 1)

    def test_missing_jsonrpc_tolerated(self):
        assert parse_response(b'{"id":1,"result":"ok"}', 1) == "ok"
