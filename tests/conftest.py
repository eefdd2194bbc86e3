"""Shared pytest fixtures: in-memory transports for exercising the client core."""

import json
from typing import Any

import pytest

from jsonrpc_client.core.interfaces import Transport


class EchoTransport(Transport):
    """Answers every request with a result containing the entire request."""

    def __init__(self, next_id: int = 1) -> None:
        self.next_id = next_id
        self.sent: list[bytes] = []

    def get_next_id(self) -> int:
        return self.next_id

    async def send(self, data: bytes) -> bytes:
        self.sent.append(data)
        return json.dumps(
            {"jsonrpc": "2.0", "id": self.next_id, "result": json.loads(data)}
        ).encode()


class InvalidRequestTransport(Transport):
    """Always answers with an "Invalid request" error object."""

    def get_next_id(self) -> int:
        return 1

    async def send(self, data: bytes) -> bytes:
        return json.dumps(
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


class ErrorTransport(Transport):
    """Send operations always fail with an I/O error."""

    def get_next_id(self) -> int:
        return 1

    async def send(self, data: bytes) -> bytes:
        raise OSError("Internal transport error")


class ScriptedTransport(Transport):
    """Counts ids from 1 and answers with a fixed payload.

    Records every send so tests can check what reached the wire.
    """

    def __init__(self, reply: Any = None, raw_reply: bytes | None = None) -> None:
        self._reply = reply
        self._raw_reply = raw_reply
        self._last_id = 0
        self.sent: list[dict[str, Any]] = []
        self.send_calls = 0
        self.awaited = 0

    def get_next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def send(self, data: bytes) -> Any:
        self.send_calls += 1
        self.sent.append(json.loads(data))
        return self._respond(self.sent[-1]["id"])

    async def _respond(self, request_id: int) -> bytes:
        self.awaited += 1
        if self._raw_reply is not None:
            return self._raw_reply
        return json.dumps({"jsonrpc": "2.0", "id": request_id, "result": self._reply}).encode()


@pytest.fixture
def echo_transport() -> EchoTransport:
    return EchoTransport()


@pytest.fixture
def invalid_request_transport() -> InvalidRequestTransport:
    return InvalidRequestTransport()


@pytest.fixture
def error_transport() -> ErrorTransport:
    return ErrorTransport()


@pytest.fixture
def scripted_transport() -> ScriptedTransport:
    return ScriptedTransport(reply="ok")


@pytest.fixture
def make_scripted_transport() -> type[ScriptedTransport]:
    return ScriptedTransport
