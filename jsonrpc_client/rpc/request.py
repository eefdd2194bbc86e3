"""Lazy RPC requests and the dispatch entry point.

``call_method`` prepares a request and hands the bytes to the transport, but
nothing is awaited until the caller drives the returned ``RpcRequest``:

    request = call_method(transport, "fizz_buzz", [3], result_type=str)
    result = await request      # or: request.call() from synchronous code

An ``RpcRequest`` is single-shot. Awaiting it a second time is a programming
error and raises RuntimeError, never a stale value.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Generator
from enum import Enum
from typing import Any, Generic, TypeVar

from jsonrpc_client.core.errors import RpcClientError, SerializeError, TransportError
from jsonrpc_client.core.interfaces import Transport
from jsonrpc_client.rpc.protocol import get_type_adapter, parse_response, serialize_request
from jsonrpc_client.rpc.types import RequestId

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestState(str, Enum):
    """Lifecycle of an RpcRequest."""

    FAILED = "failed"  # terminal error stored, not yet observed
    PENDING = "pending"  # transport operation stored, not yet awaited
    RUNNING = "running"  # being awaited
    COMPLETED = "completed"


class RpcRequest(Generic[T]):
    """A lazy, single-shot JSON-RPC call.

    Instances are returned by ``call_method`` (and by methods declared with
    ``rpc_method``). The call's outcome is obtained by awaiting the request or
    by calling ``call()``. Failures are raised as RpcClientError subclasses.

    Use the ``failed`` and ``pending`` constructors rather than __init__.
    """

    def __init__(
        self,
        state: RequestState,
        request_id: RequestId,
        operation: Awaitable[bytes] | None = None,
        error: RpcClientError | None = None,
        result_type: Any = Any,
    ) -> None:
        self._state = state
        self._id = request_id
        self._operation = operation
        self._error = error
        self._result_type = result_type

    @classmethod
    def failed(cls, error: RpcClientError, request_id: RequestId = None) -> "RpcRequest[T]":
        """Create a request that resolves to ``error`` when driven."""
        return cls(RequestState.FAILED, request_id, error=error)

    @classmethod
    def pending(
        cls,
        operation: Awaitable[bytes],
        request_id: RequestId,
        result_type: Any = Any,
    ) -> "RpcRequest[T]":
        """Create a request waiting on a transport operation."""
        return cls(
            RequestState.PENDING,
            request_id,
            operation=operation,
            result_type=result_type,
        )

    @property
    def id(self) -> RequestId:
        """Id the request was (or would have been) sent with."""
        return self._id

    @property
    def state(self) -> RequestState:
        """Current lifecycle state."""
        return self._state

    def __await__(self) -> Generator[Any, None, T]:
        return self._drive().__await__()

    async def _drive(self) -> T:
        if self._state in (RequestState.RUNNING, RequestState.COMPLETED):
            raise RuntimeError("RpcRequest cannot be awaited twice")

        if self._state is RequestState.FAILED:
            error = self._error
            self._error = None
            self._state = RequestState.COMPLETED
            if error is None:
                raise RuntimeError("RpcRequest in failed state has no error")
            raise error

        operation = self._operation
        self._operation = None
        self._state = RequestState.RUNNING
        try:
            try:
                data = await operation  # type: ignore[misc]
            except Exception as e:
                logger.debug("Transport failed for request %r: %s", self._id, e)
                raise TransportError(e) from e
            logger.debug(
                "Deserializing %d byte response to request with id %r",
                len(data),
                self._id,
            )
            return parse_response(data, self._id, self._result_type)
        finally:
            self._state = RequestState.COMPLETED

    def call(self) -> T:
        """Run the request to completion, blocking the current thread.

        Must not be used from inside a running event loop; await the
        request there instead.

        Returns:
            The result of the call.

        Raises:
            RpcClientError: If the call failed.
            RuntimeError: If the request was already driven, or an event
                loop is already running in this thread.
        """
        async def _run() -> T:
            return await self

        return asyncio.run(_run())

    def close(self) -> None:
        """Abandon the request without driving it.

        A pending coroutine is closed and a pending future is cancelled.
        Has no effect on a request that is running or completed.
        """
        if self._state not in (RequestState.PENDING, RequestState.FAILED):
            return
        operation = self._operation
        if inspect.iscoroutine(operation):
            operation.close()
        elif isinstance(operation, asyncio.Future):
            operation.cancel()
        self._operation = None
        self._error = None
        self._state = RequestState.COMPLETED
        logger.debug("Abandoned request %r", self._id)

    def __repr__(self) -> str:
        return f"RpcRequest(id={self._id!r}, state={self._state.value})"


def call_method(
    transport: Transport,
    method: str,
    params: Any = None,
    result_type: type[T] | Any = Any,
) -> RpcRequest[T]:
    """Prepare a lazy RpcRequest for ``method`` on ``transport``.

    Allocates an id from the transport, serializes the request and passes
    the bytes to ``transport.send()``. The awaitable returned by the
    transport is not driven here.

    If serialization fails, ``send()`` is not called and the returned
    request is already failed with SerializeError.

    Args:
        transport: Transport to allocate the id from and send with.
        method: Remote method name.
        params: Call arguments. None omits params, a list/tuple is sent as
            positional params, a dict/dataclass/model as named params, and
            any other value as a single positional param.
        result_type: Type the result is validated into.

    Returns:
        The lazy request.
    """
    # Build the validator up front so an unsupported type fails at the call site
    get_type_adapter(result_type)

    request_id = transport.get_next_id()
    logger.debug("Serializing call to method %r with id %r", method, request_id)
    try:
        data = serialize_request(request_id, method, params)
    except SerializeError as e:
        logger.debug("Serialization failed for method %r: %s", method, e)
        return RpcRequest.failed(e, request_id)

    try:
        operation = transport.send(data)
    except Exception as e:
        logger.debug("Transport refused request %r: %s", request_id, e)
        return RpcRequest.failed(TransportError(e), request_id)

    return RpcRequest.pending(operation, request_id, result_type)
