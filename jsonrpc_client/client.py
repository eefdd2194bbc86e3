"""Declarative, strongly typed JSON-RPC 2.0 clients.

Declare a subclass of JsonRpcClient and mark stub methods with rpc_method.
Each stub's name, parameter list and ``RpcRequest[T]`` return annotation
describe one remote method; the stub body is never run.

Usage:
    class FizzBuzzClient(JsonRpcClient):
        @rpc_method
        def fizz_buzz(self, number: int) -> RpcRequest[str]:
            \"\"\"Returns the fizz-buzz string for the given number.\"\"\"

    async with HttpTransport("http://api.fizzbuzzexample.org/rpc/") as transport:
        client = FizzBuzzClient(transport)
        print(await client.fizz_buzz(3))

    # Or synchronously
    client = FizzBuzzClient(HttpTransport("http://api.fizzbuzzexample.org/rpc/"))
    print(client.fizz_buzz(3).call())

Arguments are sent as positional params in declaration order. A method
without parameters sends no params member.
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar, get_args, get_origin, get_type_hints, overload

from jsonrpc_client.core.interfaces import Transport
from jsonrpc_client.rpc.request import RpcRequest, call_method

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_UNSUPPORTED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class JsonRpcClient:
    """Base class for declared clients.

    Attributes:
        transport: The transport every call of this client goes through.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        """The transport used for all calls."""
        return self._transport

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transport={self._transport!r})"


def _result_type(func: Callable[..., Any]) -> Any:
    """Extract T from a ``-> RpcRequest[T]`` annotation."""
    annotation = get_type_hints(func).get("return", inspect.Signature.empty)
    if annotation is inspect.Signature.empty or annotation is RpcRequest:
        return Any
    if get_origin(annotation) is not RpcRequest:
        raise TypeError(
            f"rpc_method {func.__qualname__} must be annotated to return RpcRequest[...], "
            f"got: {annotation!r}"
        )
    (result_type,) = get_args(annotation)
    return result_type


@overload
def rpc_method(func: F) -> F: ...


@overload
def rpc_method(*, name: str | None = None) -> Callable[[F], F]: ...


def rpc_method(func: Any = None, *, name: str | None = None) -> Any:
    """Turn a stub method into a JSON-RPC call.

    Can be used bare (``@rpc_method``) or with an explicit remote method
    name (``@rpc_method(name="system.listMethods")``).

    Every invocation of the resulting method allocates exactly one id,
    serializes once and dispatches once via call_method.

    Args:
        func: The stub method (when used bare).
        name: Remote method name. Defaults to the Python method name.

    Raises:
        TypeError: If the stub takes *args or **kwargs, or its return
            annotation is not RpcRequest[...].
    """

    def decorate(stub: F) -> F:
        signature = inspect.signature(stub)
        parameters = list(signature.parameters.values())[1:]  # drop self
        for parameter in parameters:
            if parameter.kind in _UNSUPPORTED_KINDS:
                raise TypeError(
                    f"rpc_method {stub.__qualname__} cannot take *args or **kwargs"
                )
        method_name = name or stub.__name__
        resolved: list[Any] = []
        try:
            resolved.append(_result_type(stub))
        except NameError:
            # forward reference to a name defined later; resolved on first call
            pass

        @functools.wraps(stub)
        def wrapper(self: JsonRpcClient, *args: Any, **kwargs: Any) -> RpcRequest[Any]:
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            values = [bound.arguments[p.name] for p in parameters]
            if not resolved:
                resolved.append(_result_type(stub))
            return call_method(self.transport, method_name, values or None, resolved[0])

        wrapper.rpc_method_name = method_name  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorate(func)
    return decorate
