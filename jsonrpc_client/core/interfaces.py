"""Core interfaces for jsonrpc_client.

The client core never talks to a network directly. Everything it needs from
a byte channel is captured by the Transport base class below.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable


class Transport(ABC):
    """Byte-level transport used by RPC clients.

    A transport owns two things the core deliberately does not:

    1. Request id allocation. ``get_next_id()`` must not repeat a value on the
       same instance; uniqueness across instances is not required.
    2. Delivery. ``send()`` starts sending one request and returns an
       awaitable resolving to the raw response bytes for *that* request, or
       raising a transport-specific exception.

    ``send()`` may be called while other sends on the same transport are
    still outstanding. Matching concurrent responses to their requests is
    the transport's job.

    Example:
        class LoopbackTransport(Transport):
            def __init__(self) -> None:
                self._next = 0

            def get_next_id(self) -> int:
                self._next += 1
                return self._next

            async def send(self, data: bytes) -> bytes:
                return await some_channel.roundtrip(data)
    """

    @abstractmethod
    def get_next_id(self) -> int:
        """Return an id not yet used on this transport."""
        ...

    @abstractmethod
    def send(self, data: bytes) -> Awaitable[bytes]:
        """Send a serialized request and return an awaitable for the response bytes.

        Implementations are usually ``async def``, so no I/O happens until the
        returned coroutine is awaited.

        Args:
            data: UTF-8 encoded JSON-RPC request.

        Returns:
            Awaitable completing with the raw response body.
        """
        ...
