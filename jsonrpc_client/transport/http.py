"""HTTP transport for JSON-RPC 2.0 clients.

Each request is one HTTP POST whose body is the serialized request and whose
response body is handed back to the client core unparsed. Concurrent sends
are independent POSTs, so no response matching is needed here.

Usage:
    async with HttpTransport("http://127.0.0.1:8765/rpc") as transport:
        result = await call_method(transport, "ping", ["Hello"])

Outside ``async with`` every send uses a short-lived httpx.AsyncClient, which
keeps the transport usable from RpcRequest.call() (one event loop per call).
"""

import logging
import threading
from typing import Any

import httpx

from jsonrpc_client.config.schema import HttpTransportConfig
from jsonrpc_client.core.errors import JsonRpcClientError
from jsonrpc_client.core.interfaces import Transport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 60.0

JSON_HTTP_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class HttpTransportError(JsonRpcClientError):
    """Error in the HTTP transport layer.

    Attributes:
        status_code: HTTP status of the response, if one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpTransport(Transport):
    """Send JSON-RPC requests as HTTP POSTs with httpx.

    Ids are allocated from a per-instance counter starting at 1.

    Attributes:
        url: Endpoint requests are POSTed to.
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        follow_redirects: bool = False,
    ) -> None:
        """Initialize HttpTransport.

        Args:
            url: Endpoint URL.
            timeout: Request timeout in seconds (for clients this transport creates).
            headers: Extra headers; override the JSON defaults.
            client: Existing httpx.AsyncClient to use. The caller keeps
                ownership and must close it.
            follow_redirects: Whether created clients follow redirects.
        """
        self._url = url
        self._timeout = timeout
        self._headers = {**JSON_HTTP_HEADERS, **(headers or {})}
        self._follow_redirects = follow_redirects
        self._client = client
        self._owns_client = False
        self._id_lock = threading.Lock()
        self._last_id = 0
        logger.debug("HttpTransport initialized: url=%s, timeout=%s", url, timeout)

    @classmethod
    def from_config(cls, config: HttpTransportConfig) -> "HttpTransport":
        """Create a transport from a validated config model."""
        return cls(
            url=config.url,
            timeout=config.timeout,
            headers=dict(config.headers),
            follow_redirects=config.follow_redirects,
        )

    @property
    def url(self) -> str:
        """Endpoint URL."""
        return self._url

    def get_next_id(self) -> int:
        """Return the next id of this transport (1, 2, 3, ...)."""
        with self._id_lock:
            self._last_id += 1
            return self._last_id

    async def __aenter__(self) -> "HttpTransport":
        """Open a pooled client for the lifetime of the context."""
        if self._client is None:
            self._client = self._create_client()
            self._owns_client = True
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the pooled client if this transport created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False
            logger.debug("HttpTransport closed: url=%s", self._url)

    async def send(self, data: bytes) -> bytes:
        """POST the request and return the raw response body.

        Raises:
            HttpTransportError: On connection failure, timeout, or a non-2xx status.
        """
        if self._client is not None:
            return await self._post(self._client, data)
        async with self._create_client() as client:
            return await self._post(client, data)

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=self._follow_redirects,
        )

    async def _post(self, client: httpx.AsyncClient, data: bytes) -> bytes:
        try:
            response = await client.post(self._url, content=data, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("HTTP %d from %s", status, self._url)
            raise HttpTransportError(
                f"Server returned HTTP {status}", status_code=status
            ) from e
        except httpx.TimeoutException as e:
            logger.warning("Request to %s timed out after %ss", self._url, self._timeout)
            raise HttpTransportError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("HTTP request to %s failed: %s", self._url, e)
            raise HttpTransportError(f"HTTP request failed: {e}") from e

        logger.debug("Received %d bytes from %s", len(response.content), self._url)
        return response.content

    def __repr__(self) -> str:
        return f"HttpTransport(url={self._url!r})"
