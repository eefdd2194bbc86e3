"""Pydantic models for jsonrpc_client configuration validation."""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpTransportConfig(BaseModel):
    """Configuration for HttpTransport.

    Example in client.json:
        "transport": {
            "url": "http://127.0.0.1:8765/rpc",
            "timeout": 30.0,
            "headers": {"Authorization": "Bearer nxk_..."}
        }
    """

    model_config = ConfigDict(extra="forbid")

    url: str
    """Endpoint the requests are POSTed to. Must be http or https."""

    timeout: float = Field(default=60.0, gt=0)
    """Per-request timeout in seconds, enforced by httpx."""

    headers: dict[str, str] = Field(default_factory=dict)
    """Extra headers sent with every request."""

    follow_redirects: bool = False
    """Whether httpx follows redirects."""

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"url scheme must be http or https, got: {parsed.scheme!r}")
        if not parsed.netloc:
            raise ValueError(f"url must include a host: {v!r}")
        return v


class ClientConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    transport: HttpTransportConfig
