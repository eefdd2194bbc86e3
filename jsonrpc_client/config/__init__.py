"""Configuration loading and validation."""

from jsonrpc_client.config.loader import load_config
from jsonrpc_client.config.schema import ClientConfig, HttpTransportConfig

__all__ = [
    "ClientConfig",
    "HttpTransportConfig",
    "load_config",
]
