"""Client configuration loading with fail-fast behavior."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from jsonrpc_client.config.schema import ClientConfig
from jsonrpc_client.core.errors import ConfigError

logger = logging.getLogger(__name__)


def _read_config_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e


def load_config(path: Path | str) -> ClientConfig:
    """Load and validate a client configuration file.

    The file is UTF-8 JSON (a leading BOM is ignored). An empty file is
    treated as ``{}`` and so fails validation for its missing transport.

    Args:
        path: Path to a JSON config file.

    Returns:
        Validated ClientConfig.

    Raises:
        ConfigError: If the file is missing, unreadable, not a JSON object,
            or fails validation.
    """
    path = Path(path)
    text = _read_config_text(path).strip()

    data: object = {}
    if text:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a JSON object, got {type(data).__name__}"
        )

    try:
        config = ClientConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed in {path}:\n{e}") from e

    logger.debug("Loaded config from %s: url=%s", path, config.transport.url)
    return config
