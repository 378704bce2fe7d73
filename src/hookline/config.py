"""Process-wide configuration for hookline.

The host application owns configuration; this module only holds the
currently installed :class:`~hookline.models.HttpConfig` and offers a few
ways to replace it:

* :func:`set_config` -- install a ready-made config object.
* :func:`configure` -- override selected fields of the active config.
* :func:`load_config` -- read a JSON file the host has written.

:func:`get_config` lazily creates a default config when nothing has been
installed. :func:`reset_config` drops the installed config and is mostly
useful in test suites.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from hookline.exceptions import ConfigError
from hookline.models import HttpConfig

_config: Optional[HttpConfig] = None


def get_config() -> HttpConfig:
    """Return the active :class:`~hookline.models.HttpConfig`.

    A default instance is created on first use.
    """
    global _config
    if _config is None:
        _config = HttpConfig()
    return _config


def set_config(config: HttpConfig) -> None:
    """Install *config* as the active configuration.

    Args:
        config: The configuration to install.
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the active configuration to ``None`` (defaults on next use)."""
    global _config
    _config = None


def configure(**overrides: Any) -> HttpConfig:
    """Override fields of the active config and install the result.

    Args:
        **overrides: Field names of :class:`~hookline.models.HttpConfig`
            and their new values.

    Returns:
        The newly installed configuration.

    Raises:
        ConfigError: If a field name is unknown or a value fails validation.
    """
    data = get_config().model_dump()
    data.update(overrides)
    try:
        config = HttpConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    set_config(config)
    return config


def load_config(path: Union[str, Path]) -> HttpConfig:
    """Load a configuration from a JSON file and install it.

    Args:
        path: Path to a JSON object whose keys are
            :class:`~hookline.models.HttpConfig` fields.

    Returns:
        The newly installed configuration.

    Raises:
        ConfigError: If the file does not exist, contains invalid JSON, or
            fails Pydantic validation.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        config = HttpConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    set_config(config)
    return config
