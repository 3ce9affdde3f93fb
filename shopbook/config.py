"""Configuration file management for shopbook."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "currency": "₹",
    "default_cost_ratio": 0.7,
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "shopbook" / "config.toml"


def create_default_config(config_path: Path | None = None, **overrides: Any) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        **overrides: Settings that replace the defaults.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump({**DEFAULT_CONFIG, **overrides}, f)

    os.chmod(config_path, 0o600)
    logger.debug("Created default config at %s", config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary. Defaults are returned if the file doesn't exist.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = dict(DEFAULT_CONFIG)
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return config

    with open(config_path, "rb") as f:
        config.update(tomllib.load(f))
    return config

