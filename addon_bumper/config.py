"""Configuration loading.

The whitelist and addons directory come from ``config.json`` (the historical
format) or ``config.toml``. TOML files may keep the keys at the top level or
under ``[tool.addon-bumper]``. A missing or broken file is never fatal: we
warn and fall back to an empty whitelist and ``./addons``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from .models import Config
from .shell import step, warn

DEFAULT_CONFIG_FILES = ("config.json", "config.toml")


def find_config_file(root: Path | None = None) -> Path | None:
    """Return the first default config file present in ``root`` (cwd)."""
    root = root or Path.cwd()
    for name in DEFAULT_CONFIG_FILES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _parse(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".toml":
        data = tomlkit.parse(text).unwrap()
        return data.get("tool", {}).get("addon-bumper", data)
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("top level must be an object")
    return data


def load_config(path: str | Path | None = None, *, verbose: bool = False) -> Config:
    """Load and validate the configuration.

    Args:
        path: Config file to read. When None, ``config.json`` then
              ``config.toml`` are looked up in the current directory.
        verbose: Report which file was loaded.

    Returns:
        The parsed Config, or the defaults if nothing usable was found.
    """
    config_path = Path(path) if path is not None else find_config_file()
    if config_path is None:
        warn(
            f"Could not find {' or '.join(DEFAULT_CONFIG_FILES)}, using defaults"
        )
        return Config()

    try:
        config = Config.model_validate(_parse(config_path))
    except (OSError, ValueError, TOMLKitError, ValidationError) as exc:
        # JSONDecodeError is a ValueError
        warn(f"Could not load {config_path}, using defaults: {exc}")
        return Config()

    if verbose:
        step(f"Loaded configuration from {config_path}")
    return config
