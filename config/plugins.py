"""Loading and validation of playlist plugin configuration blocks."""

from __future__ import annotations

import json
import os
from typing import Any

from .settings import CONFIG_PATH_ENV


class ConfigError(ValueError):
    pass


def config_path_from_env() -> str | None:
    value = (os.environ.get(CONFIG_PATH_ENV) or "").strip()
    return value or None


def load_config(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config {path}: {exc}") from exc


def validate_config(config):
    errors = []
    if not isinstance(config, dict):
        return ["config must be a JSON object"]

    blocks = config.get("playlist_plugins")
    if blocks is None:
        return errors
    if not isinstance(blocks, list):
        return ["playlist_plugins must be a list"]

    for idx, block in enumerate(blocks):
        if not isinstance(block, dict):
            errors.append(f"playlist_plugins[{idx}] must be an object")
            continue
        name = block.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(f"playlist_plugins[{idx}] is missing a plugin name")
        enabled = block.get("enabled")
        if enabled is not None and not isinstance(enabled, bool):
            errors.append(f"playlist_plugins[{idx}].enabled must be true or false")
    return errors


def plugin_configs(config: dict[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Map plugin name to its configuration block.

    Raises ``ConfigError`` if the config does not validate. When a name is
    configured more than once the first block wins.
    """
    if not config:
        return {}
    errors = validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))

    result: dict[str, dict[str, Any]] = {}
    for block in config.get("playlist_plugins") or []:
        result.setdefault(block["name"].strip(), block)
    return result


def block_enabled(block: dict[str, Any]) -> bool:
    return bool(block.get("enabled", True))
