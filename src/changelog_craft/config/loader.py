"""
Configuration loader for changelog_craft.

The tool reads an optional JSON configuration file named ``config.json``
located in the ``~/.changelog_craft/`` directory in the user's home
directory. Every key is optional; missing keys fall back to
:data:`DEFAULT_CONFIG`. A missing file simply yields the defaults.

If the file is malformed or a key has the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from changelog_craft.changelog.prompt_builder import TEMPLATE_TYPES
from changelog_craft.vcs.date_range import DATE_RANGE_PRESETS


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging has not been configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = "config.json"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

DEFAULT_CONFIG: Dict[str, Any] = {
    "github_token": None,
    "github_api_url": "https://api.github.com",
    "request_timeout": 30,
    "commit_limit": 100,
    "date_range": "30days",
    "template_type": "detailed",
    "exclude_patterns": [],
    "dedup": True,
}


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the changelog_craft configuration."""
    return Path.home() / ".changelog_craft"


def _validate(data: Dict[str, Any]) -> None:
    token = data.get("github_token")
    if token is not None and not isinstance(token, str):
        raise ConfigError("'github_token' must be a string")
    if "github_api_url" in data and not isinstance(data["github_api_url"], str):
        raise ConfigError("'github_api_url' must be a string")
    # bool is a subclass of int; reject it for numeric settings
    timeout = data.get("request_timeout")
    if "request_timeout" in data and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
    ):
        raise ConfigError("'request_timeout' must be a positive number")
    limit = data.get("commit_limit")
    if "commit_limit" in data and (
        isinstance(limit, bool) or not isinstance(limit, int) or limit < 1
    ):
        raise ConfigError("'commit_limit' must be a positive integer")
    if "date_range" in data and data["date_range"] not in DATE_RANGE_PRESETS:
        raise ConfigError(
            f"'date_range' must be one of: {', '.join(DATE_RANGE_PRESETS)}"
        )
    if "template_type" in data and data["template_type"] not in TEMPLATE_TYPES:
        raise ConfigError(
            f"'template_type' must be one of: {', '.join(TEMPLATE_TYPES)}"
        )
    patterns = data.get("exclude_patterns")
    if "exclude_patterns" in data and (
        not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns)
    ):
        raise ConfigError("'exclude_patterns' must be a list of strings")
    if "dedup" in data and not isinstance(data["dedup"], bool):
        raise ConfigError("'dedup' must be a boolean")


def load_config() -> Dict[str, Any]:
    """Load the configuration from the user's home directory.

    Returns:
        A dictionary with every key of :data:`DEFAULT_CONFIG`, values from
        the file taking precedence over the defaults. When the file does
        not set ``github_token``, the ``GITHUB_TOKEN`` environment
        variable is used.

    Raises:
        ConfigError: If the configuration file is unreadable, not valid
            JSON, not a JSON object, or contains invalid values.
    """
    config_path = _get_config_directory() / CONFIG_FILE_NAME
    config: Dict[str, Any] = dict(DEFAULT_CONFIG)
    config["exclude_patterns"] = list(DEFAULT_CONFIG["exclude_patterns"])

    if config_path.exists():
        try:
            content = config_path.read_text(encoding="utf-8")
            data = json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Failed to read or parse configuration file: %s", exc)
            raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path.name} must contain a JSON object")

        unknown = sorted(set(data) - set(DEFAULT_CONFIG))
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
            data = {key: value for key, value in data.items() if key in DEFAULT_CONFIG}

        _validate(data)
        config.update(data)
        logger.debug("Loaded configuration from: %s", config_path)
    else:
        logger.debug("No configuration file at %s; using defaults", config_path)

    if not config["github_token"]:
        config["github_token"] = os.environ.get(TOKEN_ENV_VAR) or None

    return config
