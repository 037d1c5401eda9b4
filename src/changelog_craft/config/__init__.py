"""
Configuration loading for changelog_craft.

Provides a loader for the optional user configuration file. See
:mod:`changelog_craft.config.loader` for implementation details.
"""

from .loader import DEFAULT_CONFIG, ConfigError, load_config  # noqa: F401
