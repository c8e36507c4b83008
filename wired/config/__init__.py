"""
Configuration subsystem for wired.

Modules:
- locator: Find the config file in the XDG and home search paths
- loader: Load, parse and validate wired.toml; embedded default config
- registry: Own the live Config with init/reload lifecycle
- file_watcher: Monitor the config directory for changes
"""

from .locator import ConfigLocator, find_config
from .loader import load_config, load_default_config, parse_config, validate_config
from .registry import ConfigRegistry
from .file_watcher import ConfigChangeEvent, ConfigWatcher, Debouncer, watch

__all__ = [
    "ConfigLocator",
    "find_config",
    "load_config",
    "load_default_config",
    "parse_config",
    "validate_config",
    "ConfigRegistry",
    "ConfigChangeEvent",
    "ConfigWatcher",
    "Debouncer",
    "watch",
]
