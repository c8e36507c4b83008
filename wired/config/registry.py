"""
Owner of the live Config.

A ConfigRegistry is created by the daemon and handed to every consumer.
Readers call get() without locking; the reload path and get_mut() are the
only writers and they replace the whole Config under a lock, so a reader
always sees either the old tree or the new one.
"""

import logging
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Union

from ..errors import ConfigLoadError, ErrorCode, RegistryStateError
from ..models import Config
from .loader import build_config, load_config, load_default_config
from .locator import ConfigLocator

logger = logging.getLogger(__name__)

SOURCE_FILE = "file"
SOURCE_DEFAULT = "default"


class ConfigRegistry:
    """Holds exactly one Config between init() and teardown()."""

    def __init__(
        self,
        locator: Optional[ConfigLocator] = None,
        loader: Callable[[Path], Config] = load_config,
        default_loader: Callable[[], Config] = load_default_config
    ):
        """
        Initialize an empty registry.

        Args:
            locator: Finds the config file (defaults to the standard search order)
            loader: Loads and validates a config file
            default_loader: Builds the embedded default config
        """
        self.locator = locator or ConfigLocator()
        self.loader = loader
        self.default_loader = default_loader

        self._config: Optional[Config] = None
        self._write_lock = threading.Lock()
        self._writer: Optional[int] = None

        self.path: Optional[Path] = None
        self.source: Optional[str] = None
        self.loaded_at: Optional[float] = None
        self.reload_count = 0
        self.failed_reloads = 0
        self.last_error: Optional[ConfigLoadError] = None

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    def _require_initialized(self, operation: str) -> Config:
        config = self._config
        if config is None:
            raise RegistryStateError(
                ErrorCode.REGISTRY_NOT_INITIALIZED,
                f"ConfigRegistry.{operation}() called before init()"
            )
        return config

    @contextmanager
    def _writing(self, operation: str) -> Iterator[None]:
        """Hold the writer lock, failing fast if this thread already holds it."""
        if self._writer == threading.get_ident():
            raise RegistryStateError(
                ErrorCode.REGISTRY_REENTRANT_WRITE,
                f"ConfigRegistry.{operation}() called inside a get_mut() block"
            )
        with self._write_lock:
            self._writer = threading.get_ident()
            try:
                yield
            finally:
                self._writer = None

    def _install(self, config: Config, source: str) -> None:
        self._config = config
        self.source = source
        self.loaded_at = time.time()

    def init(self, path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """
        Install the startup config.

        Looks up the config file (unless ``path`` is given) and loads it. A
        missing or broken file falls back to the embedded default; startup
        never fails because of the user's file.

        Args:
            path: Explicit config file, skipping the search

        Returns:
            The config file path to watch for changes, or None if none was found

        Raises:
            RegistryStateError: If the registry is already initialized
            EmbeddedConfigError: If the embedded default itself is broken
        """
        with self._writing("init"):
            if self._config is not None:
                raise RegistryStateError(
                    ErrorCode.REGISTRY_ALREADY_INITIALIZED,
                    "ConfigRegistry.init() called twice without teardown()"
                )

            found = Path(path) if path is not None else self.locator.find_config()
            if found is None:
                logger.info("Couldn't find a config file, using the default config")
                self._install(self.default_loader(), SOURCE_DEFAULT)
                return None

            self.path = found
            try:
                self._install(self.loader(found), SOURCE_FILE)
                logger.info(f"Loaded config from {found}")
            except ConfigLoadError as e:
                self.last_error = e
                logger.error(f"Found a config but couldn't load it, using the default config for now: {e}")
                self._install(self.default_loader(), SOURCE_DEFAULT)

            # Watch the found file even if it was broken, so fixing it takes effect
            return found

    def get(self) -> Config:
        """
        Return the current config.

        The returned tree is frozen. It stays valid until the next reload
        replaces it; holders of old references see stale values.

        Raises:
            RegistryStateError: If called before init()
        """
        return self._require_initialized("get")

    @contextmanager
    def get_mut(self) -> Iterator[Dict[str, Any]]:
        """
        Edit the current config.

        Yields the config as a plain dict tree; when the block exits cleanly
        the tree is rebuilt into a Config, validated and swapped in. An
        exception inside the block discards the edit. Holds the writer lock
        for the whole block, so keep it short. Calling init(), reload(),
        teardown() or get_mut() from inside the block raises instead of
        deadlocking.

        Raises:
            RegistryStateError: If called before init() or from inside another get_mut() block
            ConfigValidationError: If the edited tree is no longer valid
        """
        with self._writing("get_mut"):
            draft = self._require_initialized("get_mut").model_dump()
            yield draft
            self._config = build_config(draft, source="get_mut")

    def reload(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Try to replace the current config with a freshly loaded one.

        Any load failure is logged and the current config is kept.

        Args:
            path: File to load (defaults to the path found at init)

        Returns:
            True if the config was replaced, False otherwise

        Raises:
            RegistryStateError: If called before init()
        """
        with self._writing("reload"):
            self._require_initialized("reload")

            target = Path(path) if path is not None else self.path
            if target is None:
                logger.warning("Reload requested but no config file is known")
                return False

            try:
                config = self.loader(target)
            except ConfigLoadError as e:
                self.failed_reloads += 1
                self.last_error = e
                logger.error(f"Tried to reload the config but couldn't: {e}")
                return False

            self.path = target
            self._install(config, SOURCE_FILE)
            self.reload_count += 1
            self.last_error = None
            logger.info(f"Reloaded config from {target}")
            return True

    def teardown(self) -> None:
        """Drop the current config and return to the uninitialized state."""
        with self._writing("teardown"):
            self._config = None
            self.path = None
            self.source = None
            self.loaded_at = None
            self.last_error = None

    def status(self) -> Dict[str, Any]:
        """
        Summarize registry state for diagnostics.

        Returns:
            State as dictionary
        """
        return {
            "initialized": self.is_initialized,
            "path": str(self.path) if self.path else None,
            "source": self.source,
            "loaded_at": self.loaded_at,
            "reload_count": self.reload_count,
            "failed_reloads": self.failed_reloads,
            "last_error": self.last_error.to_dict() if self.last_error else None,
        }
