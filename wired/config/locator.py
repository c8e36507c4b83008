"""
Config file discovery.

Probes, in order:
1. XDG config dirs honoring $XDG_CONFIG_HOME / $XDG_CONFIG_DIRS
2. The same XDG config dirs without the app subdirectory (wired.toml directly)
3. $HOME/.config/wired/wired.toml
4. $HOME/.wired.toml
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

APP_NAME = "wired"
CONFIG_FILENAME = "wired.toml"
DEFAULT_CONFIG_DIRS = ("/etc/xdg",)


class ConfigLocator:
    """Finds the user's config file. Pure filesystem probing, no side effects."""

    def __init__(
        self,
        app_name: str = APP_NAME,
        filename: str = CONFIG_FILENAME,
        environ: Optional[Mapping[str, str]] = None,
        default_config_dirs: Sequence[str] = DEFAULT_CONFIG_DIRS
    ):
        """
        Initialize locator.

        Args:
            app_name: Per-application subdirectory name
            filename: Config file name
            environ: Environment to read (defaults to os.environ at lookup time)
            default_config_dirs: System config dirs used when $XDG_CONFIG_DIRS is unset
        """
        self.app_name = app_name
        self.filename = filename
        self.environ = environ
        self.default_config_dirs = tuple(default_config_dirs)

    def _env(self) -> Mapping[str, str]:
        return os.environ if self.environ is None else self.environ

    def _home(self) -> Optional[Path]:
        home = self._env().get("HOME")
        return Path(home) if home else None

    def _xdg_dirs(self) -> List[Path]:
        """Base directories with environment overrides applied."""
        env = self._env()
        home = self._home()

        dirs: List[Path] = []
        config_home = env.get("XDG_CONFIG_HOME")
        if config_home and os.path.isabs(config_home):
            dirs.append(Path(config_home))
        elif home:
            dirs.append(home / ".config")

        config_dirs = env.get("XDG_CONFIG_DIRS") or ":".join(self.default_config_dirs)
        # Relative entries are invalid per the XDG base directory spec
        dirs.extend(Path(d) for d in config_dirs.split(":") if d and os.path.isabs(d))
        return dirs

    def candidates(self) -> List[Path]:
        """
        List every path probed, in search order, without duplicates.

        Returns:
            Candidate config file paths (may be empty)
        """
        ordered: List[Path] = []
        base_dirs = self._xdg_dirs()
        ordered.extend(d / self.app_name / self.filename for d in base_dirs)
        ordered.extend(d / self.filename for d in base_dirs)

        home = self._home()
        if home:
            ordered.append(home / ".config" / self.app_name / self.filename)
            ordered.append(home / f".{self.filename}")

        seen = set()
        unique = []
        for path in ordered:
            if path not in seen:
                seen.add(path)
                unique.append(path)
        return unique

    def find_config(self) -> Optional[Path]:
        """
        Return the first existing config file.

        Returns:
            Path to the config file, or None if none exists
        """
        for path in self.candidates():
            if path.is_file():
                logger.debug(f"Found config at {path}")
                return path

        logger.debug(f"No {self.filename} found in search paths")
        return None


def find_config(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Locate the wired config file using the standard search order."""
    return ConfigLocator(environ=environ).find_config()
