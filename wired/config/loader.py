"""
Configuration loader for wired.toml.

Reads the document, builds the pydantic schema, and applies the semantic
checks the schema cannot express. Also loads the default config shipped
inside the package.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..errors import (
    ConfigIoError,
    ConfigLoadError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    EmbeddedConfigError,
)
from ..models import Config, NotificationBlock

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RESOURCE = "wired.toml"
EMBEDDED_SOURCE = "<embedded default>"


def _format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into ``field.path: message`` lines."""
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        problems.append(f"{location}: {err['msg']}")
    return "; ".join(problems)


def validate_config(config: Config, source: str = "") -> Config:
    """
    Apply semantic checks to a constructed config.

    Args:
        config: Config built from a document
        source: Where the document came from, for messages

    Returns:
        The same config when valid

    Raises:
        ConfigValidationError: If the root layout block is not a NotificationBlock
    """
    if not isinstance(config.layout.params, NotificationBlock):
        raise ConfigValidationError("root layout must be NotificationBlock", file_path=source or None)

    duplicates = config.shortcuts.duplicate_codes()
    if duplicates:
        # Accepted on purpose; dispatch order decides which action wins
        logger.warning(f"Shortcut codes bound to more than one action in {source or 'config'}: {duplicates}")

    return config


def build_config(data: Dict[str, Any], source: str = "") -> Config:
    """
    Rebuild a config from an edited document tree.

    Args:
        data: Document as plain dicts and lists (e.g. from ``Config.model_dump()``)
        source: Who produced the edit, for messages

    Returns:
        Validated Config

    Raises:
        ConfigValidationError: If the tree no longer matches the schema or fails semantic checks
    """
    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(_format_validation_error(e), file_path=source or None) from e

    return validate_config(config, source)


def parse_config(text: str, source: str = "<string>") -> Config:
    """
    Parse and validate a config document held in memory.

    Args:
        text: TOML document
        source: Where the text came from, for messages

    Returns:
        Validated Config

    Raises:
        ConfigParseError: If TOML syntax is invalid or the schema does not match
        ConfigValidationError: If semantic checks fail
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(source, str(e)) from e

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(source, _format_validation_error(e)) from e

    return validate_config(config, source)


def load_config(path: Union[str, Path]) -> Config:
    """
    Load a config file.

    Args:
        path: Path to wired.toml

    Returns:
        Validated Config

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigIoError: If the file cannot be read
        ConfigParseError: If the document is malformed
        ConfigValidationError: If the document is semantically invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigNotFoundError(str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIoError(str(path), str(e)) from e

    config = parse_config(text, source=str(path))
    logger.debug(f"Loaded config from {path}")
    return config


def read_default_config_text() -> str:
    """Return the default document shipped with the package."""
    return resources.files(__package__).joinpath(DEFAULT_CONFIG_RESOURCE).read_text(encoding="utf-8")


def load_default_config() -> Config:
    """
    Build a Config from the embedded default document.

    Raises:
        EmbeddedConfigError: If the packaged default is missing or invalid
    """
    try:
        return parse_config(read_default_config_text(), source=EMBEDDED_SOURCE)
    except (OSError, ConfigLoadError) as e:
        raise EmbeddedConfigError(str(e)) from e
