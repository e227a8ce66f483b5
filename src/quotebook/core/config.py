# ABOUTME: User settings kept between runs, stored as a TOML file.
# ABOUTME: Remembers where the quote store lives after it has been moved.

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from quotebook.db.connection import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

CONFIG_ENVVAR = "QUOTEBOOK_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".quotebook" / "config.toml"


class ConfigError(Exception):
    """Raised when the settings file cannot be read or written."""


@dataclass
class Settings:
    """Settings read from the config file. Unset values fall back to defaults."""

    db_path: Path | None = None


def config_path() -> Path:
    """Location of the settings file: $QUOTEBOOK_CONFIG, else ~/.quotebook/config.toml."""
    value = os.environ.get(CONFIG_ENVVAR)
    return Path(value).expanduser() if value else DEFAULT_CONFIG_PATH


def load_settings(path: Path | None = None) -> Settings:
    """Read the settings file. A missing file gives default settings.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read settings {path}: {exc}") from exc

    store = data.get("store", {})
    if not isinstance(store, dict):
        raise ConfigError(f"Cannot read settings {path}: [store] must be a table")
    db_path = store.get("db_path")
    if db_path is not None and not isinstance(db_path, str):
        raise ConfigError(f"Cannot read settings {path}: store.db_path must be a string")
    return Settings(db_path=Path(db_path).expanduser() if db_path else None)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write the settings file, creating its directory if needed.

    Returns:
        The path written.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path = path or config_path()
    store: dict[str, str] = {}
    if settings.db_path is not None:
        store["db_path"] = str(settings.db_path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as handle:
            tomli_w.dump({"store": store}, handle)
    except OSError as exc:
        raise ConfigError(f"Cannot write settings {path}: {exc}") from exc

    logger.info("Saved settings to %s", path)
    return path


def resolve_db_path(settings: Settings | None = None) -> Path:
    """The quote store named in the settings, or the default location."""
    settings = settings or load_settings()
    return settings.db_path or DEFAULT_DB_PATH
