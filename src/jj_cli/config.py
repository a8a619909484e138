"""
Configuration file support for jj-cli.

Provides hierarchical configuration loading from:
1. Repository config: .jj-cli.toml in the repository root (or any parent)
2. User config: ~/.config/jj-cli/config.toml

Command-line flags override config file values, and repository config
overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jj_cli.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in repository directories
CONFIG_FILENAMES = [".jj-cli.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "jj-cli" / "config.toml"

# Directories that mark a repository root
REPO_MARKERS = (".jj", ".git")

# All known config keys for validation
KNOWN_KEYS = {
    "ui": {"color", "verbose"},
    "logging": {"level"},
}

COLOR_VALUES = {"auto", "always", "never"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class UiConfig:
    """Terminal output options."""

    color: str = "auto"
    verbose: bool = False


@dataclass
class LoggingConfig:
    """Diagnostic logging options."""

    level: str = "WARNING"


@dataclass
class Config:
    """Merged configuration from all sources."""

    ui: UiConfig = field(default_factory=UiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None, user_config: Path | None = None) -> "Config":
        """
        Load configuration with precedence: repository > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)
            user_config: User config path (default: ~/.config/jj-cli/config.toml)

        Returns:
            Merged configuration object

        Raises:
            ConfigError: If a config file is unreadable or has invalid values
        """
        if start_dir is None:
            start_dir = Path.cwd()
        if user_config is None:
            user_config = USER_CONFIG_PATH

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if user_config.is_file():
            user_data = _load_toml_file(user_config)
            _merge_config(config, user_data, str(user_config), sources)

        # Load repository config (higher precedence)
        repo_config = _find_repo_config(start_dir)
        if repo_config:
            repo_data = _load_toml_file(repo_config)
            _merge_config(config, repo_data, str(repo_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


def _find_repo_config(start_dir: Path) -> Path | None:
    """
    Find repository config by walking up the directory tree.

    Stops at a repository root (.jj or .git) or the filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        if any((current / marker).exists() for marker in REPO_MARKERS):
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """Merge loaded config data into a Config object."""
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "ui" in data:
        ui_data = data["ui"]
        _warn_unknown_keys(ui_data, KNOWN_KEYS["ui"], "ui", source)

        if "color" in ui_data:
            color = ui_data["color"]
            if color not in COLOR_VALUES:
                raise ConfigError(
                    f"Invalid value for ui.color: {color!r}",
                    context={"file": source},
                    suggestions=[f"Use one of: {', '.join(sorted(COLOR_VALUES))}"],
                )
            config.ui.color = color
            sources["ui.color"] = source
        if "verbose" in ui_data:
            config.ui.verbose = bool(ui_data["verbose"])
            sources["ui.verbose"] = source

    if "logging" in data:
        logging_data = data["logging"]
        _warn_unknown_keys(logging_data, KNOWN_KEYS["logging"], "logging", source)

        if "level" in logging_data:
            level = str(logging_data["level"]).upper()
            if level not in LOG_LEVELS:
                raise ConfigError(
                    f"Invalid value for logging.level: {logging_data['level']!r}",
                    context={"file": source},
                    suggestions=[f"Use one of: {', '.join(sorted(LOG_LEVELS))}"],
                )
            config.logging.level = level
            sources["logging.level"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)
