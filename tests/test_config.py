"""Tests for configuration file support."""

import warnings

import pytest

from jj_cli.config import (
    Config,
    ConfigError,
    LoggingConfig,
    UiConfig,
    _find_repo_config,
    _load_toml_file,
)


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_ui_config_defaults(self):
        """UiConfig defaults to automatic color."""
        config = UiConfig()
        assert config.color == "auto"
        assert config.verbose is False

    def test_logging_config_defaults(self):
        """Logging defaults to WARNING."""
        assert LoggingConfig().level == "WARNING"

    def test_config_defaults(self):
        """A fresh Config uses defaults everywhere."""
        config = Config()
        assert isinstance(config.ui, UiConfig)
        assert isinstance(config.logging, LoggingConfig)
        assert config.get_source("ui.color") == "default"


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_repo_config_in_current_dir(self, tmp_path):
        """The repository config is found in the working directory."""
        config_file = tmp_path / ".jj-cli.toml"
        config_file.write_text("[ui]\ncolor = 'never'\n")

        assert _find_repo_config(tmp_path) == config_file

    def test_find_repo_config_in_parent(self, tmp_path):
        """The search walks up to parent directories."""
        config_file = tmp_path / ".jj-cli.toml"
        config_file.write_text("[ui]\ncolor = 'never'\n")
        subdir = tmp_path / "src" / "lib"
        subdir.mkdir(parents=True)

        assert _find_repo_config(subdir) == config_file

    def test_search_stops_at_repo_root(self, tmp_path):
        """The search does not leave the repository."""
        (tmp_path / ".jj-cli.toml").write_text("[ui]\ncolor = 'never'\n")
        repo = tmp_path / "repo"
        (repo / ".jj").mkdir(parents=True)
        subdir = repo / "src"
        subdir.mkdir()

        assert _find_repo_config(subdir) is None

    def test_config_at_repo_root(self, tmp_path):
        """A config file at the repository root is used."""
        (tmp_path / ".git").mkdir()
        config_file = tmp_path / ".jj-cli.toml"
        config_file.write_text("")

        assert _find_repo_config(tmp_path) == config_file


class TestConfigLoading:
    """Test loading and merging config files."""

    def test_load_defaults_without_files(self, tmp_path):
        """Without config files the defaults apply."""
        (tmp_path / ".jj").mkdir()
        config = Config.load(tmp_path, user_config=tmp_path / "missing.toml")
        assert config.ui.color == "auto"
        assert config.logging.level == "WARNING"

    def test_load_user_config(self, tmp_path):
        """The user config file is read."""
        (tmp_path / ".jj").mkdir()
        user = tmp_path / "user.toml"
        user.write_text("[ui]\ncolor = 'always'\nverbose = true\n")

        config = Config.load(tmp_path, user_config=user)
        assert config.ui.color == "always"
        assert config.ui.verbose is True
        assert config.get_source("ui.color") == str(user)

    def test_repo_config_overrides_user_config(self, tmp_path):
        """Repository settings win over user settings."""
        repo = tmp_path / "repo"
        (repo / ".jj").mkdir(parents=True)
        (repo / ".jj-cli.toml").write_text("[ui]\ncolor = 'never'\n")
        user = tmp_path / "user.toml"
        user.write_text("[ui]\ncolor = 'always'\nverbose = true\n\n[logging]\nlevel = 'info'\n")

        config = Config.load(repo, user_config=user)
        assert config.ui.color == "never"
        assert config.ui.verbose is True
        assert config.logging.level == "INFO"
        assert config.get_source("ui.color") == str(repo / ".jj-cli.toml")
        assert config.get_source("ui.verbose") == str(user)

    def test_invalid_toml(self, tmp_path):
        """Malformed TOML is a ConfigError."""
        bad = tmp_path / "user.toml"
        bad.write_text("[ui\ncolor = ")

        with pytest.raises(ConfigError) as exc_info:
            _load_toml_file(bad)

        assert "Invalid TOML" in exc_info.value.message
        assert exc_info.value.context == {"file": str(bad)}

    def test_invalid_color(self, tmp_path):
        """Unknown color choices are rejected."""
        (tmp_path / ".jj").mkdir()
        (tmp_path / ".jj-cli.toml").write_text("[ui]\ncolor = 'sometimes'\n")

        with pytest.raises(ConfigError) as exc_info:
            Config.load(tmp_path, user_config=tmp_path / "missing.toml")

        assert "ui.color" in exc_info.value.message

    def test_invalid_log_level(self, tmp_path):
        """Unknown log levels are rejected."""
        (tmp_path / ".jj").mkdir()
        (tmp_path / ".jj-cli.toml").write_text("[logging]\nlevel = 'loud'\n")

        with pytest.raises(ConfigError):
            Config.load(tmp_path, user_config=tmp_path / "missing.toml")

    def test_unknown_keys_warn(self, tmp_path):
        """Unknown keys produce a warning."""
        (tmp_path / ".jj").mkdir()
        (tmp_path / ".jj-cli.toml").write_text(
            "[ui]\ncolour = 'never'\n\n[snapshot]\nmax-size = 1\n"
        )

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            Config.load(tmp_path, user_config=tmp_path / "missing.toml")

        messages = [str(w.message) for w in caught]
        assert any("'snapshot'" in m for m in messages)
        assert any("'ui.colour'" in m for m in messages)
