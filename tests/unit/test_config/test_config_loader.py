"""Tests for config loader."""

from pathlib import Path

import pytest

from fedimigrate.config.loader import CONFIG_ENV_VAR, load_config
from fedimigrate.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    """Create a sample config YAML file."""
    config_content = f"""
storage:
  backend: sqlite
  data_directory: {tmp_path / "data"}
  state_db_name: site.db

migration:
  lock_ttl_seconds: 600
  interval_seconds: 120
  target_version: 0.17.0

templates:
  default_content: "%title%"

logging:
  level: DEBUG
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return config_path


def test_load_config_defaults() -> None:
    """Test load_config returns defaults when no path given."""
    config = load_config(None)
    assert config.storage.backend == "sqlite"
    assert config.migration.lock_ttl_seconds == 1800


def test_load_config_from_yaml(sample_config_yaml: Path, tmp_path: Path) -> None:
    """Test load_config loads from YAML file."""
    config = load_config(sample_config_yaml)
    assert config.storage.db_path == (tmp_path / "data").resolve() / "site.db"
    assert config.migration.lock_ttl_seconds == 600
    assert config.migration.interval_seconds == 120
    assert config.migration.target_version == "0.17.0"
    assert config.templates.default_content == "%title%"
    assert config.logging.level == "DEBUG"


def test_load_config_from_env_var(
    sample_config_yaml: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """FEDIMIGRATE_CONFIG names the file when no path is passed."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(sample_config_yaml))
    config = load_config(None)
    assert config.migration.lock_ttl_seconds == 600


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_load_config_empty_file(tmp_path: Path) -> None:
    """An empty file yields defaults."""
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path).storage.backend == "sqlite"


def test_load_config_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("storage: [unclosed")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(path)


def test_load_config_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        load_config(path)


def test_load_config_validation_error(tmp_path: Path) -> None:
    path = tmp_path / "invalid.yaml"
    path.write_text("migration:\n  target_version: soon\n")
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path)
