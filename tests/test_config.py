"""
Unit tests for configuration management
"""

from pathlib import Path

import pytest
import yaml

from node_cli.exceptions import ConfigFileError
from node_cli.utils.config import ConfigManager, NodeDefaults, load_defaults
from node_cli.utils.settings import NodeSettings


def _write_config(path: Path, data) -> str:
    with open(path, "w") as f:
        yaml.dump(data, f)
    return str(path)


def test_load_basic_config(tmp_path):
    """Test loading basic configuration"""

    config_path = _write_config(
        tmp_path / "node.yaml",
        {"chain": "dev", "base_path": "/srv/node", "pruning": 1000, "database_cache_size": 64},
    )

    defaults = ConfigManager(config_path).load_config()

    assert defaults.chain == "dev"
    assert defaults.base_path == Path("/srv/node")
    # Integer pruning is carried as text, like the flag
    assert defaults.pruning == "1000"
    assert defaults.database_cache_size == 64
    assert defaults.dev is False


def test_environment_override(tmp_path):
    """Test environment-specific configuration overrides"""

    config_path = _write_config(
        tmp_path / "node.yaml",
        {
            "chain": "local",
            "log": "info",
            "environments": {"dev": {"dev": True, "log": "debug"}},
        },
    )

    defaults = ConfigManager(config_path).load_config("dev")

    assert defaults.chain == "local"
    assert defaults.dev is True
    assert defaults.log == "debug"


def test_unknown_environment(tmp_path):
    config_path = _write_config(tmp_path / "node.yaml", {"chain": "local"})

    with pytest.raises(ConfigFileError, match="staging"):
        ConfigManager(config_path).load_config("staging")


def test_env_var_substitution(tmp_path, monkeypatch):
    """Test environment variable substitution"""

    monkeypatch.setenv("NODE_TEST_BASE", "/data/node")
    config_path = tmp_path / "node.yaml"
    config_path.write_text("base_path: ${NODE_TEST_BASE}/chain\n")

    defaults = ConfigManager(str(config_path)).load_config()

    assert defaults.base_path == Path("/data/node/chain")


def test_schema_violation(tmp_path):
    config_path = _write_config(tmp_path / "node.yaml", {"chain": "dev", "colour": "blue"})

    with pytest.raises(ConfigFileError, match="validation failed"):
        ConfigManager(config_path).load_config()


def test_negative_cache_rejected(tmp_path):
    config_path = _write_config(tmp_path / "node.yaml", {"database_cache_size": -1})

    with pytest.raises(ConfigFileError):
        ConfigManager(config_path).load_config()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigFileError, match="not found"):
        ConfigManager(str(tmp_path / "absent.yaml")).load_config()


def test_directory_rejected(tmp_path):
    with pytest.raises(ConfigFileError, match="not a file"):
        ConfigManager(str(tmp_path)).load_config()


def test_not_utf8(tmp_path):
    config_path = tmp_path / "node.yaml"
    config_path.write_bytes(b"chain: \xff\n")

    with pytest.raises(ConfigFileError, match="Cannot read"):
        ConfigManager(str(config_path)).load_config()


def test_invalid_yaml(tmp_path):
    config_path = tmp_path / "node.yaml"
    config_path.write_text("chain: [unclosed\n")

    with pytest.raises(ConfigFileError, match="Invalid YAML"):
        ConfigManager(str(config_path)).load_config()


def test_non_mapping_rejected(tmp_path):
    config_path = tmp_path / "node.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigFileError, match="mapping"):
        ConfigManager(str(config_path)).load_config()


class TestLoadDefaults:
    """Tests for load_defaults() precedence handling."""

    def test_no_file(self):
        assert load_defaults(settings=NodeSettings()) == NodeDefaults()

    def test_settings_override_file(self, tmp_path):
        config_path = _write_config(tmp_path / "node.yaml", {"log": "info", "chain": "dev"})

        defaults = load_defaults(config_path, settings=NodeSettings(log="debug"))

        assert defaults.log == "debug"
        assert defaults.chain == "dev"

    def test_config_path_from_settings(self, tmp_path):
        config_path = _write_config(tmp_path / "node.yaml", {"chain": "dev"})

        defaults = load_defaults(settings=NodeSettings(config=config_path))

        assert defaults.chain == "dev"

    def test_env_var_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("NODE_CLI_BASE_PATH", str(tmp_path))

        defaults = load_defaults()

        assert defaults.base_path == tmp_path

    def test_environment_requires_file(self):
        with pytest.raises(ConfigFileError, match="--env"):
            load_defaults(environment="dev", settings=NodeSettings())

    def test_empty_setting_is_unset(self):
        assert NodeSettings(log="  ").log is None

    def test_empty_base_path_env_is_unset(self, monkeypatch):
        monkeypatch.setenv("NODE_CLI_BASE_PATH", "")

        assert NodeSettings().base_path is None
        assert load_defaults().base_path is None
