"""
Configuration defaults file.

An optional YAML file supplies defaults for any flag. Precedence, highest
first: explicit command-line flag, ``NODE_CLI_*`` environment variable,
defaults file (with the selected ``environments:`` block merged in),
built-in default.

    chain: local
    base_path: ${HOME}/.local/share/node
    log: info,sync=debug
    environments:
      dev:
        dev: true
        pruning: archive
"""

import logging
import os
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import ValidationError, validate

from node_cli.exceptions import ConfigFileError
from node_cli.utils.settings import NodeSettings

logger = logging.getLogger(__name__)

NODE_CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "chain": {"type": "string"},
        "dev": {"type": "boolean"},
        "base_path": {"type": "string"},
        "log": {"type": "string"},
        "pruning": {"type": ["string", "integer"]},
        "unsafe_pruning": {"type": "boolean"},
        "database_cache_size": {"type": "integer", "minimum": 0},
        "state_cache_size": {"type": "integer", "minimum": 0},
        "wasm_method": {"type": "string"},
        "execution": {"type": "string"},
        "tracing_targets": {"type": "string"},
        "tracing_receiver": {"type": "string"},
        "node_key_file": {"type": "string"},
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class NodeDefaults:
    """Defaults applied to flags the user did not pass explicitly."""

    chain: Optional[str] = None
    dev: bool = False
    base_path: Optional[Path] = None
    log: Optional[str] = None
    pruning: Optional[str] = None
    unsafe_pruning: bool = False
    database_cache_size: Optional[int] = None
    state_cache_size: Optional[int] = None
    wasm_method: Optional[str] = None
    execution: Optional[str] = None
    tracing_targets: Optional[str] = None
    tracing_receiver: Optional[str] = None
    node_key_file: Optional[Path] = None


class ConfigManager:
    """Loads and validates the YAML defaults file."""

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.schema = NODE_CONFIG_SCHEMA

    def load_config(self, environment: Optional[str] = None) -> NodeDefaults:
        """Load, apply the environment block and validate."""
        if not self.config_path.exists():
            raise ConfigFileError(f"Configuration file not found: {self.config_path}")

        if not self.config_path.is_file():
            raise ConfigFileError(f"Configuration path is not a file: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                content = self._substitute_env_vars(f.read())
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileError(f"Cannot read {self.config_path}: {e}") from e

        try:
            config_data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigFileError(f"{self.config_path} must contain a mapping")

        environments = config_data.pop("environments", None) or {}
        if environment:
            if environment not in environments:
                raise ConfigFileError(
                    f"Environment '{environment}' not defined in {self.config_path}"
                )
            logger.info("Applying environment override: %s", environment)
            config_data = {**config_data, **(environments[environment] or {})}

        try:
            validate(instance=config_data, schema=self.schema)
        except ValidationError as e:
            raise ConfigFileError(
                f"Configuration validation failed for {self.config_path}: {e.message}"
            ) from e

        return self._to_node_defaults(config_data)

    def _substitute_env_vars(self, content: str) -> str:
        """Substitute environment variables in format ${VAR_NAME}"""
        pattern = re.compile(r"\$\{([^}^{]+)\}")

        def replace_var(match):
            value = os.getenv(match.group(1))
            if value is None:
                # Left as-is; schema validation or resolution reports it
                return match.group(0)
            return value

        return pattern.sub(replace_var, content)

    def _to_node_defaults(self, data: Dict[str, Any]) -> NodeDefaults:
        values = dict(data)
        if "pruning" in values:
            values["pruning"] = str(values["pruning"])
        for key in ("base_path", "node_key_file"):
            if values.get(key) is not None:
                values[key] = Path(values[key])
        return NodeDefaults(**values)


def apply_settings(defaults: NodeDefaults, settings: NodeSettings) -> NodeDefaults:
    """Overlay ``NODE_CLI_*`` environment settings on file defaults."""
    overrides = {
        f.name: getattr(settings, f.name)
        for f in fields(NodeDefaults)
        if getattr(settings, f.name, None) is not None
    }
    return replace(defaults, **overrides)


def load_defaults(
    config_path: Optional[str] = None,
    environment: Optional[str] = None,
    settings: Optional[NodeSettings] = None,
) -> NodeDefaults:
    """
    Build the effective defaults for this invocation.

    Args:
        config_path: Explicit ``--config`` path; falls back to ``NODE_CLI_CONFIG``
        environment: Name of an ``environments:`` block to merge
        settings: Environment settings (read from the process when omitted)
    """
    settings = settings or NodeSettings()
    path = config_path or settings.config

    if path:
        defaults = ConfigManager(path).load_config(environment)
    else:
        if environment:
            raise ConfigFileError("--env requires a configuration file")
        defaults = NodeDefaults()

    return apply_settings(defaults, settings)
