"""Utils package - configuration, settings and logging helpers."""

from node_cli.utils.config import ConfigManager, NodeDefaults, load_defaults
from node_cli.utils.logger import init_logger, parse_log_filters
from node_cli.utils.settings import NodeSettings

__all__ = [
    "ConfigManager",
    "NodeDefaults",
    "load_defaults",
    "init_logger",
    "parse_log_filters",
    "NodeSettings",
]
