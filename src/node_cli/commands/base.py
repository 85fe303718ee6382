"""
Default configuration resolution for concrete commands.

Concrete commands only declare which parameter groups they carry by
overriding the ``*_params`` hooks; every contract method is answered from
those groups, falling back to built-in defaults when a group is absent.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from node_cli.config_types import (
    DatabaseConfig,
    ExecutionStrategies,
    NodeKeyConfig,
    PruningMode,
    Roles,
    TracingReceiver,
    WasmExecutionMethod,
)
from node_cli.configuration import CliConfiguration
from node_cli.exceptions import InputError, InvalidBasePathError
from node_cli.params import (
    DatabaseParams,
    ImportParams,
    NodeKeyParams,
    PruningParams,
    SharedParams,
)
from node_cli.utils.logger import init_logger, install_crash_handler

if TYPE_CHECKING:
    from node_cli.descriptor import NodeCLI

logger = logging.getLogger(__name__)

DATABASE_DIR = "db"


class CommandConfiguration(CliConfiguration):
    """Base class of every subcommand payload."""

    @abstractmethod
    def shared_params(self) -> SharedParams:
        ...

    def import_params(self) -> Optional[ImportParams]:
        return None

    def pruning_params(self) -> Optional[PruningParams]:
        return None

    def database_params(self) -> Optional[DatabaseParams]:
        return None

    def node_key_params(self) -> Optional[NodeKeyParams]:
        return None

    # Contract

    def base_path(self) -> Optional[Path]:
        raw = self.shared_params().base_path
        if raw is None:
            return None
        path = Path(raw).expanduser()
        if path.exists() and not path.is_dir():
            raise InvalidBasePathError(path, "exists and is not a directory")
        return path

    def is_dev(self) -> bool:
        return self.shared_params().dev

    def database_config(
        self, base_path: Path, cache_size: Optional[int]
    ) -> DatabaseConfig:
        if cache_size is not None and cache_size < 0:
            raise InputError(f"Invalid database cache size: {cache_size} MiB")
        return DatabaseConfig(path=Path(base_path) / DATABASE_DIR, cache_size=cache_size)

    def chain_id(self, is_dev: bool) -> str:
        return self.shared_params().chain_id(is_dev)

    def init(self, cli: "NodeCLI") -> None:
        install_crash_handler(cli.support_url, cli.impl_version)
        init_logger(self.shared_params().log)

        logger.info("%s", cli.impl_name)
        logger.info("✌️  version %s", cli.impl_version)
        logger.info(
            "❤️  by %s, %s-%s",
            cli.author,
            cli.copyright_start_year,
            datetime.now().year,
        )

    def pruning(self, is_dev: bool, roles: Roles) -> PruningMode:
        params = self.pruning_params()
        if params is None:
            import_params = self.import_params()
            params = (
                import_params.pruning_params
                if import_params is not None
                else PruningParams()
            )
        return params.pruning_mode(is_dev, roles)

    def tracing_receiver(self) -> TracingReceiver:
        return self._import_params().tracing_receiver_kind()

    def tracing_targets(self) -> Optional[str]:
        return self._import_params().tracing_target_filter()

    def state_cache_size(self) -> int:
        return self._import_params().state_cache_bytes()

    def wasm_method(self) -> WasmExecutionMethod:
        return self._import_params().wasm_execution_method()

    def execution_strategies(self, is_dev: bool) -> ExecutionStrategies:
        return self._import_params().execution_strategies.strategies(is_dev)

    def database_cache_size(self) -> Optional[int]:
        params = self.database_params()
        if params is None:
            import_params = self.import_params()
            if import_params is None:
                return None
            params = import_params.database_params
        return params.cache_size()

    def node_key(self, net_config_dir: Path) -> NodeKeyConfig:
        params = self.node_key_params() or NodeKeyParams()
        return params.node_key_config(net_config_dir)

    def _import_params(self) -> ImportParams:
        return self.import_params() or ImportParams()
