"""
Startup driver.

Turns "the active command" into a fully resolved ``NodeConfiguration`` by
asking the configuration contract, in order, every question the services
need answered. The driver owns the one-time ``init`` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional

import typer

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
from node_cli.services.chain_spec import ChainSpec

if TYPE_CHECKING:
    from node_cli.descriptor import NodeCLI

logger = logging.getLogger(__name__)

CHAINS_DIR = "chains"
NETWORK_DIR = "network"

_process_initialized = False


@dataclass(frozen=True)
class NodeConfiguration:
    """Everything service construction needs, resolved from one command."""

    impl_name: str
    impl_version: str
    chain_spec: ChainSpec
    is_dev: bool
    roles: Roles
    base_path: Path
    config_dir: Path
    database: DatabaseConfig
    pruning: PruningMode
    tracing_receiver: TracingReceiver
    tracing_targets: Optional[str]
    state_cache_size: int
    wasm_method: WasmExecutionMethod
    execution_strategies: ExecutionStrategies
    node_key: NodeKeyConfig


def default_base_path(cli: NodeCLI) -> Path:
    """Platform data directory for the executable."""
    return Path(typer.get_app_dir(cli.executable_name))


class Runner:
    """
    Drives configuration resolution for a single command.

    Example:
        >>> runner = Runner(NodeCLI(), Subcommand(PurgeChainCmd()))
        >>> config = runner.create_configuration()
    """

    def __init__(self, cli: NodeCLI, command: CliConfiguration):
        self.cli = cli
        self.command = command
        self._initialized = False

    def _ensure_init(self) -> None:
        global _process_initialized

        if self._initialized:
            return
        self._initialized = True
        if _process_initialized:
            logger.debug("Process already initialised; skipping init")
            return
        self.command.init(self.cli)
        _process_initialized = True

    def create_configuration(self, roles: Optional[Roles] = None) -> NodeConfiguration:
        """
        Resolve the node configuration.

        Args:
            roles: Node role set; defaults to authority in dev mode, full otherwise

        Raises:
            NodeCLIError: Whatever the command's resolution logic raises
        """
        self._ensure_init()
        command = self.command

        is_dev = command.is_dev()
        if roles is None:
            roles = Roles.AUTHORITY if is_dev else Roles.FULL

        chain_id = command.chain_id(is_dev)
        chain_spec = self.cli.load_spec(chain_id)

        base_path = command.base_path() or default_base_path(self.cli)
        config_dir = base_path / CHAINS_DIR / chain_spec.id
        net_config_dir = config_dir / NETWORK_DIR

        configuration = NodeConfiguration(
            impl_name=self.cli.impl_name,
            impl_version=self.cli.impl_version,
            chain_spec=chain_spec,
            is_dev=is_dev,
            roles=roles,
            base_path=base_path,
            config_dir=config_dir,
            database=command.database_config(config_dir, command.database_cache_size()),
            pruning=command.pruning(is_dev, roles),
            tracing_receiver=command.tracing_receiver(),
            tracing_targets=command.tracing_targets(),
            state_cache_size=command.state_cache_size(),
            wasm_method=command.wasm_method(),
            execution_strategies=command.execution_strategies(is_dev),
            node_key=command.node_key(net_config_dir),
        )

        logger.info("📋 Chain specification: %s", chain_spec.name)
        logger.info("💾 Database: %s", configuration.database.path)
        return configuration

    def run(
        self,
        handler: Callable[[CliConfiguration, NodeConfiguration], Any],
        roles: Optional[Roles] = None,
    ) -> Any:
        """Resolve the configuration and hand it to ``handler`` with the command."""
        configuration = self.create_configuration(roles)
        return handler(self.command, configuration)


def reset_process_state() -> None:
    """Forget that ``init`` ran; used by tests that drive several runners."""
    global _process_initialized
    _process_initialized = False
