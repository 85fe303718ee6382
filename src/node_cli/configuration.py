"""
Configuration contract shared by every subcommand.

Node startup asks "the active command" these questions before any service
is built. Every method may raise a ``NodeCLIError`` subclass describing
invalid, missing or conflicting settings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, Optional

from node_cli.config_types import (
    DatabaseConfig,
    ExecutionStrategies,
    NodeKeyConfig,
    PruningMode,
    Roles,
    TracingReceiver,
    WasmExecutionMethod,
)

if TYPE_CHECKING:
    from node_cli.descriptor import NodeCLI


class CliConfiguration(ABC):
    """Capability set every subcommand must provide."""

    @abstractmethod
    def base_path(self) -> Optional[Path]:
        """Data directory, or ``None`` to use the platform default."""

    @abstractmethod
    def is_dev(self) -> bool:
        """Whether the node runs in development mode."""

    @abstractmethod
    def database_config(
        self, base_path: Path, cache_size: Optional[int]
    ) -> DatabaseConfig:
        """Database location under ``base_path`` with the given cache size (MiB)."""

    @abstractmethod
    def chain_id(self, is_dev: bool) -> str:
        """Identifier of the chain spec to load."""

    @abstractmethod
    def init(self, cli: "NodeCLI") -> None:
        """
        One-time process setup (logging, crash reporting).

        Called at most once per process by the driver.
        """

    @abstractmethod
    def pruning(self, is_dev: bool, roles: Roles) -> PruningMode:
        """State pruning mode for the given role set."""

    @abstractmethod
    def tracing_receiver(self) -> TracingReceiver:
        ...

    @abstractmethod
    def tracing_targets(self) -> Optional[str]:
        ...

    @abstractmethod
    def state_cache_size(self) -> int:
        """State cache size in bytes."""

    @abstractmethod
    def wasm_method(self) -> WasmExecutionMethod:
        ...

    @abstractmethod
    def execution_strategies(self, is_dev: bool) -> ExecutionStrategies:
        ...

    @abstractmethod
    def database_cache_size(self) -> Optional[int]:
        """Database cache size in MiB, if configured."""

    @abstractmethod
    def node_key(self, net_config_dir: Path) -> NodeKeyConfig:
        """Network identity key, defaulting to a file in ``net_config_dir``."""


def contract_methods() -> FrozenSet[str]:
    """Names of every method in the configuration contract."""
    return frozenset(CliConfiguration.__abstractmethods__)
