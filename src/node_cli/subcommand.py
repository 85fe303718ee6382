"""
Subcommand selector.

``Subcommand`` holds exactly one concrete command and answers every
configuration contract question by forwarding it, unchanged, to that
command. Callers never need to know which subcommand is active:

    >>> selected = Subcommand(PurgeChainCmd(yes=True))
    >>> selected.kind
    <SubcommandKind.PURGE_CHAIN: 'purge-chain'>
    >>> selected.chain_id(False)      # answered by PurgeChainCmd
    ''

Results and exceptions pass through untouched; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from node_cli.commands import (
    BuildSpecCmd,
    CheckBlockCmd,
    ExportBlocksCmd,
    ImportBlocksCmd,
    PurgeChainCmd,
    RevertCmd,
)
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

if TYPE_CHECKING:
    from node_cli.descriptor import NodeCLI

SubcommandPayload = Union[
    BuildSpecCmd,
    ExportBlocksCmd,
    ImportBlocksCmd,
    CheckBlockCmd,
    RevertCmd,
    PurgeChainCmd,
]


class SubcommandKind(str, Enum):
    """Variant tag; each member carries the command type it wraps."""

    BUILD_SPEC = ("build-spec", BuildSpecCmd)
    EXPORT_BLOCKS = ("export-blocks", ExportBlocksCmd)
    IMPORT_BLOCKS = ("import-blocks", ImportBlocksCmd)
    CHECK_BLOCK = ("check-block", CheckBlockCmd)
    REVERT = ("revert", RevertCmd)
    PURGE_CHAIN = ("purge-chain", PurgeChainCmd)

    def __new__(cls, cli_name: str, command_type: type):
        member = str.__new__(cls, cli_name)
        member._value_ = cli_name
        member.command_type = command_type
        return member

    @classmethod
    def of(cls, command: object) -> "SubcommandKind":
        """Variant holding ``command``; ``TypeError`` for anything else."""
        for kind in cls:
            if isinstance(command, kind.command_type):
                return kind
        raise TypeError(
            f"{type(command).__name__} is not a subcommand; expected one of "
            f"{', '.join(k.command_type.__name__ for k in cls)}"
        )


@dataclass(frozen=True)
class Subcommand(CliConfiguration):
    """All core commands that are provided by default."""

    command: SubcommandPayload
    kind: SubcommandKind = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "kind", SubcommandKind.of(self.command))

    def base_path(self) -> Optional[Path]:
        return self.command.base_path()

    def is_dev(self) -> bool:
        return self.command.is_dev()

    def database_config(
        self, base_path: Path, cache_size: Optional[int]
    ) -> DatabaseConfig:
        return self.command.database_config(base_path, cache_size)

    def chain_id(self, is_dev: bool) -> str:
        return self.command.chain_id(is_dev)

    def init(self, cli: "NodeCLI") -> None:
        return self.command.init(cli)

    def pruning(self, is_dev: bool, roles: Roles) -> PruningMode:
        return self.command.pruning(is_dev, roles)

    def tracing_receiver(self) -> TracingReceiver:
        return self.command.tracing_receiver()

    def tracing_targets(self) -> Optional[str]:
        return self.command.tracing_targets()

    def state_cache_size(self) -> int:
        return self.command.state_cache_size()

    def wasm_method(self) -> WasmExecutionMethod:
        return self.command.wasm_method()

    def execution_strategies(self, is_dev: bool) -> ExecutionStrategies:
        return self.command.execution_strategies(is_dev)

    def database_cache_size(self) -> Optional[int]:
        return self.command.database_cache_size()

    def node_key(self, net_config_dir: Path) -> NodeKeyConfig:
        return self.command.node_key(net_config_dir)
