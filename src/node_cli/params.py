"""
Parameter groups shared between subcommands.

Each group is a frozen dataclass holding raw command-line values and knows
how to turn them into a service configuration value. Parsing happens at
resolution time so that config-file values and flags go through the same
validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from node_cli.config_types import (
    DEFAULT_KEEP_BLOCKS,
    ExecutionStrategies,
    ExecutionStrategy,
    NodeKeyConfig,
    NodeKeyType,
    PruningMode,
    Roles,
    TracingReceiver,
    WasmExecutionMethod,
)
from node_cli.exceptions import InputError, InvalidNodeKeyError
from node_cli.utils.logger import LOG_LEVELS

logger = logging.getLogger(__name__)

DEFAULT_STATE_CACHE_SIZE = 67_108_864  # 64 MiB
NODE_KEY_ED25519_FILE = "secret_ed25519"
NODE_KEY_LENGTH = 32

DEFAULT_EXECUTION_SYNCING = ExecutionStrategy.NATIVE_ELSE_WASM
DEFAULT_EXECUTION_IMPORT_BLOCK = ExecutionStrategy.NATIVE_ELSE_WASM
DEFAULT_EXECUTION_BLOCK_CONSTRUCTION = ExecutionStrategy.WASM
DEFAULT_EXECUTION_OFFCHAIN_WORKER = ExecutionStrategy.NATIVE
DEFAULT_EXECUTION_OTHER = ExecutionStrategy.NATIVE


@dataclass(frozen=True)
class SharedParams:
    """Parameters every subcommand accepts."""

    chain: Optional[str] = None
    dev: bool = False
    base_path: Optional[Path] = None
    log: Optional[str] = None

    def chain_id(self, is_dev: bool) -> str:
        if self.chain is None:
            return "dev" if is_dev else ""
        if not self.chain.strip():
            raise InputError("Chain specification must not be empty")
        return self.chain


@dataclass(frozen=True)
class PruningParams:
    """State pruning flags."""

    pruning: Optional[str] = None
    unsafe_pruning: bool = False

    def pruning_mode(self, is_dev: bool, roles: Roles) -> PruningMode:
        # Authorities and dev nodes keep the full state unless told otherwise
        if self.pruning is None:
            if is_dev or roles.is_authority():
                return PruningMode.archive_all()
            return PruningMode.keep(DEFAULT_KEEP_BLOCKS)

        if self.pruning.strip().lower() == "archive":
            return PruningMode.archive_all()

        if roles.is_authority() and not (self.unsafe_pruning or is_dev):
            raise InputError(
                "Validators should run with state pruning disabled (i.e. archive). "
                "You can ignore this check with `--unsafe-pruning`."
            )

        try:
            blocks = int(self.pruning)
        except ValueError:
            raise InputError("Invalid pruning mode specified") from None
        if blocks <= 0:
            raise InputError("Invalid pruning mode specified")
        return PruningMode.keep(blocks)


@dataclass(frozen=True)
class DatabaseParams:
    """Database cache flags."""

    database_cache_size: Optional[int] = None

    def cache_size(self) -> Optional[int]:
        if self.database_cache_size is not None and self.database_cache_size < 0:
            raise InputError(
                f"Invalid database cache size: {self.database_cache_size} MiB"
            )
        return self.database_cache_size


@dataclass(frozen=True)
class ExecutionStrategiesParams:
    """Per-context runtime execution strategies; ``execution`` overrides all."""

    execution_syncing: str = DEFAULT_EXECUTION_SYNCING.value
    execution_import_block: str = DEFAULT_EXECUTION_IMPORT_BLOCK.value
    execution_block_construction: str = DEFAULT_EXECUTION_BLOCK_CONSTRUCTION.value
    execution_offchain_worker: str = DEFAULT_EXECUTION_OFFCHAIN_WORKER.value
    execution_other: str = DEFAULT_EXECUTION_OTHER.value
    execution: Optional[str] = None

    def strategies(self, is_dev: bool) -> ExecutionStrategies:
        override = (
            ExecutionStrategy.parse(self.execution)
            if self.execution is not None
            else None
        )

        def exec_all_or(raw: str, default: ExecutionStrategy) -> ExecutionStrategy:
            if override is not None:
                return override
            strategy = ExecutionStrategy.parse(raw)
            if is_dev and strategy == default:
                return ExecutionStrategy.NATIVE
            return strategy

        return ExecutionStrategies(
            syncing=exec_all_or(self.execution_syncing, DEFAULT_EXECUTION_SYNCING),
            importing=exec_all_or(
                self.execution_import_block, DEFAULT_EXECUTION_IMPORT_BLOCK
            ),
            block_construction=exec_all_or(
                self.execution_block_construction,
                DEFAULT_EXECUTION_BLOCK_CONSTRUCTION,
            ),
            offchain_worker=exec_all_or(
                self.execution_offchain_worker, DEFAULT_EXECUTION_OFFCHAIN_WORKER
            ),
            other=exec_all_or(self.execution_other, DEFAULT_EXECUTION_OTHER),
        )


@dataclass(frozen=True)
class ImportParams:
    """Parameters for commands that import or execute blocks."""

    pruning_params: PruningParams = field(default_factory=PruningParams)
    database_params: DatabaseParams = field(default_factory=DatabaseParams)
    wasm_method: str = WasmExecutionMethod.INTERPRETED.value
    execution_strategies: ExecutionStrategiesParams = field(
        default_factory=ExecutionStrategiesParams
    )
    state_cache_size: int = DEFAULT_STATE_CACHE_SIZE
    tracing_targets: Optional[str] = None
    tracing_receiver: str = TracingReceiver.LOG.value

    def wasm_execution_method(self) -> WasmExecutionMethod:
        return WasmExecutionMethod.parse(self.wasm_method)

    def tracing_receiver_kind(self) -> TracingReceiver:
        return TracingReceiver.parse(self.tracing_receiver)

    def state_cache_bytes(self) -> int:
        if self.state_cache_size < 0:
            raise InputError(f"Invalid state cache size: {self.state_cache_size}")
        return self.state_cache_size

    def tracing_target_filter(self) -> Optional[str]:
        if self.tracing_targets is None:
            return None
        validate_tracing_targets(self.tracing_targets)
        return self.tracing_targets


def validate_tracing_targets(targets: str) -> None:
    """Check a ``target[=level],...`` tracing filter."""
    for entry in targets.split(","):
        name, sep, level = entry.partition("=")
        if not name.strip():
            raise InputError(f"Invalid tracing target filter '{targets}'")
        if sep and level.strip().lower() not in LOG_LEVELS:
            raise InputError(
                f"Invalid tracing level '{level}' in filter '{targets}'"
            )


@dataclass(frozen=True)
class NodeKeyParams:
    """Network identity key flags."""

    node_key: Optional[str] = None
    node_key_type: str = NodeKeyType.ED25519.value
    node_key_file: Optional[Path] = None

    def node_key_config(self, net_config_dir: Path) -> NodeKeyConfig:
        key_type = NodeKeyType.parse(self.node_key_type)

        if self.node_key is not None:
            return NodeKeyConfig(key_type=key_type, secret=_parse_secret(self.node_key))

        secret_file = self.node_key_file or Path(net_config_dir) / NODE_KEY_ED25519_FILE
        if secret_file.exists() and not secret_file.is_file():
            raise InvalidNodeKeyError(
                f"Node key file {secret_file} is not a regular file"
            )
        logger.debug("Using node key file %s", secret_file)
        return NodeKeyConfig(key_type=key_type, secret_file=secret_file)


def _parse_secret(raw: str) -> bytes:
    hex_str = raw.strip()
    if hex_str.startswith(("0x", "0X")):
        hex_str = hex_str[2:]
    try:
        secret = bytes.fromhex(hex_str)
    except ValueError:
        raise InvalidNodeKeyError("Invalid node key: not a hex string") from None
    if len(secret) != NODE_KEY_LENGTH:
        raise InvalidNodeKeyError(
            f"Invalid node key: expected {NODE_KEY_LENGTH} bytes, got {len(secret)}"
        )
    return secret
