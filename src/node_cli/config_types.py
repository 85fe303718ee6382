"""
Service configuration value types.

These are produced by the configuration contract and consumed by whatever
builds the node services (database, network stack, executor). The CLI
layer treats them as plain values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto
from pathlib import Path
from typing import Optional

from node_cli.exceptions import InputError

DEFAULT_KEEP_BLOCKS = 256


class _ParsableEnum(str, Enum):
    """String enum that parses user input case-insensitively."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(m.value for m in cls)
        raise InputError(
            f"Invalid {cls.__name__} '{value}'. Valid values: {choices}"
        )


class Roles(Flag):
    """Role set of the node in the network."""

    FULL = auto()
    LIGHT = auto()
    AUTHORITY = auto()

    def is_authority(self) -> bool:
        return bool(self & Roles.AUTHORITY)


class TracingReceiver(_ParsableEnum):
    LOG = "log"
    TELEMETRY = "telemetry"


class WasmExecutionMethod(_ParsableEnum):
    INTERPRETED = "interpreted"
    COMPILED = "compiled"


class ExecutionStrategy(_ParsableEnum):
    NATIVE = "native"
    WASM = "wasm"
    BOTH = "both"
    NATIVE_ELSE_WASM = "native-else-wasm"


class NodeKeyType(_ParsableEnum):
    ED25519 = "ed25519"


@dataclass(frozen=True)
class DatabaseConfig:
    """Location and cache size of the chain database."""

    path: Path
    cache_size: Optional[int] = None


@dataclass(frozen=True)
class PruningMode:
    """State pruning: ``keep_blocks=None`` means keep everything."""

    keep_blocks: Optional[int] = DEFAULT_KEEP_BLOCKS

    @classmethod
    def archive_all(cls) -> "PruningMode":
        return cls(keep_blocks=None)

    @classmethod
    def keep(cls, blocks: int) -> "PruningMode":
        return cls(keep_blocks=blocks)

    @property
    def is_archive(self) -> bool:
        return self.keep_blocks is None

    def __str__(self) -> str:
        return "archive" if self.is_archive else f"keep {self.keep_blocks} blocks"


@dataclass(frozen=True)
class ExecutionStrategies:
    """Execution strategy for each runtime call context."""

    syncing: ExecutionStrategy
    importing: ExecutionStrategy
    block_construction: ExecutionStrategy
    offchain_worker: ExecutionStrategy
    other: ExecutionStrategy


@dataclass(frozen=True)
class NodeKeyConfig:
    """
    Network identity key source.

    Exactly one of ``secret`` (inline key bytes) or ``secret_file`` is set.
    A missing file is generated by the network layer on first start.
    """

    key_type: NodeKeyType
    secret: Optional[bytes] = None
    secret_file: Optional[Path] = None

    def __repr__(self) -> str:
        # Never print key material
        source = "<inline>" if self.secret is not None else str(self.secret_file)
        return f"NodeKeyConfig(key_type={self.key_type.value!r}, source={source!r})"
