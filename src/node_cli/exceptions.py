"""Custom exception types for node command-line configuration."""

from __future__ import annotations

from pathlib import Path


class NodeCLIError(RuntimeError):
    """Base exception for configuration resolution failures."""


class InputError(NodeCLIError):
    """Raised when a command-line or config-file value cannot be parsed."""


class InvalidBasePathError(NodeCLIError):
    """Raised when the base path cannot be used as a data directory."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid base path {path}: {reason}")


class InvalidNodeKeyError(NodeCLIError):
    """Raised when the network identity key material is malformed or unreadable."""


class LoggerInitError(NodeCLIError):
    """Raised when the logging filter pattern is invalid."""


class ChainSpecError(NodeCLIError):
    """Raised when a chain specification cannot be located or decoded."""

    def __init__(self, chain_id: str, reason: str):
        self.chain_id = chain_id
        self.reason = reason
        super().__init__(f"Failed to load chain spec '{chain_id}': {reason}")


class ConfigFileError(NodeCLIError):
    """Raised when the YAML defaults file is missing or fails validation."""
