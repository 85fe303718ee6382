"""``export-blocks``: export blocks to a file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from node_cli.commands.base import CommandConfiguration
from node_cli.exceptions import InputError
from node_cli.params import PruningParams, SharedParams


@dataclass(frozen=True)
class ExportBlocksCmd(CommandConfiguration):
    """Export blocks to a file (stdout when ``output`` is unset)."""

    output: Optional[Path] = None
    from_block: int = 1
    to_block: Optional[int] = None
    binary: bool = False
    shared_opts: SharedParams = field(default_factory=SharedParams)
    pruning_opts: PruningParams = field(default_factory=PruningParams)

    def __post_init__(self):
        if self.from_block < 1:
            raise InputError(f"--from must be at least 1, got {self.from_block}")
        if self.to_block is not None and self.to_block < self.from_block:
            raise InputError(
                f"--to ({self.to_block}) must not be lower than --from ({self.from_block})"
            )

    def shared_params(self) -> SharedParams:
        return self.shared_opts

    def pruning_params(self) -> Optional[PruningParams]:
        return self.pruning_opts
