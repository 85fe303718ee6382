"""``revert``: revert the chain to a previous state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from node_cli.commands.base import CommandConfiguration
from node_cli.exceptions import InputError
from node_cli.params import PruningParams, SharedParams

DEFAULT_REVERT_BLOCKS = 256


@dataclass(frozen=True)
class RevertCmd(CommandConfiguration):
    """Revert the chain by ``num`` blocks."""

    num: int = DEFAULT_REVERT_BLOCKS
    shared_opts: SharedParams = field(default_factory=SharedParams)
    pruning_opts: PruningParams = field(default_factory=PruningParams)

    def __post_init__(self):
        if self.num < 0:
            raise InputError(f"Number of blocks to revert must not be negative: {self.num}")

    def shared_params(self) -> SharedParams:
        return self.shared_opts

    def pruning_params(self) -> Optional[PruningParams]:
        return self.pruning_opts
