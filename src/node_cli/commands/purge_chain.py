"""``purge-chain``: remove the whole chain data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from node_cli.commands.base import CommandConfiguration
from node_cli.params import DatabaseParams, SharedParams


@dataclass(frozen=True)
class PurgeChainCmd(CommandConfiguration):
    """Remove the whole chain data; ``yes`` skips the confirmation prompt."""

    yes: bool = False
    shared_opts: SharedParams = field(default_factory=SharedParams)
    database_opts: DatabaseParams = field(default_factory=DatabaseParams)

    def shared_params(self) -> SharedParams:
        return self.shared_opts

    def database_params(self) -> Optional[DatabaseParams]:
        return self.database_opts
