"""``build-spec``: build a chain specification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from node_cli.commands.base import CommandConfiguration
from node_cli.params import NodeKeyParams, SharedParams


@dataclass(frozen=True)
class BuildSpecCmd(CommandConfiguration):
    """Build a spec.json file, outputs to stdout."""

    raw: bool = False
    disable_default_bootnode: bool = False
    shared_opts: SharedParams = field(default_factory=SharedParams)
    node_key_opts: NodeKeyParams = field(default_factory=NodeKeyParams)

    def shared_params(self) -> SharedParams:
        return self.shared_opts

    def node_key_params(self) -> Optional[NodeKeyParams]:
        return self.node_key_opts
