"""``import-blocks``: import blocks from a file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from node_cli.commands.base import CommandConfiguration
from node_cli.exceptions import InputError
from node_cli.params import ImportParams, SharedParams


@dataclass(frozen=True)
class ImportBlocksCmd(CommandConfiguration):
    """Import blocks from a file (stdin when ``input`` is unset)."""

    input: Optional[Path] = None
    default_heap_pages: Optional[int] = None
    binary: bool = False
    shared_opts: SharedParams = field(default_factory=SharedParams)
    import_opts: ImportParams = field(default_factory=ImportParams)

    def __post_init__(self):
        if self.default_heap_pages is not None and self.default_heap_pages < 1:
            raise InputError(
                f"--default-heap-pages must be positive, got {self.default_heap_pages}"
            )

    def shared_params(self) -> SharedParams:
        return self.shared_opts

    def import_params(self) -> Optional[ImportParams]:
        return self.import_opts
