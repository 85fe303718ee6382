"""``check-block``: validate a single block."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union

from node_cli.commands.base import CommandConfiguration
from node_cli.exceptions import InputError
from node_cli.params import ImportParams, SharedParams

BLOCK_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")
BLOCK_NUMBER_PATTERN = re.compile(r"^[0-9]+$")


def parse_block_id(raw: str) -> Union[int, bytes]:
    """Parse a block number or a ``0x``-prefixed 32-byte block hash."""
    value = raw.strip()
    if BLOCK_HASH_PATTERN.match(value):
        return bytes.fromhex(value[2:])
    if BLOCK_NUMBER_PATTERN.match(value):
        return int(value)
    raise InputError(
        f"Invalid block '{raw}': expected a block number or a 0x-prefixed 32-byte hash"
    )


@dataclass(frozen=True)
class CheckBlockCmd(CommandConfiguration):
    """Validate a single block."""

    input: str
    default_heap_pages: Optional[int] = None
    shared_opts: SharedParams = field(default_factory=SharedParams)
    import_opts: ImportParams = field(default_factory=ImportParams)

    def __post_init__(self):
        parse_block_id(self.input)

    @property
    def block_id(self) -> Union[int, bytes]:
        return parse_block_id(self.input)

    def shared_params(self) -> SharedParams:
        return self.shared_opts

    def import_params(self) -> Optional[ImportParams]:
        return self.import_opts
