"""Commands package: one payload class per subcommand."""

from node_cli.commands.base import CommandConfiguration
from node_cli.commands.build_spec import BuildSpecCmd
from node_cli.commands.check_block import CheckBlockCmd
from node_cli.commands.export_blocks import ExportBlocksCmd
from node_cli.commands.import_blocks import ImportBlocksCmd
from node_cli.commands.purge_chain import PurgeChainCmd
from node_cli.commands.revert import RevertCmd

__all__ = [
    "CommandConfiguration",
    "BuildSpecCmd",
    "CheckBlockCmd",
    "ExportBlocksCmd",
    "ImportBlocksCmd",
    "PurgeChainCmd",
    "RevertCmd",
]
