"""
Node CLI - command dispatch and configuration resolution for a blockchain node.

A single ``Subcommand`` value stands for whichever subcommand the user
selected and answers every configuration question on its behalf.
"""

__version__ = "0.8.0"

from node_cli.configuration import CliConfiguration
from node_cli.descriptor import NodeCLI
from node_cli.exceptions import NodeCLIError
from node_cli.subcommand import Subcommand, SubcommandKind

__all__ = [
    "CliConfiguration",
    "NodeCLI",
    "NodeCLIError",
    "Subcommand",
    "SubcommandKind",
    "__version__",
]
