"""Services package - chain specs and the startup driver."""

from node_cli.services.chain_spec import ChainSpec, load_spec
from node_cli.services.runner import NodeConfiguration, Runner

__all__ = [
    "ChainSpec",
    "load_spec",
    "NodeConfiguration",
    "Runner",
]
