"""Root descriptor of the node executable: identity and chain spec lookup."""

from __future__ import annotations

from dataclasses import dataclass

from node_cli.services.chain_spec import ChainSpec, load_spec


@dataclass(frozen=True)
class NodeCLI:
    """
    Global metadata about the node binary.

    Passed explicitly to ``CliConfiguration.init`` so one-time setup can
    print the banner and point crash reports at the right place.
    """

    impl_name: str = "Node"
    impl_version: str = "0.0.0"
    description: str = "Blockchain node"
    author: str = "Node developers"
    support_url: str = "https://example.com/issues"
    copyright_start_year: int = 2017
    executable_name: str = "node"

    def load_spec(self, chain_id: str) -> ChainSpec:
        return load_spec(chain_id)
