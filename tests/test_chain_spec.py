"""
Unit tests for chain spec loading.
"""

import json

import pytest

from node_cli.descriptor import NodeCLI
from node_cli.exceptions import ChainSpecError
from node_cli.services.chain_spec import ChainSpec, load_spec


class TestBuiltinSpecs:
    """Tests for the specs generated in code."""

    def test_dev(self):
        spec = load_spec("dev")

        assert spec.id == "dev"
        assert spec.chain_type == "Development"

    def test_local(self):
        assert load_spec("local").id == "local_testnet"

    def test_empty_id_is_default_chain(self):
        assert load_spec("").id == "local_testnet"

    def test_descriptor_delegates(self):
        assert NodeCLI().load_spec("dev") == load_spec("dev")


class TestSpecFiles:
    """Tests for JSON spec files."""

    def test_load_from_file(self, tmp_path):
        spec_file = tmp_path / "custom.json"
        spec_file.write_text(
            json.dumps(
                {
                    "name": "Custom",
                    "id": "custom",
                    "chainType": "Live",
                    "bootNodes": ["/ip4/127.0.0.1/tcp/30333"],
                    "genesis": {"runtime": {"endowed": ["Alice"]}},
                }
            )
        )

        spec = load_spec(str(spec_file))

        assert spec.name == "Custom"
        assert spec.boot_nodes == ["/ip4/127.0.0.1/tcp/30333"]
        assert spec.genesis == {"endowed": ["Alice"]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ChainSpecError) as exc_info:
            load_spec(str(tmp_path / "nope.json"))

        assert "no such file" in str(exc_info.value)

    def test_invalid_json(self, tmp_path):
        spec_file = tmp_path / "broken.json"
        spec_file.write_text("{not json")

        with pytest.raises(ChainSpecError):
            load_spec(str(spec_file))

    def test_top_level_not_an_object(self, tmp_path):
        spec_file = tmp_path / "list.json"
        spec_file.write_text("[1, 2]")

        with pytest.raises(ChainSpecError, match="expected a JSON object"):
            load_spec(str(spec_file))

    def test_not_utf8(self, tmp_path):
        spec_file = tmp_path / "binary.json"
        spec_file.write_bytes(b'{"name": "\xff"}')

        with pytest.raises(ChainSpecError):
            load_spec(str(spec_file))

    def test_missing_required_field(self, tmp_path):
        spec_file = tmp_path / "partial.json"
        spec_file.write_text(json.dumps({"name": "No id"}))

        with pytest.raises(ChainSpecError, match="missing field"):
            load_spec(str(spec_file))


class TestSerialization:
    """Tests for spec JSON output."""

    def test_runtime_genesis(self):
        data = json.loads(load_spec("dev").to_json())

        assert "runtime" in data["genesis"]
        assert data["chainType"] == "Development"

    def test_raw_genesis(self):
        data = json.loads(load_spec("dev").to_json(raw=True))

        assert "raw" in data["genesis"]

    def test_from_dict_reads_back(self):
        spec = ChainSpec(name="X", id="x", genesis={"a": 1})

        assert ChainSpec.from_dict(spec.to_dict()) == spec
