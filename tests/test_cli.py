#!/usr/bin/env python3
"""Tests for the pyradial command line entry point."""

import json
import sys
from pathlib import Path

# Add source directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pyradial.__main__ import main
from pyradial.model.loader import dump_tree
from pyradial.model.sample import build_sample_tree


def test_json_output_for_sample(tmp_path):
    """The sample network is written as JSON."""
    out = tmp_path / "layout.json"

    assert main(["--seed", "1", "--format", "json", "--output", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [n["id"] for n in data["nodes"]] == ["center", "tokenized-assets", "staking", "supply-chain"]
    assert len(data["connections"]) == 3
    assert data["bounds"]["radius"] > 0


def test_expand_all_lays_out_everything(tmp_path):
    out = tmp_path / "layout.json"

    assert main(["--expand-all", "--seed", "2", "--format", "json", "-o", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 24
    assert len(data["connections"]) == 23


def test_definition_file_and_table_output(tmp_path, capsys):
    definition = tmp_path / "tree.json"
    definition.write_text(json.dumps(dump_tree(build_sample_tree())), encoding="utf-8")

    assert main([str(definition), "--seed", "3"]) == 0

    output = capsys.readouterr().out
    assert output.splitlines()[0].split()[:2] == ["id", "lvl"]
    assert "supply-chain" in output


def test_definition_file_gets_materials(tmp_path, capsys):
    definition = tmp_path / "tree.json"
    definition.write_text(
        json.dumps(
            {
                "center": {"id": "hub", "color": "#FFD700", "expanded": True},
                "branches": [
                    {"id": "a", "color": "#4A90E2", "position": [4, 0, 0], "expanded": True, "children": [{"id": "a1"}]},
                    {"id": "b", "position": [-4, 0, 0]},
                ],
            }
        ),
        encoding="utf-8",
    )

    assert main([str(definition), "--seed", "1", "--format", "json"]) == 0

    nodes = {node["id"]: node for node in json.loads(capsys.readouterr().out)["nodes"]}
    assert set(nodes) == {"hub", "a", "a1", "b"}
    assert all(node["glow_color"] is not None for node in nodes.values())
    assert nodes["hub"]["glow_color"] == "#ffd700"
    assert nodes["a"]["glow_color"] == "#4a90e2"


def test_definition_with_bad_color_reports_error(tmp_path, capsys):
    definition = tmp_path / "tree.json"
    definition.write_text(json.dumps({"center": {"id": "hub", "color": "gold"}}), encoding="utf-8")

    assert main([str(definition)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_same_seed_same_output(tmp_path):
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"

    main(["--expand-all", "--seed", "5", "--format", "json", "-o", str(first)])
    main(["--expand-all", "--seed", "5", "--format", "json", "-o", str(second)])

    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")


def test_bad_definition_reports_error(tmp_path, capsys):
    broken = tmp_path / "broken.json"
    broken.write_text('{"branches": []}', encoding="utf-8")

    assert main([str(broken)]) == 1
    assert "Invalid tree definition" in capsys.readouterr().err


def test_invalid_config_reports_error(capsys):
    assert main(["--angle-samples", "0"]) == 1
    assert "angle_samples" in capsys.readouterr().err
