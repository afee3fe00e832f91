"""Tests for CSV edge lists and the command-line entry point."""

import json

import networkx as nx
import pytest

from dag_fusion.cli import main
from dag_fusion.structures import align_node_sets, read_edge_list, write_edge_list


@pytest.fixture
def csv_inputs(tmp_path, three_dags):
    paths = []
    for i, G in enumerate(three_dags):
        path = tmp_path / f"dag{i}.csv"
        write_edge_list(G, path)
        paths.append(str(path))
    return paths


def test_edge_list_round_trip(tmp_path):
    G = nx.DiGraph([("A", "B"), ("B", "C")])
    G.add_node("Z")
    path = tmp_path / "dag.csv"
    write_edge_list(G, path)

    loaded = read_edge_list(path)
    assert set(loaded.edges()) == {("A", "B"), ("B", "C")}
    assert set(loaded.nodes()) == {"A", "B", "C", "Z"}


def test_edge_list_requires_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("source,target\nA,B\n")
    with pytest.raises(ValueError, match="missing column"):
        read_edge_list(path)


def test_align_node_sets():
    G1 = nx.DiGraph([("A", "B")])
    G2 = nx.DiGraph([("C", "B")])
    aligned = align_node_sets([G1, G2])
    assert [list(G.nodes()) for G in aligned] == [["A", "B", "C"]] * 2
    assert set(aligned[1].edges()) == {("C", "B")}


def test_cli_fuses_and_writes_outputs(csv_inputs, tmp_path, capsys):
    output = tmp_path / "out" / "fused.csv"
    code = main(csv_inputs + [
        "--max-treewidth", "2", "--iterations", "10", "--population", "6",
        "--seed", "1", "--no-parallel", "--output", str(output),
    ])
    assert code == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["feasible"] is True
    assert summary["treewidth"] <= 2
    assert summary["inputs"] == csv_inputs

    fused = read_edge_list(output)
    assert fused.number_of_edges() == summary["num_edges"]
    with open(output.with_suffix(".json")) as f:
        assert json.load(f)["fitness"] == summary["fitness"]


def test_cli_rejects_invalid_settings(csv_inputs, capsys):
    assert main(csv_inputs + ["--population", "1"]) == 1
    assert "population_size" in capsys.readouterr().err


def test_cli_reports_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1
    assert "Error reading input DAGs" in capsys.readouterr().err


def test_cli_rejects_missing_config(csv_inputs, tmp_path, capsys):
    missing = tmp_path / "fusoin.yaml"
    assert main(csv_inputs + ["--config", str(missing)]) == 1
    assert "config file not found" in capsys.readouterr().err


def test_cli_reads_config_file(csv_inputs, tmp_path, capsys):
    config = tmp_path / "fusion.yaml"
    config.write_text(
        "genetic:\n  max_treewidth: 1\n  iterations: 3\n  population_size: 4\n"
        "evaluation:\n  parallel: false\n"
    )
    assert main(csv_inputs + ["--config", str(config)]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["max_treewidth"] == 1
    assert summary["generations"] == 3
