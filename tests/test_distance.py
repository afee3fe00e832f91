"""Tests for the SMHD and SHD structural distances."""

import networkx as nx
import pytest

from dag_fusion.evaluation import get_distance, shd, smhd


def dag(edges, nodes="ABC"):
    G = nx.DiGraph()
    G.add_nodes_from(nodes)
    G.add_edges_from(edges)
    return G


def test_smhd_identity_and_symmetry():
    chain = dag([("A", "B"), ("B", "C")])
    collider = dag([("A", "B"), ("C", "B")])

    assert smhd(chain, chain) == 0
    assert smhd(chain, collider) == smhd(collider, chain)


def test_smhd_counts_moral_edges():
    chain = dag([("A", "B"), ("B", "C")])
    collider = dag([("A", "B"), ("C", "B")])
    # The collider's moral graph has the extra married edge A - C
    assert smhd(chain, collider) == 1


def test_smhd_ignores_orientation_within_same_moral_graph():
    forward = dag([("A", "B"), ("B", "C")])
    backward = dag([("C", "B"), ("B", "A")])
    assert smhd(forward, backward) == 0


def test_shd_counts_reversals_once():
    forward = dag([("A", "B")])
    backward = dag([("B", "A")])
    empty = dag([])

    assert shd(forward, backward) == 1
    assert shd(forward, empty) == 1
    assert shd(forward, forward) == 0


def test_distances_require_same_nodes():
    with pytest.raises(ValueError):
        smhd(dag([], "AB"), dag([], "ABC"))
    with pytest.raises(ValueError):
        shd(dag([], "AB"), dag([], "ABC"))


def test_get_distance():
    assert get_distance("smhd") is smhd
    assert get_distance("shd") is shd
    with pytest.raises(ValueError):
        get_distance("hamming")
