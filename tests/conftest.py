"""Shared fixtures for the DAG fusion tests."""

import sys
from pathlib import Path

import networkx as nx
import pytest

# Make the package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

NODES = ["A", "B", "C", "D"]


def make_dag(nodes, edges):
    G = nx.DiGraph()
    G.add_nodes_from(nodes)
    G.add_edges_from(edges)
    return G


@pytest.fixture
def nodes():
    return list(NODES)


@pytest.fixture
def three_dags():
    """
    Three DAGs over A..D, all consistent with A < B < C < D.

    Together they hold all 6 forward edges; A->B, B->C and C->D appear
    twice, A->C, B->D and A->D once. Their union is complete (tree-width 3).
    """
    return [
        make_dag(NODES, [("A", "B"), ("B", "C"), ("C", "D")]),
        make_dag(NODES, [("A", "C"), ("B", "D"), ("A", "B")]),
        make_dag(NODES, [("A", "D"), ("B", "C"), ("C", "D")]),
    ]


@pytest.fixture
def conflicting_dags():
    """Two DAGs over A..D that disagree on edge directions."""
    return [
        make_dag(NODES, [("A", "B"), ("B", "C"), ("C", "D")]),
        make_dag(NODES, [("B", "A"), ("C", "B"), ("A", "D")]),
    ]
