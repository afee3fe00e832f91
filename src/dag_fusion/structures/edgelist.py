"""CSV edge-list reading and writing for DAGs."""

from pathlib import Path
from typing import List, Sequence, Union

import networkx as nx
import pandas as pd

TAIL_COLUMN = "tail"
HEAD_COLUMN = "head"


def read_edge_list(path: Union[str, Path]) -> nx.DiGraph:
    """
    Read one DAG from a CSV edge list.

    The file has `tail` and `head` columns; a row with an empty head
    declares an isolated node. Node identifiers are read as strings.

    Args:
        path: CSV file path

    Returns:
        NetworkX DiGraph with nodes in first-seen order
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = {TAIL_COLUMN, HEAD_COLUMN} - set(df.columns)
    if missing:
        raise ValueError(f"{path}: missing column(s) {sorted(missing)}")

    G = nx.DiGraph()
    for tail, head in zip(df[TAIL_COLUMN].str.strip(), df[HEAD_COLUMN].str.strip()):
        if not tail:
            raise ValueError(f"{path}: row with empty tail")
        G.add_node(tail)
        if head:
            G.add_edge(tail, head)
    return G


def write_edge_list(G: nx.DiGraph, path: Union[str, Path]) -> None:
    """
    Write a DAG as a CSV edge list, isolated nodes as rows with empty head.

    Args:
        G: DAG to write
        path: Destination CSV file
    """
    rows = [{TAIL_COLUMN: u, HEAD_COLUMN: v} for u, v in G.edges()]
    rows += [{TAIL_COLUMN: node, HEAD_COLUMN: ""}
             for node in G.nodes() if G.degree(node) == 0]
    pd.DataFrame(rows, columns=[TAIL_COLUMN, HEAD_COLUMN]).to_csv(path, index=False)


def align_node_sets(dags: Sequence[nx.DiGraph]) -> List[nx.DiGraph]:
    """
    Copies of the DAGs sharing the union of their node sets.

    Nodes missing from a DAG are added as isolated nodes, keeping the
    first-seen order across all inputs.
    """
    all_nodes = list(dict.fromkeys(node for G in dags for node in G.nodes()))
    aligned = []
    for G in dags:
        H = nx.DiGraph()
        H.add_nodes_from(all_nodes)
        H.add_edges_from(G.edges())
        aligned.append(H)
    return aligned
