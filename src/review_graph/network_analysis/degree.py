from typing import Dict, Hashable

import networkx as nx


def calculate_degree(g: nx.Graph) -> Dict[Hashable, float]:
    """
    Degree of every node: parallel edges count one each, a self-loop
    counts twice (networkx adjacency semantics). Isolated nodes get 0.0.
    """
    return {node: float(deg) for node, deg in g.degree()}


def calculate_degree_centrality(g: nx.Graph) -> Dict[Hashable, float]:
    """
    degree / (N - 1) for every node.

    Graphs with fewer than two nodes map every node to 0.0. The divisor is
    always N - 1, whether or not the other nodes are reachable.
    """
    num_nodes = g.number_of_nodes()
    if num_nodes <= 1:
        return {node: 0.0 for node in g.nodes()}

    max_possible_degree = float(num_nodes - 1)
    return {node: deg / max_possible_degree for node, deg in g.degree()}
