import random
from collections import deque
from typing import Dict, Hashable, List, Optional

import networkx as nx


def bfs_distances(g: nx.Graph, source: Hashable) -> Dict[Hashable, int]:
    """
    BFS from one source, returning the shortest hop count to every node
    reachable from it (the source itself included, at distance 0).
    """
    dist: Dict[Hashable, int] = {source: 0}
    queue = deque([source])

    while queue:
        u = queue.popleft()
        d = dist[u]
        for v in g.adj[u]:
            if v not in dist:
                dist[v] = d + 1
                queue.append(v)
    return dist


def sample_sources(
    g: nx.Graph, sample_size: int, rng: random.Random
) -> List[Hashable]:
    """Up to `sample_size` distinct nodes, uniformly without replacement."""
    if sample_size < 0:
        raise ValueError(f"sample_size must be non-negative, got {sample_size}")
    nodes = list(g.nodes())
    return rng.sample(nodes, min(sample_size, len(nodes)))


def calculate_average_distance(
    g: nx.Graph,
    sample_size: int,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    include_self: bool = True,
) -> float:
    """
    Estimate the average shortest-path length by running BFS from a random
    sample of sources and averaging every distance they reach.

    Pairs in different components are never counted. With `include_self`
    (the default) each source also contributes its own zero distance, which
    pulls the estimate down by roughly 1/component size. Returns 0.0 when no
    pair was counted.

    Pass `rng` or `seed` for reproducible runs; otherwise the sample is drawn
    from an unseeded generator.
    """
    if rng is None:
        rng = random.Random(seed)
    sources = sample_sources(g, sample_size, rng)

    total_dist = 0
    total_pairs = 0

    for src in sources:
        for tgt, d in bfs_distances(g, src).items():
            if tgt == src and not include_self:
                continue
            total_dist += d
            total_pairs += 1

    if total_pairs == 0:
        return 0.0
    return total_dist / total_pairs
