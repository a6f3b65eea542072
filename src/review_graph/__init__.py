"""
Bipartite reviewer/product network built from a review dump, plus
descriptive statistics over it:
- degree and degree centrality
- sampled average shortest-path length.
"""
