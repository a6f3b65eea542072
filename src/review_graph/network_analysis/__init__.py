"""
Descriptive statistics on the constructed review graph:
- degree and degree centrality
- BFS distances and sampled average shortest-path length.
"""
