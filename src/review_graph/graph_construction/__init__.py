"""
Reading the review dump and constructing the reviewer/product graph:
- opening plain, gzip or bzip2 sources
- assembling (user, product) records from `key: value` blocks
- building the multigraph with a stable identifier index.
"""
