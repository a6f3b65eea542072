import argparse
import sys
from typing import List, Mapping, Optional

import pandas as pd

from review_graph.common.config_paths import (
    DEFAULT_DATASET,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TOP_COUNT,
)
from review_graph.graph_construction.graph_builder import ReviewGraph, load_review_graph
from review_graph.graph_construction.review_parser import DatasetReadError
from review_graph.network_analysis.degree import (
    calculate_degree,
    calculate_degree_centrality,
)
from review_graph.network_analysis.distances import calculate_average_distance


def top_nodes(
    values: Mapping[int, float],
    review_graph: ReviewGraph,
    top_count: int,
) -> pd.DataFrame:
    """
    Rank nodes by a metric, highest first.

    Ties keep handle (first-seen) order. The returned frame has columns
    rank, handle, identifier, value.
    """
    df = pd.DataFrame(
        {
            "handle": list(values.keys()),
            "value": [float(v) for v in values.values()],
        },
        columns=["handle", "value"],
    )
    df = df.sort_values("handle", kind="mergesort")
    df = df.sort_values("value", ascending=False, kind="mergesort").head(max(top_count, 0))
    df["identifier"] = [review_graph.label(h) for h in df["handle"]]
    df = df.reset_index(drop=True)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df[["rank", "handle", "identifier", "value"]]


def print_top_nodes(metric: str, df: pd.DataFrame) -> None:
    print(f"\nTop {len(df)} nodes by {metric}:")
    for row in df.itertuples(index=False):
        print(f"  {row.rank}. {row.identifier} (node {row.handle}): {row.value:.4f}")


def run_report(
    dataset: str,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    top_count: int = DEFAULT_TOP_COUNT,
    seed: Optional[int] = None,
    include_self: bool = True,
    show_progress: bool = True,
) -> float:
    """Load the graph, print every metric and return the average distance estimate."""
    review_graph = load_review_graph(dataset, show_progress=show_progress)

    summary = review_graph.summary()
    print("\n=== REVIEW GRAPH ===")
    print(f"Nodes: {summary['nodes']:,}")
    print(f"Edges (reviews): {summary['edges']:,}")
    print(f"Connected components: {summary['components']:,}")

    degrees = calculate_degree(review_graph.graph)
    centrality = calculate_degree_centrality(review_graph.graph)
    print_top_nodes("degree", top_nodes(degrees, review_graph, top_count))
    print_top_nodes("degree centrality", top_nodes(centrality, review_graph, top_count))

    print(f"\n=== AVERAGE DISTANCE (BFS from {sample_size} sampled nodes) ===")
    avg_distance = calculate_average_distance(
        review_graph.graph, sample_size, seed=seed, include_self=include_self
    )
    print(f"Estimated average shortest-path length: {avg_distance:.4f}")
    return avg_distance


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Build the reviewer/product graph from a review dump and report "
            "degree, degree centrality and the sampled average distance."
        )
    )
    parser.add_argument(
        "--dataset",
        default=DEFAULT_DATASET,
        help=f"Path to the review dump, plain/.gz/.bz2 (default: {DEFAULT_DATASET})",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=DEFAULT_SAMPLE_SIZE,
        help=f"Number of BFS sources for the distance estimate (default: {DEFAULT_SAMPLE_SIZE})",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_COUNT,
        help=f"How many nodes to list per metric (default: {DEFAULT_TOP_COUNT})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the BFS source sample. Unseeded if omitted.",
    )
    parser.add_argument(
        "--exclude-self",
        action="store_true",
        help="Leave each source's zero self-distance out of the average.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar while reading the dump.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.sample_size < 0:
        print(f"❌ --sample-size must be non-negative, got {args.sample_size}")
        return 2

    try:
        run_report(
            args.dataset,
            sample_size=args.sample_size,
            top_count=args.top,
            seed=args.seed,
            include_self=not args.exclude_self,
            show_progress=not args.no_progress,
        )
    except DatasetReadError as e:
        print(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
