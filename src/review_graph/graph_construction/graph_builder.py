import time
import zlib
from typing import Dict, Iterable, List, Mapping, NewType, Tuple

import networkx as nx
from tqdm import tqdm

from review_graph.common.config_paths import PRODUCT_ID_KEY, USER_ID_KEY
from review_graph.graph_construction.review_parser import (
    DatasetReadError,
    ReviewRecord,
    decode_lines,
    iter_records,
    open_dataset,
)


NodeHandle = NewType("NodeHandle", int)


class ReviewGraph:
    """
    Undirected reviewer/product multigraph.

    Nodes are integer handles allocated in first-seen order; the original
    identifier lives in the `label` node attribute and in a hash index, so
    identifier -> handle and handle -> identifier are both O(1).
    Every complete review adds one edge, repeated reviews included.
    """

    def __init__(self) -> None:
        self.graph = nx.MultiGraph()
        self._index: Dict[str, NodeHandle] = {}
        self._labels: List[str] = []

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def resolve(self, identifier: str) -> NodeHandle:
        """Return the handle for `identifier`, creating the node on first sight."""
        handle = self._index.get(identifier)
        if handle is None:
            handle = NodeHandle(len(self._labels))
            self._index[identifier] = handle
            self._labels.append(identifier)
            self.graph.add_node(handle, label=identifier)
        return handle

    def handle_of(self, identifier: str) -> NodeHandle:
        """Lookup without insertion. Raises KeyError for unknown identifiers."""
        return self._index[identifier]

    def label(self, handle: int) -> str:
        if not 0 <= handle < len(self._labels):
            raise KeyError(handle)
        return self._labels[handle]

    def add_review(self, user_id: str, product_id: str) -> Tuple[NodeHandle, NodeHandle]:
        user = self.resolve(user_id)
        product = self.resolve(product_id)
        self.graph.add_edge(user, product)
        return user, product

    def add_record(self, record: ReviewRecord, register_orphans: bool = True) -> bool:
        """
        Add one parsed record. Returns True if an edge was added.

        Incomplete records never add an edge; with `register_orphans` the
        identifier they do carry still becomes an (isolated) node.
        """
        if record.is_complete:
            self.add_review(record.user_id, record.product_id)
            return True
        if register_orphans:
            for identifier in (record.user_id, record.product_id):
                if identifier is not None:
                    self.resolve(identifier)
        return False

    def labelled(self, values: Mapping[int, float]) -> Dict[str, float]:
        """Re-key a per-handle metric map by the original identifiers."""
        return {self.label(handle): value for handle, value in values.items()}

    def summary(self) -> Dict[str, int]:
        return {
            "nodes": self.number_of_nodes(),
            "edges": self.number_of_edges(),
            "components": nx.number_connected_components(self.graph) if len(self) else 0,
        }


def build_review_graph(
    lines: Iterable[str],
    register_orphans: bool = True,
    user_key: str = USER_ID_KEY,
    product_key: str = PRODUCT_ID_KEY,
    close_trailing_record: bool = False,
) -> ReviewGraph:
    """Build a ReviewGraph from already decoded lines."""
    review_graph = ReviewGraph()
    records = iter_records(
        lines,
        user_key=user_key,
        product_key=product_key,
        close_trailing_record=close_trailing_record,
    )
    for record in records:
        review_graph.add_record(record, register_orphans=register_orphans)
    return review_graph


def load_review_graph(
    path: str,
    register_orphans: bool = True,
    close_trailing_record: bool = False,
    show_progress: bool = True,
    verbose: bool = True,
) -> ReviewGraph:
    """
    Read the review dump at `path` into a ReviewGraph.

    Undecodable lines and incomplete records are skipped, as is a last
    record with no blank line after it unless `close_trailing_record` is set.
    Failing to open, decompress or read the source raises DatasetReadError
    and no graph is returned.
    """
    if verbose:
        print(f"Loading reviews from: {path}")
    start_time = time.time()

    try:
        with open_dataset(path) as raw, tqdm(
            raw, desc="Reading reviews", unit="line", disable=not show_progress
        ) as progress:
            review_graph = build_review_graph(
                decode_lines(progress, verbose=verbose),
                register_orphans=register_orphans,
                close_trailing_record=close_trailing_record,
            )
    except DatasetReadError:
        raise
    except (OSError, EOFError, zlib.error) as e:
        raise DatasetReadError(f"Failed reading review dataset '{path}': {e}") from e

    if verbose:
        print(
            f"✅ Graph loaded in {time.time() - start_time:.2f} seconds: "
            f"{review_graph.number_of_nodes():,} nodes, {review_graph.number_of_edges():,} edges"
        )
    return review_graph
