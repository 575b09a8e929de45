"""
Community detection by synchronous label propagation.

Every node starts with its insertion index as label. Each round, all nodes
adopt the most frequent label among their neighbors, computed from the
previous round's labels. The number of rounds is fixed (5 by default) with no
convergence check, so runtime is bounded and results are deterministic, at
the cost of possibly returning a partition that has not yet stabilized.
"""

from __future__ import annotations

import logging
from collections import Counter

from ..graph.models import Graph

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 5


class CommunityDetector:
    """Partitions a Graph into communities with label propagation"""

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        self.iterations = iterations

    def detect(self, graph: Graph) -> dict[str, int]:
        """Run the fixed number of propagation rounds.

        Returns:
            Mapping of node id to community label (labels are insertion
            indices, not necessarily contiguous)
        """
        adj = graph.adjacency()
        labels = {node_id: graph.index_of(node_id) for node_id in graph.nodes}

        for _ in range(self.iterations):
            previous = dict(labels)
            for node_id in graph.nodes:
                labels[node_id] = self._majority_label(adj[node_id], previous, previous[node_id])

        logger.debug(f"Label propagation finished after {self.iterations} rounds")
        return labels

    @staticmethod
    def _majority_label(neighbors: list[str], labels: dict[str, int], current: int) -> int:
        """Most frequent neighbor label; ties go to the label seen first.

        Counter preserves first-insertion order and the scan only replaces
        the best label on a strictly greater count.
        """
        counts = Counter(labels[n] for n in neighbors)
        best_label = current
        best_count = 0
        for label, count in counts.items():
            if count > best_count:
                best_label, best_count = label, count
        return best_label

    def group(self, graph: Graph, labels: dict[str, int]) -> list[list[str]]:
        """Group node ids by label.

        Groups are ordered by where each label first appears when walking
        nodes in original order; members keep node order.
        """
        groups: dict[int, list[str]] = {}
        for node_id in graph.nodes:
            groups.setdefault(labels[node_id], []).append(node_id)
        return list(groups.values())
