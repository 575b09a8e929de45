"""
Centrality metrics for relationship graphs.

Two per-node scores are produced:

- degree: count of edge endpoints incident to the node
- betweenness: an accumulated BFS path-count proxy kept for ranking
  compatibility with earlier releases. It is NOT classical shortest-path
  betweenness; revisits along non-shortest edges still add path counts.
  Use classical_betweenness() when the textbook metric is wanted.
"""

from __future__ import annotations

import logging
from collections import deque

import networkx as nx
from pydantic import BaseModel, ConfigDict

from ..graph.models import Graph

logger = logging.getLogger(__name__)


class RankedNode(BaseModel):
    """A node id paired with its score in a ranking"""

    model_config = ConfigDict(frozen=True)

    id: str
    score: float


class CentralityAnalyzer:
    """Computes degree and approximate betweenness scores for a Graph"""

    def degree(self, graph: Graph) -> dict[str, int]:
        """Degree per node; a self-loop counts twice.

        The values always sum to 2 * edge_count.
        """
        degree = dict.fromkeys(graph.nodes, 0)
        for edge in graph.edges:
            degree[edge.source] += 1
            degree[edge.target] += 1
        return degree

    def betweenness(self, graph: Graph) -> dict[str, float]:
        """Accumulated BFS path-count score per node.

        For every source node one breadth-first traversal runs. A node seen
        for the first time inherits the path count of the node expanding it;
        a node already seen has that count added to its own instead, even when
        the edge is not on a shortest path. After each traversal the counts
        of all non-source nodes are added to their running totals.

        Complexity: O(V * (V + E)).
        """
        adj = graph.adjacency()
        totals = dict.fromkeys(graph.nodes, 0.0)

        for source in graph.nodes:
            paths = dict.fromkeys(graph.nodes, 0.0)
            paths[source] = 1.0
            visited = {source}
            queue = deque([source])

            while queue:
                current = queue.popleft()
                for neighbor in adj[current]:
                    if neighbor not in visited:
                        visited.add(neighbor)
                        queue.append(neighbor)
                        paths[neighbor] = paths[current]
                    else:
                        paths[neighbor] += paths[current]

            for node_id, count in paths.items():
                if node_id != source:
                    totals[node_id] += count

        logger.debug(f"Computed approximate betweenness for {graph.node_count} nodes")
        return totals

    def classical_betweenness(self, graph: Graph) -> dict[str, float]:
        """Textbook normalized shortest-path betweenness via NetworkX.

        Parallel edges and self-loops do not change shortest paths, so the
        collapsed simple graph is used.
        """
        if graph.is_empty:
            return {}
        simple = nx.Graph(graph.to_networkx())
        simple.remove_edges_from(list(nx.selfloop_edges(simple)))
        scores = nx.betweenness_centrality(simple)
        return {node_id: float(scores[node_id]) for node_id in graph.nodes}

    def rank(self, scores: dict[str, int] | dict[str, float], graph: Graph, limit: int = 5) -> list[RankedNode]:
        """Top-N nodes by descending score.

        Ties keep first-seen node order (sorted() is stable and the input is
        walked in node order).
        """
        ordered = sorted(graph.nodes, key=lambda node_id: scores[node_id], reverse=True)
        return [RankedNode(id=node_id, score=float(scores[node_id])) for node_id in ordered[:limit]]
