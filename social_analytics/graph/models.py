"""
Graph data model for relationship analysis.

A Graph is an immutable snapshot: node identifiers in first-seen order plus
the undirected edges exactly as declared. Duplicate edges and self-loops are
kept; every occurrence counts in the derived metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx


@dataclass(frozen=True)
class Edge:
    """Undirected relationship between two node ids"""

    source: str
    target: str

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


@dataclass(frozen=True)
class Graph:
    """Immutable node/edge model built by GraphBuilder.

    Attributes:
        nodes: Unique node ids in first-seen order
        edges: Edges in declaration order (duplicates and self-loops preserved)
    """

    nodes: tuple[str, ...] = ()
    edges: tuple[Edge, ...] = ()
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {node_id: idx for idx, node_id in enumerate(self.nodes)}
        if len(index) != len(self.nodes):
            raise ValueError("Graph nodes must be unique")
        missing = {e.source for e in self.edges if e.source not in index}
        missing |= {e.target for e in self.edges if e.target not in index}
        if missing:
            raise ValueError(f"Edges reference unknown nodes: {sorted(missing)}")
        object.__setattr__(self, "_index", index)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to analyze (zero nodes)."""
        return not self.nodes

    def index_of(self, node_id: str) -> int:
        """Insertion index of a node, also its initial community label."""
        return self._index[node_id]

    def adjacency(self) -> dict[str, list[str]]:
        """Build the undirected adjacency list.

        Each edge appends its target to the source's list and its source to
        the target's list, in edge-declaration order. A self-loop therefore
        lists the node twice in its own neighbor list, and a duplicated edge
        lists the neighbor once per occurrence.

        Returns:
            Fresh dict mapping every node id (in node order) to its neighbor list
        """
        adj: dict[str, list[str]] = {node_id: [] for node_id in self.nodes}
        for edge in self.edges:
            adj[edge.source].append(edge.target)
            adj[edge.target].append(edge.source)
        return adj

    def to_networkx(self) -> nx.MultiGraph:
        """NetworkX view that keeps parallel edges and self-loops."""
        G = nx.MultiGraph()
        G.add_nodes_from(self.nodes)
        G.add_edges_from((e.source, e.target) for e in self.edges)
        return G
