"""
Analytics report aggregation.

Combines centrality and community results for a Graph into a single
read-only AnalyticsSnapshot. Snapshots are always recomputed in full from
the Graph; nothing is patched incrementally.
"""

from __future__ import annotations

import logging

import networkx as nx
from pydantic import BaseModel, ConfigDict

from ..graph.models import Graph
from ..settings import AnalysisSettings, get_settings
from .centrality import CentralityAnalyzer, RankedNode
from .community import CommunityDetector

logger = logging.getLogger(__name__)


class AnalyticsSnapshot(BaseModel):
    """Complete analytics for one Graph"""

    model_config = ConfigDict(frozen=True)

    node_count: int
    edge_count: int
    density: float
    component_count: int
    degree: dict[str, int]
    betweenness: dict[str, float]
    community: dict[str, int]  # node id -> label
    top_by_degree: list[RankedNode]
    top_by_betweenness: list[RankedNode]
    communities: list[list[str]]  # member ids, ordered by first label appearance


def density(graph: Graph) -> float:
    """Share of possible undirected edges present.

    2|E| / (|V|(|V|-1)) with every edge occurrence counted; 0 for graphs with
    fewer than two nodes.
    """
    if graph.node_count < 2:
        return 0.0
    # nx.density counts parallel edges and self-loops of a MultiGraph
    return float(nx.density(graph.to_networkx()))


class AnalyticsReport:
    """Builds AnalyticsSnapshots from Graphs"""

    def __init__(self, settings: AnalysisSettings | None = None):
        self.settings = settings or get_settings().analysis
        self.centrality = CentralityAnalyzer()
        self.communities = CommunityDetector(iterations=self.settings.label_iterations)

    def build(self, graph: Graph) -> AnalyticsSnapshot:
        """Compute every metric for the graph.

        Degenerate graphs (no nodes, one node, no edges) produce trivial
        values instead of errors.
        """
        top_n = self.settings.top_n

        degree = self.centrality.degree(graph)
        betweenness = self.centrality.betweenness(graph)
        labels = self.communities.detect(graph)
        groups = self.communities.group(graph, labels)

        components = nx.number_connected_components(graph.to_networkx()) if not graph.is_empty else 0

        snapshot = AnalyticsSnapshot(
            node_count=graph.node_count,
            edge_count=graph.edge_count,
            density=density(graph),
            component_count=components,
            degree=degree,
            betweenness=betweenness,
            community=labels,
            top_by_degree=self.centrality.rank(degree, graph, top_n),
            top_by_betweenness=self.centrality.rank(betweenness, graph, top_n),
            communities=groups,
        )

        logger.info(
            f"Analytics: {snapshot.node_count} nodes, {snapshot.edge_count} edges, "
            f"density={snapshot.density:.3f}, {len(groups)} communities"
        )
        return snapshot


def build_snapshot(graph: Graph) -> AnalyticsSnapshot:
    """Build a snapshot with default settings."""
    return AnalyticsReport().build(graph)


def format_report(snapshot: AnalyticsSnapshot) -> str:
    """Plain-text summary of a snapshot for terminal output."""
    lines = [
        f"Nodes: {snapshot.node_count}",
        f"Connections: {snapshot.edge_count}",
        f"Network density: {snapshot.density * 100:.1f}%",
        f"Connected components: {snapshot.component_count}",
        "",
        "Top by degree:",
    ]
    lines.extend(f"  {i}. {entry.id} ({int(entry.score)})" for i, entry in enumerate(snapshot.top_by_degree, 1))
    lines.append("")
    lines.append("Top by betweenness:")
    lines.extend(f"  {i}. {entry.id} ({entry.score:.1f})" for i, entry in enumerate(snapshot.top_by_betweenness, 1))
    lines.append("")
    lines.append(f"Communities: {len(snapshot.communities)}")
    for idx, members in enumerate(snapshot.communities, 1):
        lines.append(f"  Community {idx} ({len(members)} members): {', '.join(members)}")
    return "\n".join(lines)
