"""
Social analytics graph engine.

Parses relationship lists into graphs, computes centrality and community
metrics, and drives a force-directed layout for visualization hosts.
"""

from .analysis.report import AnalyticsReport, AnalyticsSnapshot, build_snapshot
from .graph.builder import SAMPLE_DATA, GraphBuilder, parse
from .graph.models import Edge, Graph
from .layout.simulator import LayoutSimulator, SimulatorState

__all__ = [
    "AnalyticsReport",
    "AnalyticsSnapshot",
    "Edge",
    "Graph",
    "GraphBuilder",
    "LayoutSimulator",
    "SAMPLE_DATA",
    "SimulatorState",
    "build_snapshot",
    "parse",
]
