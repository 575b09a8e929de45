"""
Host-owned application state.

Replaces implicit UI state (active tab, loaded graph, analytics) with one
explicit object. The engine components hold only the Graph, the
AnalyticsSnapshot and the layout state; the host decides when they change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .analysis.report import AnalyticsReport, AnalyticsSnapshot
from .errors import EmptyGraphError
from .graph.builder import SAMPLE_DATA, GraphBuilder
from .graph.models import Graph
from .layout.simulator import LayoutSimulator

logger = logging.getLogger(__name__)


class Tab(Enum):
    """Views a host can show"""

    INPUT = "input"
    GRAPH = "graph"
    ANALYTICS = "analytics"


@dataclass
class AppState:
    """Everything a host needs to drive one analysis session"""

    input_text: str = ""
    active_tab: Tab = Tab.INPUT
    graph: Graph = field(default_factory=Graph)
    snapshot: AnalyticsSnapshot | None = None
    simulator: LayoutSimulator = field(default_factory=LayoutSimulator)
    builder: GraphBuilder = field(default_factory=GraphBuilder)
    report: AnalyticsReport = field(default_factory=AnalyticsReport)

    def load_sample(self) -> None:
        self.input_text = SAMPLE_DATA

    def analyze(self, text: str | None = None, require_nodes: bool = False) -> bool:
        """Rebuild graph and analytics from the input text.

        A new Graph always replaces the previous one. When the graph view is
        showing, the simulator is reloaded with the new graph.

        Args:
            text: New input text (defaults to the current input_text)
            require_nodes: Raise instead of returning False on empty input

        Returns:
            True if the input produced at least one node

        Raises:
            EmptyGraphError: If require_nodes is set and no line qualified
        """
        if text is not None:
            self.input_text = text

        graph = self.builder.parse(self.input_text)
        if graph.is_empty:
            logger.warning("No valid connections found in input")
            if require_nodes:
                raise EmptyGraphError("No valid connections found. Expected lines like 'Source,Target'.")
            return False

        self.graph = graph
        self.snapshot = self.report.build(graph)
        self.show(Tab.GRAPH)
        return True

    def show(self, tab: Tab) -> None:
        """Switch the active view.

        Views that need a graph are refused while nothing is loaded. Entering
        the graph view (re)starts the layout; leaving it withdraws it.
        """
        if tab is not Tab.INPUT and self.graph.is_empty:
            logger.debug(f"Ignoring switch to {tab.value}: no graph loaded")
            return

        self.active_tab = tab
        if tab is Tab.GRAPH:
            # Already laid out; keep the current positions
            if self.simulator.graph is not self.graph:
                self.simulator.load(self.graph, self.snapshot)
        else:
            self.simulator.clear()
