"""
Force-directed layout components
"""

from .simulator import LayoutSimulator, NodeState, NodeView, SimulatorState
from .styling import PALETTE, node_color, node_radius
from .ticker import FrameTicker

__all__ = [
    "FrameTicker",
    "LayoutSimulator",
    "NodeState",
    "NodeView",
    "PALETTE",
    "SimulatorState",
    "node_color",
    "node_radius",
]
