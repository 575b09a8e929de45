"""Node sizing and colouring rules for visualization hosts."""

from __future__ import annotations

from ..analysis.report import AnalyticsSnapshot

# Community colours, cycled by label
PALETTE = ("#3b82f6", "#ef4444", "#10b981", "#f59e0b", "#8b5cf6", "#ec4899")

DEFAULT_RADIUS = 12.0
MIN_RADIUS = 10.0
MAX_RADIUS = 25.0
RADIUS_PER_DEGREE = 4.0


def node_radius(node_id: str, snapshot: AnalyticsSnapshot | None) -> float:
    """Radius grows with degree, clamped to [10, 25]; 12 before analysis."""
    if snapshot is None:
        return DEFAULT_RADIUS
    degree = snapshot.degree.get(node_id, 0)
    return max(MIN_RADIUS, min(MAX_RADIUS, degree * RADIUS_PER_DEGREE))


def node_color(node_id: str, snapshot: AnalyticsSnapshot | None) -> str:
    """Palette colour for the node's community label."""
    label = snapshot.community.get(node_id, 0) if snapshot is not None else 0
    return PALETTE[label % len(PALETTE)]
