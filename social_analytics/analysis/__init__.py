"""
Centrality, community and report components
"""

from .centrality import CentralityAnalyzer, RankedNode
from .community import CommunityDetector
from .report import AnalyticsReport, AnalyticsSnapshot, build_snapshot, density, format_report

__all__ = [
    "AnalyticsReport",
    "AnalyticsSnapshot",
    "CentralityAnalyzer",
    "CommunityDetector",
    "RankedNode",
    "build_snapshot",
    "density",
    "format_report",
]
