"""
Graph construction for relationship analysis
"""

from .builder import SAMPLE_DATA, GraphBuilder, parse
from .models import Edge, Graph

__all__ = ["Edge", "Graph", "GraphBuilder", "SAMPLE_DATA", "parse"]
