"""
Root test configuration and fixtures for the social analytics engine.

This conftest.py provides common fixtures for all test categories:
- unit/graph/: Parsing and graph model tests
- unit/analysis/: Centrality, community and report tests
- unit/layout/: Simulator, styling and ticker tests

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import random
import sys
from pathlib import Path

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from social_analytics.graph.builder import GraphBuilder  # noqa: E402
from social_analytics.graph.models import Edge, Graph  # noqa: E402
from social_analytics.settings import LayoutSettings, get_settings  # noqa: E402

SQUARE_TEXT = """Alice,Bob
Alice,Charlie
Bob,David
Charlie,David"""


def make_graph(*pairs: tuple[str, str]) -> Graph:
    """Build a Graph from (source, target) pairs, nodes in first-seen order."""
    nodes: dict[str, None] = {}
    for source, target in pairs:
        nodes.setdefault(source)
        nodes.setdefault(target)
    return Graph(nodes=tuple(nodes), edges=tuple(Edge(s, t) for s, t in pairs))


@pytest.fixture
def graph_factory():
    """Factory building Graphs directly from edge pairs."""
    return make_graph


@pytest.fixture
def builder():
    """Create a GraphBuilder."""
    return GraphBuilder()


@pytest.fixture
def square_graph(builder):
    """Four people connected in a cycle: Alice-Bob-David-Charlie-Alice."""
    return builder.parse(SQUARE_TEXT)


@pytest.fixture
def layout_settings():
    """Default layout constants with a fixed placement seed."""
    return LayoutSettings(random_seed=1234)


@pytest.fixture
def rng():
    """Deterministic random source for simulators."""
    return random.Random(1234)


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch):
    """Isolate tests from SOCIAL_ANALYTICS_* env vars and the cached Settings."""
    for key in list(os.environ):
        if key.upper().startswith("SOCIAL_ANALYTICS_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
