"""
Graph builder for comma-separated relationship text.

Input format, one relationship per line:

    Source,Target[,ignored extra fields...]

Parsing is tolerant: blank lines, lines with fewer than two fields and lines
whose first or second field is empty after trimming are dropped silently.
Input that yields no relationship produces an empty Graph, never an error.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..errors import InputReadError
from .models import Edge, Graph

logger = logging.getLogger(__name__)

# Line breaks are CR, LF and CRLF only
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Demonstration network for --sample and AppState.load_sample()
SAMPLE_DATA = """Alice,Bob
Alice,Charlie
Bob,David
Charlie,David
David,Eve
Eve,Frank
Frank,Alice
Charlie,Eve
Bob,Frank"""


class GraphBuilder:
    """Builds immutable Graphs from raw relationship text"""

    def parse(self, text: str) -> Graph:
        """Parse relationship text into a Graph.

        Node ids are registered in first-seen order; that order fixes each
        node's insertion index.

        Args:
            text: Raw relationship text (CR/LF tolerant)

        Returns:
            Graph with nodes in first-seen order; empty when no line qualifies
        """
        # dict keys double as an order-preserving unique set
        seen: dict[str, None] = {}
        edges: list[Edge] = []
        dropped = 0

        for line in _LINE_BREAK.split(text):
            if not line.strip():
                continue

            parts = line.split(",")
            if len(parts) < 2:
                dropped += 1
                continue

            source = parts[0].strip()
            target = parts[1].strip()
            if not source or not target:
                dropped += 1
                continue

            seen.setdefault(source)
            seen.setdefault(target)
            edges.append(Edge(source, target))

        if dropped:
            logger.debug(f"Dropped {dropped} malformed relationship lines")

        graph = Graph(nodes=tuple(seen), edges=tuple(edges))
        logger.info(f"Parsed graph with {graph.node_count} nodes and {graph.edge_count} edges")
        return graph

    def parse_file(self, path: str | Path) -> Graph:
        """Read a UTF-8 relationship file (with or without BOM) and parse it.

        Raises:
            InputReadError: If the file cannot be read or decoded
        """
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(f"Could not read relationships from {path}: {e}") from e
        return self.parse(text)


def parse(text: str) -> Graph:
    """Parse relationship text with a default GraphBuilder."""
    return GraphBuilder().parse(text)
