#!/usr/bin/env python3
"""Social analytics CLI - analyze relationship lists from the terminal.

Usage:
    python -m social_analytics analyze connections.csv
    python -m social_analytics analyze --sample --json
    python -m social_analytics layout connections.csv --steps 500 --seed 7
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from .analysis.report import AnalyticsReport, format_report
from .errors import EmptyGraphError, SocialAnalyticsError
from .graph.builder import SAMPLE_DATA, GraphBuilder
from .graph.models import Graph
from .layout.simulator import LayoutSimulator
from .logging_config import configure_logging, get_logger
from .settings import get_settings

logger = get_logger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="social-analytics",
        description="Centrality, community and layout analysis for relationship lists",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Print degree, betweenness and community results")
    _add_input_arguments(analyze)
    analyze.add_argument("--json", action="store_true", help="Print the snapshot as JSON")

    layout = subparsers.add_parser("layout", help="Run the force-directed layout headlessly")
    _add_input_arguments(layout)
    layout.add_argument("--steps", type=int, default=500, help="Number of simulation steps (default: 500)")
    layout.add_argument("--seed", type=int, default=None, help="Seed for the initial placement")

    return parser.parse_args(args)


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file", nargs="?", help="Relationship file, one 'Source,Target' per line")
    source.add_argument("--sample", action="store_true", help="Use the built-in sample network")


def load_graph(args: argparse.Namespace) -> Graph:
    """Build the graph for the selected input.

    Raises:
        InputReadError: If the file cannot be read
        EmptyGraphError: If no line produced a relationship
    """
    builder = GraphBuilder()
    graph = builder.parse(SAMPLE_DATA) if args.sample else builder.parse_file(args.file)
    if graph.is_empty:
        raise EmptyGraphError("No valid connections found. Expected lines like 'Source,Target'.")
    return graph


def run_layout(graph: Graph, steps: int, seed: int | None) -> dict[str, Any]:
    """Run a fixed number of layout steps and report final positions."""
    layout_settings = get_settings().layout
    if seed is not None:
        layout_settings = layout_settings.model_copy(update={"random_seed": seed})

    simulator = LayoutSimulator(layout_settings)
    simulator.load(graph, AnalyticsReport().build(graph))
    for _ in range(steps):
        simulator.step()

    return {
        "steps": simulator.step_count,
        "kinetic_energy": simulator.kinetic_energy(),
        "nodes": [
            {"id": v.id, "x": round(v.x, 3), "y": round(v.y, 3), "radius": v.radius, "color": v.color}
            for v in simulator.node_views()
        ],
    }


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Logs go to stderr so stdout stays machine-readable
    log_level = logging.DEBUG if args.debug else None
    configure_logging("cli", log_level, stream=sys.stderr)

    try:
        graph = load_graph(args)

        if args.command == "analyze":
            snapshot = AnalyticsReport().build(graph)
            if args.json:
                print(snapshot.model_dump_json(indent=2))
            else:
                print(format_report(snapshot))
        else:
            print(json.dumps(run_layout(graph, args.steps, args.seed), indent=2))

    except SocialAnalyticsError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
