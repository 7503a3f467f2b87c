#!/usr/bin/env python3
"""
Failure Propagation CLI

Runs a failure propagation analysis on the sample aircraft graph:

    Avionics        -> Electrical
    Autopilot       -> Avionics
    Flight Controls -> Hydraulics
    Flight Controls -> Electrical

Usage Examples:
    # Fail the electrical system
    python analyze_failures.py --fail Electrical

    # Make a dependency critical and put Electrical in a redundancy group
    python analyze_failures.py --fail Electrical --strength "Avionics:Electrical=critical" \\
        --group Electrical=ELEC_BUS

    # Machine-readable output
    python analyze_failures.py --fail Hydraulics --json
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import json
import logging
from typing import List, Optional

from aerodep.config import Settings
from aerodep.core import (
    AeroDepError,
    NodeNotFoundError,
    DependencyStrength,
    ExplanationPolicy,
    SystemStatus,
    SubsystemGraph,
    build_sample_graph,
)
from aerodep.simulation import AnalysisSession
from aerodep.simulation.display import ConsoleDisplay


# =============================================================================
# Argument Parsing
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="analyze_failures.py",
        description="Failure propagation analysis for aircraft subsystem dependencies.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    scenario = parser.add_argument_group("Scenario")
    scenario.add_argument(
        "--fail", "-f", action="append", default=[], metavar="SYSTEM",
        help="System to mark as FAILED (repeatable)",
    )
    scenario.add_argument(
        "--group", "-g", action="append", default=[], metavar="SYSTEM=LABEL",
        help="Assign a redundancy group (repeatable)",
    )
    scenario.add_argument(
        "--strength", "-s", action="append", default=[], metavar="DEPENDENT:DEPENDENCY=LEVEL",
        help="Set the strength of an existing dependency (repeatable)",
    )
    scenario.add_argument(
        "--policy", choices=[p.value for p in ExplanationPolicy], default=None,
        help="Explanation policy (default from AERODEP_EXPLANATION_POLICY)",
    )

    output = parser.add_argument_group("Output")
    output.add_argument("--json", action="store_true", help="Print JSON to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    output.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    return parser


# =============================================================================
# Scenario Setup
# =============================================================================

def resolve_node_id(graph: SubsystemGraph, name: str) -> str:
    if name in graph:
        return name
    node = graph.find_by_name(name)
    if node is None:
        raise NodeNotFoundError(name)
    return node.id


def apply_scenario(graph: SubsystemGraph, args: argparse.Namespace) -> None:
    for spec in args.group:
        name, _, label = spec.partition("=")
        graph.set_redundancy_group(resolve_node_id(graph, name), label)

    for spec in args.strength:
        pair, _, level = spec.partition("=")
        dependent, _, dependency = pair.partition(":")
        try:
            strength = DependencyStrength(level.strip().lower())
        except ValueError:
            raise AeroDepError(f"Unknown strength '{level}' in '{spec}'")
        from_id = resolve_node_id(graph, dependent)
        to_id = resolve_node_id(graph, dependency)
        if not graph.set_strength(from_id, to_id, strength):
            raise AeroDepError(f"No dependency {dependent} -> {dependency}")

    for name in args.fail:
        graph.set_status(resolve_node_id(graph, name), SystemStatus.FAILED)


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        ConsoleDisplay(use_color=False).error(str(e))
        return 1
    if args.policy:
        settings.explanation_policy = ExplanationPolicy(args.policy)

    log_level = (
        logging.WARNING if args.quiet
        else logging.DEBUG if args.verbose
        else settings.log_level_value
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    display = ConsoleDisplay(use_color=settings.use_color)
    graph = build_sample_graph()

    try:
        apply_scenario(graph, args)
    except AeroDepError as e:
        display.error(str(e))
        return 1

    session = AnalysisSession(graph, settings)
    result = session.run_analysis()
    if result is None:
        display.error("Mark at least one system as Failed (--fail) before running analysis.")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif not args.quiet:
        display.display_propagation_result(result)
        display.display_graph_summary(graph.summary())
    else:
        for line in result.explanations:
            print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
