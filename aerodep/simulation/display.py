"""
Simulation Display Module

Terminal display formatting for propagation results and graph summaries.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from aerodep.core.models import SystemStatus

if TYPE_CHECKING:
    from aerodep.core.graph import GraphSummary
    from .propagation import PropagationResult


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class ConsoleDisplay:
    """Renders analysis output to stdout."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def colored(self, text: str, color: str, bold: bool = False) -> str:
        """Apply color if enabled."""
        if not self.use_color:
            return text
        style = Colors.BOLD if bold else ""
        return f"{style}{color}{text}{Colors.RESET}"

    def print_header(self, title: str) -> None:
        line = "=" * 70
        print(f"\n{self.colored(line, Colors.CYAN)}")
        print(self.colored(f"  {title}", Colors.CYAN, bold=True))
        print(self.colored(line, Colors.CYAN))

    def print_subheader(self, title: str) -> None:
        print(f"\n{self.colored(f'>> {title}', Colors.WHITE, bold=True)}")
        print(self.colored("-" * 50, Colors.GRAY))

    def error(self, message: str) -> None:
        print(self.colored(f"Error: {message}", Colors.RED))

    def display_propagation_result(self, result: "PropagationResult") -> None:
        names = result.component_names

        self.print_header("Failure Propagation Analysis")

        seeds = ", ".join(names.get(s, s) for s in result.seeds)
        print(f"\n  {self.colored('Sources:', Colors.CYAN)}       {seeds}")
        print(f"  {self.colored('Changes:', Colors.CYAN)}       {len(result.changes)}")
        print(f"  {self.colored('Duration:', Colors.CYAN)}      {result.duration_ms:.2f} ms")
        if result.truncated:
            print(f"  {self.colored('Stopped early by watchdog limit', Colors.YELLOW)}")
        if result.skipped:
            print(f"  {self.colored('Skipped refs:', Colors.YELLOW)}  {len(result.skipped)}")

        self.print_subheader("System Status")
        print(f"\n  {'System':<25} {'Status':<10}")
        print(f"  {'-' * 35}")
        ordered = sorted(
            result.final_statuses.items(),
            key=lambda item: (-item[1].numeric, names.get(item[0], item[0])),
        )
        for node_id, status in ordered:
            label = status.value.upper()
            text = self.colored(label, status.color) if status != SystemStatus.NOMINAL else label
            print(f"  {names.get(node_id, node_id):<25} {text}")

        self.print_subheader("Explanations")
        for line in result.explanations:
            print(f"  - {line}")
        print()

    def display_graph_summary(self, summary: "GraphSummary") -> None:
        self.print_subheader("Graph Summary")
        print(f"\n  Systems:             {summary.total_nodes}")
        print(f"  Dependencies:        {summary.total_edges}")
        print(f"  Redundancy Groups:   {summary.redundancy_groups}")
        acyclic = "yes" if summary.is_acyclic else f"no ({summary.cycle_count} cycles)"
        print(f"  Acyclic:             {acyclic}")
