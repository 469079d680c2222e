from __future__ import annotations

import io
import sys
from typing import TYPE_CHECKING, Optional, Sequence

from .core import Instance, InvalidTour

if TYPE_CHECKING:
    from .orchestrator import HeuristicResult


def validate_tour(instance: Instance, tour: Sequence[int]) -> None:
    """
    Basic feasibility checks.
    - Length: n+1 entries, first == last.
    - Coverage: every node 0..n-1 appears exactly once among the first n.
    """
    n = instance.n
    if len(tour) != n + 1:
        raise InvalidTour(f"Tour has {len(tour)} entries, expected {n + 1}")
    if tour[0] != tour[-1]:
        raise InvalidTour(f"Tour is not closed: starts at {tour[0]}, ends at {tour[-1]}")
    seen = [0] * n
    for node in tour[:-1]:
        if node < 0 or node >= n:
            raise InvalidTour(f"Node id {node} out of range")
        seen[node] += 1
    for v in range(n):
        if seen[v] != 1:
            raise InvalidTour(f"Node {v} seen {seen[v]} times")


def format_tour(tour: Sequence[int]) -> str:
    """Dash-joined node sequence, e.g. 0-2-1-3-0."""
    return "-".join(str(v) for v in tour)


def emit_solution(result: "HeuristicResult", out: Optional[io.TextIOBase] = None) -> None:
    """
    Emit a solve result to stdout (or provided stream):
      Feasible solution found with objValue <v> with solving time (sec) <t>
      Solution (Tour): 0 3 1 2 0
    """
    out_stream = sys.stdout if out is None else out
    status = "Feasible solution found" if result.converged else "Time limit reached"
    out_stream.write(
        f"  {status} with objValue {result.obj_value:g} with solving time (sec) {result.solving_time:g}\n"
    )
    out_stream.write(f"  Solution (Tour): {' '.join(str(v) for v in result.tour)}\n")
    out_stream.flush()
