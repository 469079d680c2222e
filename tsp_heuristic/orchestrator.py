from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .constructor import build_initial_tour
from .core import Instance, tour_length
from .solution import validate_tour
from .two_opt import TwoOptConfig, two_opt_to_fixpoint


@dataclass(frozen=True)
class HeuristicResult:
    tour: Tuple[int, ...]
    obj_value: float
    solving_time: float
    rounds: int = 0
    converged: bool = True


def solve(
    instance: Instance,
    two_opt_config: Optional[TwoOptConfig] = None,
    time_limit_sec: Optional[float] = None,
    on_improve: Optional[Callable[[List[int], float], None]] = None,
) -> HeuristicResult:
    """
    Greedy construction followed by long-edge-first 2-opt until no move improves.
    on_improve(tour, length) fires for the constructed tour and after every
    accepted move. With time_limit_sec set, refinement stops between rounds
    once the limit has passed and the last accepted tour is returned with
    converged=False. Without it the only exit is convergence.
    """
    start = time.perf_counter()
    deadline = None if time_limit_sec is None else start + time_limit_sec

    tour = build_initial_tour(instance)

    report = None
    if on_improve is not None:

        def report(t: List[int]) -> None:
            on_improve(list(t), tour_length(instance, t))

        report(tour)

    tour, rounds, converged = two_opt_to_fixpoint(
        instance, tour, two_opt_config, deadline=deadline, on_improve=report
    )
    validate_tour(instance, tour)
    obj_value = tour_length(instance, tour)
    solving_time = time.perf_counter() - start
    return HeuristicResult(
        tour=tuple(tour),
        obj_value=obj_value,
        solving_time=solving_time,
        rounds=rounds,
        converged=converged,
    )


def solve_file(
    path: str | Path,
    two_opt_config: Optional[TwoOptConfig] = None,
    time_limit_sec: Optional[float] = None,
    on_improve: Optional[Callable[[List[int], float], None]] = None,
) -> HeuristicResult:
    """Convenience wrapper that reads a .dat instance then solves."""
    from .io import read_instance

    instance = read_instance(path)
    return solve(
        instance,
        two_opt_config=two_opt_config,
        time_limit_sec=time_limit_sec,
        on_improve=on_improve,
    )
