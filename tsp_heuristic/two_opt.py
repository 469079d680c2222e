from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .core import Instance, tour_length


@dataclass
class TwoOptConfig:
    # Score candidates by the 4 edges a reversal touches instead of re-summing
    # the whole tour. Same exploration order and same accepted move either way.
    use_delta: bool = True
    eps: float = 1e-9


def long_edge_cuts(instance: Instance, tour: Sequence[int]) -> List[Tuple[int, float]]:
    """
    Cut positions of the tour, longest edge first.
    Cut i removes edge (tour[i-1], tour[i]); i runs over 1..n-2 so the
    start node is never moved. Ties keep ascending position order.
    """
    n = len(tour) - 1
    D = instance.cost
    cuts = [(i, float(D[tour[i - 1], tour[i]])) for i in range(1, n - 1)]
    cuts.sort(key=lambda c: c[1], reverse=True)
    return cuts


def reversal_delta(instance: Instance, tour: Sequence[int], i: int, j: int) -> float:
    """Length change of reversing tour[i..j] on a symmetric matrix."""
    D = instance.cost
    a, b = tour[i - 1], tour[i]
    c, d = tour[j], tour[j + 1]
    old = float(D[a, b]) + float(D[c, d])
    new = float(D[a, c]) + float(D[b, d])
    return new - old


def two_opt_long_edge_first(
    instance: Instance,
    tour: Sequence[int],
    cfg: Optional[TwoOptConfig] = None,
) -> Tuple[List[int], bool]:
    """
    One 2-opt round, long edges first, first improvement.
    For each cut i (longest removed edge first) and each j in i+1..n-1 the
    segment tour[i..j] is reversed; the first candidate shorter than the
    current tour by more than cfg.eps is returned with True. The input is never modified.
    Returns (copy of tour, False) when no reversal improves.
    """
    if cfg is None:
        cfg = TwoOptConfig()
    current = list(tour)
    n = len(current) - 1
    best = tour_length(instance, current)

    for i, _length in long_edge_cuts(instance, current):
        for j in range(i + 1, n):
            if cfg.use_delta:
                if reversal_delta(instance, current, i, j) < -cfg.eps:
                    candidate = current[:i] + current[i : j + 1][::-1] + current[j + 1 :]
                    return candidate, True
            else:
                candidate = current[:i] + current[i : j + 1][::-1] + current[j + 1 :]
                if tour_length(instance, candidate) < best - cfg.eps:
                    return candidate, True
    return current, False


def two_opt_to_fixpoint(
    instance: Instance,
    tour: Sequence[int],
    cfg: Optional[TwoOptConfig] = None,
    deadline: Optional[float] = None,
    on_improve: Optional[Callable[[List[int]], None]] = None,
) -> Tuple[List[int], int, bool]:
    """
    Repeat two_opt_long_edge_first until it stops improving.
    deadline is a time.perf_counter() value checked between rounds.
    Returns (tour, accepted_rounds, converged).
    """
    current = list(tour)
    rounds = 0
    while True:
        if deadline is not None and time.perf_counter() >= deadline:
            return current, rounds, False
        current, improved = two_opt_long_edge_first(instance, current, cfg)
        if not improved:
            return current, rounds, True
        rounds += 1
        if on_improve is not None:
            on_improve(current)
