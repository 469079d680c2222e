from __future__ import annotations

import math

import numpy as np
import pytest

from tsp_heuristic import (
    Instance,
    TwoOptConfig,
    build_initial_tour,
    instance_from_points,
    tour_length,
    two_opt_long_edge_first,
    two_opt_to_fixpoint,
    validate_tour,
)
from tsp_heuristic.two_opt import long_edge_cuts

CROSSED = [[0, 0], [10, 10], [10, 0], [0, 10]]


def random_instance(n: int, seed: int) -> Instance:
    rng = np.random.default_rng(seed)
    return instance_from_points(rng.uniform(0.0, 100.0, size=(n, 2)))


def random_tour(n: int, seed: int) -> list[int]:
    rng = np.random.default_rng(seed + 1000)
    inner = [int(v) for v in rng.permutation(np.arange(1, n))]
    return [0] + inner + [0]


def best_single_reversal(inst: Instance, tour: list[int]) -> float:
    """Shortest tour reachable by reversing any tour[i..j], 1 <= i < j <= n-1."""
    n = len(tour) - 1
    best = tour_length(inst, tour)
    for i in range(1, n - 1):
        for j in range(i + 1, n):
            cand = tour[:i] + tour[i : j + 1][::-1] + tour[j + 1 :]
            best = min(best, tour_length(inst, cand))
    return best


def test_crossed_square_uncrossed_in_one_move():
    inst = instance_from_points(CROSSED)
    tour = [0, 1, 2, 3, 0]
    assert math.isclose(tour_length(inst, tour), 20.0 + 2 * math.hypot(10, 10))
    new_tour, improved = two_opt_long_edge_first(inst, tour)
    assert improved
    assert new_tour == [0, 2, 1, 3, 0]
    assert math.isclose(tour_length(inst, new_tour), 40.0)
    # input untouched
    assert tour == [0, 1, 2, 3, 0]


def test_crossed_square_full_recompute_same_move():
    inst = instance_from_points(CROSSED)
    new_tour, improved = two_opt_long_edge_first(inst, [0, 1, 2, 3, 0], TwoOptConfig(use_delta=False))
    assert improved
    assert new_tour == [0, 2, 1, 3, 0]


def test_square_perimeter_is_local_optimum():
    inst = instance_from_points([[0, 0], [10, 0], [10, 10], [0, 10]])
    tour = [0, 1, 2, 3, 0]
    new_tour, improved = two_opt_long_edge_first(inst, tour)
    assert not improved
    assert new_tour == tour


def test_two_nodes_noop():
    inst = instance_from_points([[0, 0], [1, 1]])
    assert long_edge_cuts(inst, [0, 1, 0]) == []
    new_tour, improved = two_opt_long_edge_first(inst, [0, 1, 0])
    assert not improved
    assert new_tour == [0, 1, 0]


def test_cuts_sorted_longest_first():
    inst = instance_from_points([[0, 0], [1, 0], [5, 0], [6, 0], [6, 1]])
    cuts = long_edge_cuts(inst, [0, 1, 2, 3, 4, 0])
    assert [i for i, _ in cuts] == [2, 1, 3]
    lengths = [length for _, length in cuts]
    assert lengths == sorted(lengths, reverse=True)


@pytest.mark.parametrize("seed", range(6))
def test_improvement_is_strict(seed):
    inst = random_instance(15, seed)
    tour = random_tour(15, seed)
    new_tour, improved = two_opt_long_edge_first(inst, tour)
    validate_tour(inst, new_tour)
    if improved:
        assert tour_length(inst, new_tour) < tour_length(inst, tour)
    else:
        assert new_tour == tour


@pytest.mark.parametrize("seed", range(4))
def test_no_improvement_means_no_better_reversal(seed):
    inst = random_instance(12, seed)
    tour, rounds, converged = two_opt_to_fixpoint(inst, random_tour(12, seed))
    assert converged
    assert rounds > 0
    assert best_single_reversal(inst, tour) >= tour_length(inst, tour) - 1e-6


def test_fixpoint_is_idempotent():
    inst = random_instance(20, 11)
    tour, _, _ = two_opt_to_fixpoint(inst, build_initial_tour(inst))
    again, improved = two_opt_long_edge_first(inst, tour)
    assert not improved
    assert again == tour


@pytest.mark.parametrize("seed", range(5))
def test_delta_matches_full_recompute(seed):
    # Both evaluation modes must accept the same sequence of tours.
    inst = random_instance(14, seed)
    fast = random_tour(14, seed)
    slow = list(fast)
    for _ in range(200):
        fast, f_improved = two_opt_long_edge_first(inst, fast, TwoOptConfig(use_delta=True))
        slow, s_improved = two_opt_long_edge_first(inst, slow, TwoOptConfig(use_delta=False))
        assert f_improved == s_improved
        assert fast == slow
        if not f_improved:
            break
    else:
        pytest.fail("refinement did not converge")


def test_fixpoint_respects_deadline():
    inst = random_instance(20, 5)
    start = random_tour(20, 5)
    tour, rounds, converged = two_opt_to_fixpoint(inst, start, deadline=0.0)
    assert not converged
    assert rounds == 0
    assert tour == start


def test_fixpoint_reports_each_accepted_move():
    inst = random_instance(10, 2)
    seen = []
    tour, rounds, converged = two_opt_to_fixpoint(inst, random_tour(10, 2), on_improve=seen.append)
    assert converged
    assert len(seen) == rounds
    assert seen[-1] == tour
    lengths = [tour_length(inst, t) for t in seen]
    assert all(b < a for a, b in zip(lengths, lengths[1:]))
