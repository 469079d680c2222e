from __future__ import annotations

import math

import numpy as np
import pytest

from tsp_heuristic import (
    InvalidInstance,
    euclidean_cost_matrix,
    instance_from_matrix,
    instance_from_points,
    tour_length,
)


def test_euclidean_matrix_values():
    D = euclidean_cost_matrix(np.array([[0.0, 0.0], [3.0, 4.0], [0.0, 10.0]]))
    assert D.shape == (3, 3)
    assert D[0, 1] == 5.0
    assert D[1, 0] == 5.0
    assert D[0, 2] == 10.0
    assert math.isclose(D[1, 2], math.hypot(3.0, 6.0))
    assert np.all(np.diag(D) == 0.0)


def test_instance_from_points_is_read_only():
    inst = instance_from_points([[0, 0], [10, 0]])
    assert inst.n == 2
    assert inst.dist(0, 1) == 10.0
    with pytest.raises(ValueError):
        inst.cost[0, 1] = 1.0


def test_tour_length_square():
    inst = instance_from_points([[0, 0], [10, 0], [10, 10], [0, 10]])
    assert tour_length(inst, [0, 1, 2, 3, 0]) == 40.0
    assert tour_length(inst, [0]) == 0.0


def test_rejects_single_node():
    with pytest.raises(InvalidInstance):
        instance_from_points([[1.0, 2.0]])
    with pytest.raises(InvalidInstance):
        instance_from_matrix([[0.0]])


def test_rejects_bad_matrices():
    with pytest.raises(InvalidInstance):
        instance_from_matrix([[0.0, 1.0, 2.0], [1.0, 0.0, 3.0]])
    with pytest.raises(InvalidInstance):
        instance_from_matrix([[0.0, 1.0], [2.0, 0.0]])
    with pytest.raises(InvalidInstance):
        instance_from_matrix([[0.0, -1.0], [-1.0, 0.0]])
    with pytest.raises(InvalidInstance):
        instance_from_matrix([[0.0, float("nan")], [float("nan"), 0.0]])
    with pytest.raises(InvalidInstance):
        instance_from_matrix([[1.0, 1.0], [1.0, 0.0]])


def test_rejects_bad_points():
    with pytest.raises(InvalidInstance):
        instance_from_points([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
    with pytest.raises(InvalidInstance):
        instance_from_points([["a", 0.0], [1.0, 1.0]])


def test_invalid_instance_is_value_error():
    # Callers that only know about ValueError still catch provider errors.
    with pytest.raises(ValueError):
        instance_from_points([])
