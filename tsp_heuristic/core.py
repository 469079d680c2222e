from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


class TSPError(Exception):
    """Base class for solver errors."""


class InvalidInstance(TSPError, ValueError):
    """Instance data is unusable (too few nodes, bad matrix, unreadable file)."""


class ConstructionInvariantViolation(TSPError, RuntimeError):
    """Greedy construction did not end with exactly two path endpoints."""


class InvalidTour(TSPError, ValueError):
    """Tour is not a closed permutation of the instance nodes."""


@dataclass(frozen=True, eq=False)
class Instance:
    """
    Symmetric TSP instance.

    Node ids are 0..n-1. cost is an (n, n) float64 matrix with a zero
    diagonal. The solver never writes to it, so one Instance can be shared
    by any number of solves.
    """

    n: int
    cost: np.ndarray

    def dist(self, i: int, j: int) -> float:
        return float(self.cost[i, j])


def euclidean_cost_matrix(points: np.ndarray) -> np.ndarray:
    """Unrounded pairwise Euclidean distances for an (n, 2) coordinate array."""
    pts = np.asarray(points, dtype=np.float64)
    n = pts.shape[0]
    D = np.zeros((n, n), dtype=np.float64)
    x = pts[:, 0]
    y = pts[:, 1]
    for i in range(n):
        D[i] = np.hypot(x[i] - x, y[i] - y)
    np.fill_diagonal(D, 0.0)
    return D


def instance_from_matrix(matrix: Sequence[Sequence[float]] | np.ndarray) -> Instance:
    """Build an Instance from an explicit cost matrix after checking its shape and values."""
    try:
        D = np.array(matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInstance(f"Cost matrix is not numeric: {exc}") from exc
    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise InvalidInstance(f"Cost matrix must be square, got shape {D.shape}")
    n = D.shape[0]
    if n <= 1:
        raise InvalidInstance("Invalid number of nodes")
    if not np.all(np.isfinite(D)):
        raise InvalidInstance("Cost matrix contains non-finite values")
    if np.any(D < 0):
        raise InvalidInstance("Cost matrix contains negative values")
    if not np.allclose(D, D.T, rtol=0.0, atol=1e-9):
        raise InvalidInstance("Cost matrix is not symmetric")
    if np.any(np.diag(D) != 0):
        raise InvalidInstance("Cost matrix diagonal must be zero")
    D.setflags(write=False)
    return Instance(n=n, cost=D)


def instance_from_points(points: Sequence[Sequence[float]] | np.ndarray) -> Instance:
    """Build a Euclidean Instance from 2D points."""
    try:
        pts = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInstance(f"Coordinates are not numeric: {exc}") from exc
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise InvalidInstance(f"Points must have shape (n, 2), got {pts.shape}")
    if pts.shape[0] <= 1:
        raise InvalidInstance("Invalid number of nodes")
    if not np.all(np.isfinite(pts)):
        raise InvalidInstance("Coordinates contain non-finite values")
    D = euclidean_cost_matrix(pts)
    D.setflags(write=False)
    return Instance(n=pts.shape[0], cost=D)


def tour_length(instance: Instance, tour: Sequence[int]) -> float:
    """Sum of consecutive edge costs over the whole sequence."""
    if len(tour) < 2:
        return 0.0
    idx = np.asarray(tour, dtype=np.intp)
    return float(instance.cost[idx[:-1], idx[1:]].sum())
