from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np

from .core import Instance, InvalidInstance, instance_from_points


def read_points(path: str | Path) -> np.ndarray:
    """
    Read a .dat coordinate file: node count n, then n "x y" pairs.
    Tokens are whitespace separated; line breaks are not significant.
    Returns an (n, 2) float64 array.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidInstance(f"Cannot open file {path}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidInstance(f"Instance file {path} is not text: {exc}") from exc

    tokens = text.split()
    if not tokens:
        raise InvalidInstance(f"Empty instance file {path}")
    try:
        n = int(tokens[0])
    except ValueError as exc:
        raise InvalidInstance(f"Bad node count {tokens[0]!r} in {path}") from exc
    if n <= 1:
        raise InvalidInstance("Invalid number of nodes")

    coords = tokens[1 : 1 + 2 * n]
    if len(coords) < 2 * n:
        raise InvalidInstance(f"Error reading coordinates in {path}")
    try:
        values = [float(tok) for tok in coords]
    except ValueError as exc:
        raise InvalidInstance(f"Error reading coordinates in {path}") from exc
    return np.array(values, dtype=np.float64).reshape(n, 2)


def read_instance(path: str | Path) -> Instance:
    """Read a .dat file and build its Euclidean distance matrix."""
    return instance_from_points(read_points(path))


def write_points(path: str | Path, points: np.ndarray | List[List[float]]) -> None:
    """Write points in the .dat layout read by read_points."""
    pts = np.asarray(points, dtype=np.float64)
    lines = [str(pts.shape[0])]
    for x, y in pts.tolist():
        lines.append(f"{x!r} {y!r}")
    Path(path).write_text("\n".join(lines) + "\n")
