from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from .io import write_points


@dataclass(frozen=True)
class GeneratorConfig:
    """Drilling board layout, units in mm."""

    width: float = 100.0
    height: float = 100.0
    margin: float = 5.0  # corner holes sit this far from the board edge
    min_dist: float = 3.0  # minimum spacing between any two holes
    max_attempts: int = 10000  # per point


DEFAULT_SIZES = (10, 20, 30, 50, 70, 80, 100)
INSTANCES_PER_SIZE = 5


def generate_points(
    n: int,
    rng: np.random.Generator,
    cfg: Optional[GeneratorConfig] = None,
) -> np.ndarray:
    """
    Four fixed corner holes, then uniform holes inside the corners' rectangle,
    rejecting any closer than min_dist to an existing one.
    Returns an (n, 2) array; raises RuntimeError when a point cannot be placed.
    """
    cfg = cfg or GeneratorConfig()
    m = cfg.margin
    points: List[List[float]] = [
        [m, m],
        [cfg.width - m, m],
        [cfg.width - m, cfg.height - m],
        [m, cfg.height - m],
    ]
    if n < len(points):
        raise ValueError(f"n must be at least {len(points)} (corner holes), got {n}")

    placed = np.array(points, dtype=np.float64)
    while placed.shape[0] < n:
        for _ in range(cfg.max_attempts):
            px = rng.uniform(m, cfg.width - m)
            py = rng.uniform(m, cfg.height - m)
            d = np.hypot(placed[:, 0] - px, placed[:, 1] - py)
            if not np.any(d < cfg.min_dist):
                placed = np.vstack([placed, [px, py]])
                break
        else:
            raise RuntimeError("Failed to place a point. Try reducing n or MIN_DIST.")
    return placed


def generate_dataset(
    out_dir: str | Path,
    sizes: Sequence[int] = DEFAULT_SIZES,
    per_size: int = INSTANCES_PER_SIZE,
    seed: Optional[int] = None,
    cfg: Optional[GeneratorConfig] = None,
) -> List[Path]:
    """Write instance_<n>_<k>.dat files (k = 1..per_size) and return their paths."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(seed)
    written = []
    for n in sizes:
        for k in range(1, per_size + 1):
            path = out / f"instance_{n}_{k}.dat"
            write_points(path, generate_points(n, rng, cfg))
            written.append(path)
    return written
