#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from tsp_heuristic.generator import (
    DEFAULT_SIZES,
    INSTANCES_PER_SIZE,
    GeneratorConfig,
    generate_dataset,
)


def parse_int_list_csv(s: str) -> list[int]:
    out = []
    for tok in s.split(","):
        tok = tok.strip()
        if tok:
            out.append(int(tok))
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate drilling-board TSP instances as .dat files.")
    parser.add_argument("--out", default="./data", help="Output folder")
    parser.add_argument("--sizes", default=",".join(str(n) for n in DEFAULT_SIZES), help="Comma-separated node counts")
    parser.add_argument("--per-size", type=int, default=INSTANCES_PER_SIZE, help="Instances per node count")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    parser.add_argument("--min-dist", type=float, default=GeneratorConfig.min_dist, help="Minimum hole spacing (mm)")
    args = parser.parse_args(argv)

    try:
        sizes = parse_int_list_csv(args.sizes)
        paths = generate_dataset(
            args.out,
            sizes=sizes,
            per_size=args.per_size,
            seed=args.seed,
            cfg=GeneratorConfig(min_dist=args.min_dist),
        )
    except (ValueError, RuntimeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    for p in paths:
        print(f"Generated {p}")
    print("All instances generated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
