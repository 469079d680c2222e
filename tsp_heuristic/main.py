from __future__ import annotations

import sys

from .core import TSPError
from .io import read_instance
from .orchestrator import solve
from .solution import emit_solution


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    if len(argv) not in (1, 2):
        print("Usage: tsp-heuristic instance.dat [time_limit]", file=sys.stderr)
        return 1
    instance_path = argv[0]
    time_limit = None
    if len(argv) == 2:
        try:
            time_limit = float(argv[1])
        except ValueError:
            print("time_limit must be a number (seconds)", file=sys.stderr)
            return 1

    try:
        instance = read_instance(instance_path)
    except TSPError as exc:
        print(f"Error reading instance: {exc}", file=sys.stderr)
        return 1

    print(f"Processing instance: {instance_path}")
    try:
        result = solve(instance, time_limit_sec=time_limit)
    except TSPError as exc:
        print(f"Error solving model: {exc}", file=sys.stderr)
        return 1
    emit_solution(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
