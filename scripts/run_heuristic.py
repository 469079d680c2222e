#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import sqlite3
import sys
import time
from pathlib import Path

from tsp_heuristic import (
    TSPError,
    format_tour,
    read_instance,
    solve,
    validate_tour,
)

CSV_HEADER = ["instance", "n", "obj_value", "solving_time", "tour"]


def ensure_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS runs (
            run_id INTEGER PRIMARY KEY AUTOINCREMENT,
            dataset TEXT,
            instance_filter TEXT,
            time_limit_s REAL,
            ts DATETIME DEFAULT CURRENT_TIMESTAMP,
            notes TEXT
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS solver_instances (
            run_id INTEGER,
            instance TEXT,
            n INTEGER,
            obj_value REAL,
            tour_text TEXT,
            time_ms REAL,
            converged INTEGER,
            valid INTEGER
        )
        """
    )
    conn.commit()


def select_instances(data_dir: Path, instance_filter: str) -> list[Path]:
    """Regular *.dat files in data_dir, optionally restricted to instance_<filter>_*."""
    files = [p for p in sorted(data_dir.glob("*.dat")) if p.is_file()]
    if instance_filter != "all":
        key = f"instance_{instance_filter}_"
        files = [p for p in files if key in p.name]
    return files


def run_one_instance(
    dat_path: Path,
    time_limit: float | None = None,
) -> tuple[int | None, float | None, str, float | None, float, bool, int]:
    """
    Solve a single instance.
    Returns (n, obj_value, tour_text, solving_time, time_ms, converged, valid_flag).
    solving_time is the solver's own construction + refinement time (seconds);
    time_ms is wall clock around reading and solving.
    Failures are reported in tour_text as "ERROR: ..." with valid_flag 0.
    """
    start = time.time()
    n = None
    solving_time = None
    try:
        instance = read_instance(dat_path)
        n = instance.n
        result = solve(instance, time_limit_sec=time_limit)
        validate_tour(instance, result.tour)
        obj_value = result.obj_value
        tour_text = format_tour(result.tour)
        solving_time = result.solving_time
        converged = result.converged
        valid = 1
    except TSPError as exc:
        obj_value = None
        tour_text = f"ERROR: {exc}"
        converged = False
        valid = 0
    time_ms = (time.time() - start) * 1000.0
    return n, obj_value, tour_text, solving_time, time_ms, converged, valid


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the greedy + 2-opt heuristic over a folder of .dat instances.")
    parser.add_argument("filter", nargs="?", default="all", help='Instance size to run, e.g. "10", or "all"')
    parser.add_argument("--data", default="./data", help="Folder containing .dat files")
    parser.add_argument("--csv", default=None, help="CSV report path (default: <data>/solution/results_<filter>.csv)")
    parser.add_argument("--db", default=None, help="Optional SQLite DB path to log the run into")
    parser.add_argument("--time-limit", type=float, default=None, help="Optional refinement deadline per instance (seconds)")
    parser.add_argument("--notes", default="", help="Optional notes for the run")
    args = parser.parse_args(argv)

    data_dir = Path(args.data)
    dat_files = select_instances(data_dir, args.filter)
    if not dat_files:
        print(f"No .dat files matching '{args.filter}' found in {data_dir}", file=sys.stderr)
        return 1

    csv_path = Path(args.csv) if args.csv else data_dir / "solution" / f"results_{args.filter}.csv"
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    conn = None
    run_id = 0
    if args.db:
        conn = sqlite3.connect(args.db)
        ensure_schema(conn)
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO runs(dataset, instance_filter, time_limit_s, notes) VALUES (?, ?, ?, ?)",
            (str(data_dir), args.filter, args.time_limit, args.notes),
        )
        run_id = cur.lastrowid
        conn.commit()

    with csv_path.open("w", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(CSV_HEADER)
        for dat_path in dat_files:
            print(f"Processing instance: {dat_path.name}")
            n, obj_value, tour_text, solving_time, time_ms, converged, valid = run_one_instance(
                dat_path, time_limit=args.time_limit
            )
            if valid:
                print(f"  objValue {obj_value:g} solving time (sec) {solving_time:g}")
                print(f"  Solution (Tour): {tour_text.replace('-', ' ')}")
                writer.writerow([dat_path.name, n, obj_value, solving_time, tour_text])
                fh.flush()
            if conn is not None:
                conn.execute(
                    """
                    INSERT INTO solver_instances(run_id, instance, n, obj_value, tour_text, time_ms, converged, valid)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (run_id, dat_path.name, n, obj_value, tour_text, time_ms, int(converged), valid),
                )
                conn.commit()
            print(
                f"[run {run_id}] {dat_path.name}: obj={obj_value} valid={valid} time_ms={time_ms:.1f}",
                file=sys.stderr,
            )
            if not valid:
                print(f"  {tour_text}", file=sys.stderr)

    if conn is not None:
        conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
