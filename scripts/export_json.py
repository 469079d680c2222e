#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sqlite3
from pathlib import Path

from tsp_heuristic import TSPError
from tsp_heuristic.io import read_points


def export_run(conn: sqlite3.Connection, run_id: int) -> dict:
    cur = conn.cursor()
    cur.execute("SELECT dataset, instance_filter, time_limit_s, notes FROM runs WHERE run_id=?", (run_id,))
    row = cur.fetchone()
    if row is None:
        raise ValueError(f"run_id {run_id} not found")
    dataset, instance_filter, time_limit_s, notes = row
    cur.execute(
        """
        SELECT instance, n, obj_value, tour_text, time_ms, converged, valid
        FROM solver_instances
        WHERE run_id=?
        ORDER BY rowid
        """,
        (run_id,),
    )
    instances = []
    for inst, n, obj_value, tour_text, time_ms, converged, valid in cur.fetchall():
        tour = []
        if valid:
            tour = [int(v) for v in tour_text.split("-")]
        coords = {}
        try:
            pts = read_points(Path(dataset) / inst)
            coords = {str(i): (float(x), float(y)) for i, (x, y) in enumerate(pts.tolist())}
        except TSPError:
            pass  # instance file moved or unreadable; export results only
        instances.append(
            {
                "instance": inst,
                "n": n,
                "obj_value": obj_value,
                "tour": tour,
                "error": None if valid else tour_text,
                "converged": bool(converged),
                "valid": bool(valid),
                "time_ms": time_ms,
                "coords": coords,
            }
        )
    return {
        "run_id": run_id,
        "dataset": dataset,
        "instance_filter": instance_filter,
        "time_limit_s": time_limit_s,
        "notes": notes,
        "instances": instances,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export run results to JSON.")
    parser.add_argument("--db", required=True, help="SQLite DB path")
    parser.add_argument("--run-id", type=int, required=True, help="Run ID to export")
    parser.add_argument("--out", required=True, help="Output JSON file")
    args = parser.parse_args(argv)

    conn = sqlite3.connect(args.db)
    data = export_run(conn, args.run_id)
    Path(args.out).write_text(json.dumps(data, indent=2))
    conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
