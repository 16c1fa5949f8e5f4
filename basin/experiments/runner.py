from __future__ import annotations
import argparse, csv
from dataclasses import dataclass
from pathlib import Path
from typing import List

from basin.domains.valley import Valley, load_map
from basin.heuristics.manhattan import HEURISTICS
from basin.search.a_star import a_star
from basin.search.bfs import bfs

HEADER = [
    "algorithm","heuristic","input","width","height","period","g",
    "expanded","generated","time_sec",
    "peak_open","peak_closed","improvements","tie_break","termination",
]

@dataclass
class Instance:
    name: str
    valley: Valley

def solve_a_star(valley: Valley, heuristic: str = "manhattan", tie_break: str = "h",
                 timeout_sec: float | None = None, return_path: bool = True):
    hfun = HEURISTICS[heuristic](valley)
    return a_star(valley.START, valley.is_goal, hfun, neighbors_fn=valley.neighbors,
                  tie_break=tie_break, return_path=return_path, timeout_sec=timeout_sec)

def solve_bfs(valley: Valley, exhaustive: bool = True, timeout_sec: float | None = None,
              on_improvement=None):
    return bfs(valley.first_entries(), valley.is_goal, valley.neighbors,
               exhaustive=exhaustive, check_fn=valley.check,
               on_improvement=on_improvement, timeout_sec=timeout_sec)

def cross_check(name: str, ra, rb) -> None:
    """A* is optimal; the breadth-first best may never beat it and must match it."""
    if ra["termination"] != "ok" or rb["termination"] != "ok":
        return
    if rb["g"] < ra["g"]:
        raise RuntimeError(f"{name}: BFS found {rb['g']} steps, below the A* optimum {ra['g']}")
    if rb["g"] != ra["g"]:
        raise RuntimeError(f"{name}: BFS best {rb['g']} != A* {ra['g']}")

def make_row(res, inst: Instance, heuristic: str = ""):
    v = inst.valley
    return [
        res.get("algorithm",""), heuristic, inst.name, v.W, v.H, v.period, res.get("g",""),
        res.get("expanded",""), res.get("generated",""),
        f"{res.get('time',0.0):.6f}",
        res.get("peak_open",""), res.get("peak_closed",""),
        len(res["improvements"]) if "improvements" in res else "",
        res.get("tie_break",""), res.get("termination","ok"),
    ]

def write_rows(out: Path, rows: List[list]) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="") as f:
        w = csv.writer(f); w.writerow(HEADER)
        w.writerows(rows)

def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(description="Blizzard valley solver: A* and breadth-first search")
    ap.add_argument("--input", type=Path, nargs="+", default=[Path("input.txt")])
    ap.add_argument("--algo", choices=["a", "bfs", "both"], default="a",
                    help="'both' runs A* and BFS and checks that they agree")
    ap.add_argument("--heuristic", choices=sorted(HEURISTICS), default="manhattan")
    ap.add_argument("--tie_break", choices=["h","g","fifo","lifo"], default="h")
    ap.add_argument("--timeout_sec", type=float, default=None, help="Per-search wall time")
    ap.add_argument("--first_only", action="store_true", help="Stop BFS at its first completion")
    ap.add_argument("--quiet", action="store_true", help="Do not print paths")
    ap.add_argument("--out", type=Path, default=None, help="CSV of search statistics (not written if omitted)")
    args = ap.parse_args(argv)

    insts = [Instance(name=str(p), valley=load_map(p)) for p in args.input]

    want_a   = args.algo in ("a","both")
    want_bfs = args.algo in ("bfs","both")
    rows: List[list] = []

    for inst in insts:
        v = inst.valley
        print(f"{inst.name}: {v.W}x{v.H}, {len(v.blizzards)} blizzards, period {v.period}")
        ra = rb = None
        if want_a:
            ra = solve_a_star(v, args.heuristic, args.tie_break, args.timeout_sec)
            rows.append(make_row(ra, inst, args.heuristic))
            if ra["path"] is None:
                print("No path (timeout or exhausted).")
            else:
                if not args.quiet:
                    print(f"completed search. Path: {v.positions(ra['path'])}")
                print(f"steps: {ra['g']}")
        if want_bfs:
            def announce(g, path, v=v):
                if args.quiet: print(f"found better path (steps={g})")
                else:          print(f"found better path (steps={g}): {v.positions(path)}")
            rb = solve_bfs(v, exhaustive=not args.first_only,
                           timeout_sec=args.timeout_sec, on_improvement=announce)
            rows.append(make_row(rb, inst))
            if rb["g"] is None:
                print("No path (timeout or exhausted).")
            else:
                print(f"best path: {rb['g']} steps")
        if ra is not None and rb is not None:
            cross_check(inst.name, ra, rb)

    if args.out is not None:
        write_rows(args.out, rows)
        print(f"Wrote {args.out} ({len(rows)} runs)")

if __name__ == "__main__":
    main()
