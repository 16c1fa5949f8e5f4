#!/usr/bin/env python3
from __future__ import annotations
import argparse, os, sys
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd
import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

METRICS = ["g", "expanded", "generated", "time_sec"]
KEYS = ["input", "algorithm", "heuristic"]

def load(files: List[Path]) -> pd.DataFrame:
    dfs = []
    for p in files:
        df = pd.read_csv(p, dtype={"heuristic": str})
        need = {"algorithm", "input", "g"}
        if not need.issubset(df.columns):
            print(f"Skipping {p}: missing {sorted(need - set(df.columns))}")
            continue
        df["file"] = Path(p).name
        dfs.append(df)
    if not dfs:
        return pd.DataFrame(columns=KEYS + ["file"] + METRICS)
    out = pd.concat(dfs, ignore_index=True)
    # BFS rows carry no heuristic; keep them as a group key instead of NaN
    if "heuristic" not in out.columns:
        out["heuristic"] = ""
    out["heuristic"] = out["heuristic"].fillna("")
    for m in METRICS:
        out[m] = pd.to_numeric(out[m], errors="coerce")
    return out

def run_label(df: pd.DataFrame) -> pd.Series:
    """'A* | manhattan', 'A* | zero', 'BFS', ..."""
    labels = df["algorithm"].where(df["heuristic"] == "", df["algorithm"] + " | " + df["heuristic"])
    return labels.rename("run")

def per_algorithm(df: pd.DataFrame) -> pd.DataFrame:
    """Mean of each metric per (input, algorithm, heuristic), plus run count."""
    g = df.groupby(KEYS)
    out = g[METRICS].mean()
    out["runs"] = g.size()
    return out.reset_index()

def agreement(df: pd.DataFrame) -> pd.DataFrame:
    """One row per input: best steps of each algorithm/heuristic and whether they all match."""
    best = df.groupby(KEYS)["g"].min().reset_index()
    best["run"] = run_label(best)
    wide = best.pivot(index="input", columns="run", values="g")
    wide.columns.name = None
    compared = wide.notna().sum(axis=1) >= 2
    wide["agree"] = np.where(compared, wide.nunique(axis=1) == 1, np.nan)
    return wide.reset_index()

def plot_expanded(table: pd.DataFrame, outdir: Path, name: str) -> Path:
    table = table.assign(run=run_label(table))
    pivot = table.pivot(index="input", columns="run", values="expanded")
    fig, ax = plt.subplots(figsize=(8, 5))
    pivot.plot.bar(ax=ax, logy=True)
    ax.set_xlabel("Input")
    ax.set_ylabel("expanded (mean, log)")
    ax.set_title("Expanded states per algorithm and heuristic")
    ax.grid(True, axis="y")
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}_expanded.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved: {path}")
    return path

def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(description="Summarize runner CSVs and check A*/BFS agreement.")
    ap.add_argument("csv", type=Path, nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", type=Path, default=None, help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    df = load(args.csv)
    if df.empty:
        print("No rows to summarize. Are your CSVs empty?")
        sys.exit(0)

    table = per_algorithm(df)
    print("=" * 80)
    print("Mean metrics per input, algorithm and heuristic")
    print("=" * 80)
    print(table.to_string(index=False))

    agree = agreement(df)
    print("\n" + "=" * 80)
    print("Best steps: A* vs BFS per heuristic")
    print("=" * 80)
    print(agree.to_string(index=False))
    mismatched = agree[agree["agree"] == 0]
    if len(mismatched):
        print(f"\nWARNING: {len(mismatched)} input(s) disagree")

    if args.save is not None:
        base = "combo" if len(args.csv) > 1 else args.csv[0].stem
        plot_expanded(table, args.save, base)
        if args.show:
            plt.show()

if __name__ == "__main__":
    main()
