#!/usr/bin/env python3
import argparse, os
from pathlib import Path
import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from typing import List, Optional

from basin.domains.valley import Position, Valley, load_map
from basin.experiments.runner import solve_a_star, solve_bfs

def draw_valley(valley: Valley, phase: int, agent: Optional[Position], out_path: Path):
    """One frame: walls around the interior, blizzard glyphs, agent as a dot."""
    W, H = valley.W, valley.H
    plt.figure(figsize=(max(3, (W + 2) * 0.4), max(3, (H + 2) * 0.4)))
    ax = plt.gca()
    ax.set_xlim(-1, W + 1); ax.set_ylim(-1, H + 1)
    ax.set_xticks([]); ax.set_yticks([]); ax.invert_yaxis()
    ax.set_aspect("equal")
    # walls, leaving the entrance and exit open
    openings = {valley.ENTRANCE, valley.EXIT}
    for x in range(-1, W + 1):
        for y in (-1, H):
            if (x, y) not in openings:
                ax.add_patch(plt.Rectangle((x, y), 1, 1, color="0.3"))
    for y in range(H):
        for x in (-1, W):
            ax.add_patch(plt.Rectangle((x, y), 1, 1, color="0.3"))
    # blizzards (stacked ones drawn as a count)
    for y, row in enumerate(valley.render(phase).splitlines()):
        for x, c in enumerate(row):
            if c != ".":
                ax.text(x + 0.5, y + 0.55, c, ha="center", va="center", fontsize=10, color="#0072B2")
    if agent is not None:
        ax.add_patch(plt.Circle((agent[0] + 0.5, agent[1] + 0.5), 0.35, color="#E69F00"))
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=120)
    plt.close()

def save_frames(valley: Valley, path, outdir: Path) -> List[Path]:
    frames: List[Path] = []
    for i, (phase, pos) in enumerate(path):
        out = outdir / f"step_{i:03d}.png"
        draw_valley(valley, phase, pos, out)
        frames.append(out)
    return frames

def main(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Solve one valley and save a frame per step.")
    p.add_argument("--input", type=Path, default=Path("input.txt"))
    p.add_argument("--algo", choices=["a","bfs"], default="a")
    p.add_argument("--outdir", default="results/figs/example_path")
    args = p.parse_args(argv)

    valley = load_map(args.input)
    if args.algo == "a":
        res = solve_a_star(valley)
    else:
        res = solve_bfs(valley, exhaustive=False)

    if not res.get("path"):
        print("No path (timeout or exhausted).")
        return

    frames = save_frames(valley, res["path"], Path(args.outdir))
    print(f"Saved {len(frames)} frames to {args.outdir}")

if __name__ == "__main__":
    main()
