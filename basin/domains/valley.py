from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple
import math

import numpy as np

Position = Tuple[int, int]      # (x, y) inside the walls
State = Tuple[int, Position]    # (phase, position)

WALL = "#"
EMPTY = "."
AGENT = "E"

# glyph -> unit offset
DIRS: Dict[str, Position] = {
    "^": (0, -1),
    "v": (0, 1),
    "<": (-1, 0),
    ">": (1, 0),
}


class BlizzardCollisionError(RuntimeError):
    """Agent and blizzard on the same cell at the same phase."""


def tick(pos: Position, d: str, width: int, height: int) -> Position:
    """One step of `pos` towards `d`, wrapping around the interior."""
    dx, dy = DIRS[d]
    x, y = pos
    return ((x + dx) % width, (y + dy) % height)


@dataclass(frozen=True)
class Blizzard:
    pos: Position
    dir: str

    def tick(self, width: int, height: int) -> "Blizzard":
        return Blizzard(tick(self.pos, self.dir, width, height), self.dir)

    def at(self, t: int, width: int, height: int) -> Position:
        dx, dy = DIRS[self.dir]
        x, y = self.pos
        return ((x + dx * t) % width, (y + dy * t) % height)


def tick_all(field: Iterable[Blizzard], width: int, height: int) -> Tuple[Blizzard, ...]:
    return tuple(b.tick(width, height) for b in field)


def period_of(width: int, height: int) -> int:
    """Number of ticks after which the whole field repeats (lcm of the sides)."""
    if width <= 0 or height <= 0:
        raise ValueError(f"valley must have a positive interior, got {width}x{height}")
    return height * (width // math.gcd(width, height))


# ---------------- Parsing ----------------

def parse_map(text: str) -> Tuple[int, int, List[Blizzard]]:
    """
    Parse a walled ASCII map. Returns (width, height, blizzards) where width and
    height describe the interior only.
    """
    lines = [ln.rstrip("\r") for ln in text.splitlines() if ln.strip()]
    if len(lines) < 3:
        raise ValueError("map needs a top wall, at least one row, and a bottom wall")
    full_w = len(lines[0])
    if full_w < 3:
        raise ValueError(f"map line 1 too short: {lines[0]!r}")
    for i, ln in enumerate(lines, start=1):
        if len(ln) != full_w:
            raise ValueError(f"map line {i} has length {len(ln)}, expected {full_w}")

    width, height = full_w - 2, len(lines) - 2
    # the only gaps in the border are the entrance (top-left) and the exit (bottom-right)
    top = WALL + EMPTY + WALL * width
    bottom = WALL * width + EMPTY + WALL
    if lines[0] != top:
        raise ValueError(f"map line 1 must be {top!r} (entrance above the top-left cell), got {lines[0]!r}")
    if lines[-1] != bottom:
        raise ValueError(f"map line {len(lines)} must be {bottom!r} (exit below the bottom-right cell), got {lines[-1]!r}")

    blizzards: List[Blizzard] = []
    for y, ln in enumerate(lines[1:-1]):
        if ln[0] != WALL or ln[-1] != WALL:
            raise ValueError(f"map line {y + 2}: side walls must be {WALL!r}")
        for x, c in enumerate(ln[1:-1]):
            if c in DIRS:
                blizzards.append(Blizzard((x, y), c))
            elif c != EMPTY:
                raise ValueError(f"map line {y + 2}: unexpected {c!r} at column {x + 2}")
    return width, height, blizzards


def load_map(path) -> "Valley":
    width, height, blizzards = parse_map(Path(path).read_text())
    return Valley(width, height, blizzards)


# ---------------- Valley ----------------

class Valley:
    """
    Rectangular blizzard field with a precomputed, periodic timeline.
    States are (phase, position); the entrance sits above the top-left cell and
    the exit below the bottom-right cell.
    """
    def __init__(self, width: int, height: int, blizzards: Sequence[Blizzard]):
        self.W = width
        self.H = height
        self.blizzards: Tuple[Blizzard, ...] = tuple(blizzards)
        self.period = period_of(width, height)

        self.ENTRANCE: Position = (0, -1)
        self.EXIT: Position = (width - 1, height)
        self.START: State = (0, self.ENTRANCE)

        # timeline[t, y, x] is True when some blizzard covers (x, y) at phase t
        self.timeline = np.zeros((self.period, height, width), dtype=bool)
        field = self.blizzards
        for t in range(self.period):
            if field:
                xs = [b.pos[0] for b in field]
                ys = [b.pos[1] for b in field]
                self.timeline[t, ys, xs] = True
            field = tick_all(field, width, height)

        # Precomputed moves per cell; walls are never crossed, only the
        # sentinels open the rectangle.
        self._moves: Dict[Position, Tuple[Position, ...]] = {self.ENTRANCE: ((0, 0),)}
        for y in range(height):
            for x in range(width):
                moves = []
                if y > 0:           moves.append((x, y - 1))
                if y < height - 1:  moves.append((x, y + 1))
                if x > 0:           moves.append((x - 1, y))
                if x < width - 1:   moves.append((x + 1, y))
                if (x, y) == (width - 1, height - 1):
                    moves.append(self.EXIT)
                self._moves[(x, y)] = tuple(moves)
        self._moves[self.EXIT] = ()

    # ---------- field ----------
    def inside(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.W and 0 <= y < self.H

    def occupied(self, phase: int, pos: Position) -> bool:
        if not self.inside(pos):
            return False
        x, y = pos
        return bool(self.timeline[phase % self.period, y, x])

    def snapshot(self, phase: int) -> FrozenSet[Position]:
        ys, xs = np.nonzero(self.timeline[phase % self.period])
        return frozenset(zip(xs.tolist(), ys.tolist()))

    # ---------- transitions ----------
    def options(self, state: State) -> List[State]:
        """Legal successors: wait, or step to an adjacent free cell."""
        phase, pos = state
        nxt = (phase + 1) % self.period
        out: List[State] = []
        for dest in (pos,) + self._moves[pos]:
            if not self.occupied(nxt, dest):
                out.append((nxt, dest))
        return out

    def neighbors(self, state: State) -> List[Tuple[State, int]]:
        return [(s, 1) for s in self.options(state)]

    def is_goal(self, state: State) -> bool:
        return state[1] == self.EXIT

    def manhattan(self, state: State) -> int:
        x, y = state[1]
        gx, gy = self.EXIT
        return abs(x - gx) + abs(y - gy)

    def first_entries(self) -> List[Tuple[State, List[State]]]:
        """
        Every distinct state in which the agent first stands inside the valley,
        paired with the waiting path from START that leads to it.
        """
        out: List[Tuple[State, List[State]]] = []
        seen = set()
        for t in range(self.period):
            s = ((t + 1) % self.period, (0, 0))
            if s in seen or self.occupied(t + 1, (0, 0)):
                continue
            seen.add(s)
            waiting = [((k % self.period), self.ENTRANCE) for k in range(t + 1)]
            out.append((s, waiting + [s]))
        return out

    # ---------- diagnostics ----------
    def render(self, phase: int, agent: Optional[Position] = None) -> str:
        cells: Dict[Position, List[str]] = {}
        for b in self.blizzards:
            cells.setdefault(b.at(phase, self.W, self.H), []).append(b.dir)
        rows = []
        for y in range(self.H):
            row = []
            for x in range(self.W):
                here = cells.get((x, y), [])
                if (x, y) == agent:    row.append(AGENT)
                elif not here:         row.append(EMPTY)
                elif len(here) == 1:   row.append(here[0])
                else:                  row.append(str(len(here)) if len(here) < 10 else "*")
            rows.append("".join(row))
        return "\n".join(rows)

    def check(self, state: State) -> None:
        phase, pos = state
        if self.occupied(phase, pos):
            raise BlizzardCollisionError(
                f"agent at {pos} shares a cell with a blizzard at phase {phase}:\n"
                + self.render(phase, agent=pos)
            )

    def positions(self, path: Sequence[State]) -> List[Position]:
        return [p for _, p in path]
