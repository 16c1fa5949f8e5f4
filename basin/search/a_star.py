from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, List, Set
import heapq
from time import perf_counter
import math
import itertools

from basin.domains.valley import State

# secondary heap key per tie-break policy: (g, h, insertion counter) -> key
TIE_BREAKS: Dict[str, Callable[[int, int, int], Tuple[int, int]]] = {
    "h":    lambda g, h, ctr: (h, ctr),
    "g":    lambda g, h, ctr: (-g, ctr),
    "fifo": lambda g, h, ctr: (0, ctr),
    "lifo": lambda g, h, ctr: (0, -ctr),
}

@dataclass
class PQItem:
    g: int
    state: State
    parent: Optional["PQItem"] = None

    def path(self) -> List[State]:
        out: List[State] = []
        node: Optional[PQItem] = self
        while node is not None:
            out.append(node.state)
            node = node.parent
        out.reverse()
        return out

def a_star(
    start: State,
    is_goal: Callable[[State], bool],
    hfun: Callable[[State], int],
    neighbors_fn: Callable[[State], List[Tuple[State, int]]],
    tie_break: str = "h",
    return_path: bool = True,
    timeout_sec: float | None = None,
):
    """
    Best-first search on f = g + h over (phase, position) states.
    A state re-enters the heap whenever a strictly smaller g reaches it; stale
    heap entries are skipped once the state is closed. The goal node's
    back-pointer chain is the path, start included.
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"unknown tie_break {tie_break!r}")
    secondary = TIE_BREAKS[tie_break]
    t0 = perf_counter()
    counter = itertools.count()
    open_heap: List[Tuple[int, Tuple[int, int], PQItem]] = []

    def push(item: PQItem) -> None:
        h = hfun(item.state)
        heapq.heappush(open_heap, (item.g + h, secondary(item.g, h, next(counter)), item))

    best_g: Dict[State, int] = {start: 0}
    closed: Set[State] = set()
    expanded = generated = 0
    peak_open = peak_closed = 0

    def result(termination: str, node: Optional[PQItem] = None):
        return {
            "path": node.path() if (node is not None and return_path) else None,
            "g": node.g if node is not None else None,
            "expanded": expanded, "generated": generated,
            "peak_open": peak_open, "peak_closed": peak_closed,
            "time": perf_counter() - t0,
            "algorithm": "A*",
            "tie_break": tie_break,
            "termination": termination,
        }

    push(PQItem(g=0, state=start))
    while open_heap:
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return result("timeout")

        peak_open = max(peak_open, len(open_heap))
        node = heapq.heappop(open_heap)[2]
        if node.state in closed:
            continue
        if is_goal(node.state):
            return result("ok", node)

        closed.add(node.state)
        expanded += 1
        peak_closed = max(peak_closed, len(closed))

        for s2, cost in neighbors_fn(node.state):
            generated += 1
            g2 = node.g + cost
            if g2 < best_g.get(s2, math.inf):
                best_g[s2] = g2
                push(PQItem(g=g2, state=s2, parent=node))

    return result("exhausted")
