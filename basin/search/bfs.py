from __future__ import annotations
from collections import deque
from time import perf_counter
from typing import Callable, Deque, List, Optional, Set, Tuple

from basin.domains.valley import State

# trail: (state, previous trail) chain, shared between queue entries
Trail = Optional[Tuple[State, "Trail"]]

def _unwind(trail: Trail) -> List[State]:
    out: List[State] = []
    while trail is not None:
        out.append(trail[0])
        trail = trail[1]
    out.reverse()
    return out

def _wind(path: List[State]) -> Trail:
    trail: Trail = None
    for s in path:
        trail = (s, trail)
    return trail

def bfs(seeds: List[Tuple[State, List[State]]],
        is_goal: Callable[[State], bool],
        neighbors_fn: Callable[[State], List[Tuple[State, int]]],
        exhaustive: bool = True,
        check_fn: Optional[Callable[[State], None]] = None,
        on_improvement: Optional[Callable[[int, List[State]], None]] = None,
        timeout_sec: float | None = None):
    """
    Breadth-first enumeration from several seed states, each with the path that
    led to it. Seeds enter the FIFO when the frontier reaches their depth, so
    queue entries stay ordered by path length.
    Every strictly shorter completion is recorded in `improvements`. Since the
    queue is ordered by length the first completion is already the shortest, so
    `improvements` holds at most one entry and exhaustive=True only drains
    entries that can no longer win.
    """
    t0 = perf_counter()
    pending = deque(sorted(((s, _wind(p), len(p) - 1) for s, p in seeds), key=lambda e: e[2]))
    q: Deque[Tuple[State, Trail, int]] = deque()
    seen: Set[State] = set()
    expanded = generated = 0
    peak = 0
    best_g: Optional[int] = None
    best_trail: Trail = None
    improvements: List[Tuple[int, List[State]]] = []

    def result(termination: str):
        return {"path": _unwind(best_trail) if best_g is not None else None, "g": best_g,
                "expanded": expanded, "generated": generated,
                "peak_open": peak, "improvements": improvements,
                "time": perf_counter() - t0, "algorithm": "BFS", "termination": termination}

    while q or pending:
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return result("timeout")

        # seed depth <= front depth, so pushing it to the front keeps the order
        if pending and (not q or pending[0][2] <= q[0][2]):
            s, trail, g = pending.popleft()
            if s not in seen:
                seen.add(s); q.appendleft((s, trail, g))
            continue

        peak = max(peak, len(q))
        s, trail, g = q.popleft()
        if check_fn is not None:
            check_fn(s)

        if best_g is not None and g >= best_g:
            continue
        if is_goal(s):
            best_g, best_trail = g, trail
            path = _unwind(trail)
            improvements.append((g, path))
            if on_improvement is not None:
                on_improvement(g, path)
            if not exhaustive:
                return result("ok")
            continue

        expanded += 1
        for s2, c in neighbors_fn(s):
            generated += 1
            if s2 in seen:
                continue
            seen.add(s2); q.append((s2, (s2, trail), g + c))

    return result("ok" if best_g is not None else "exhausted")
