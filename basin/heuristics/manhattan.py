from typing import Callable, Dict

from basin.domains.valley import State, Valley

Heuristic = Callable[[State], int]


def manhattan(valley: Valley) -> Heuristic:
    """Steps to the exit ignoring blizzards; admissible and consistent."""
    return valley.manhattan


def zero(valley: Valley) -> Heuristic:
    # turns A* into uniform-cost search, handy as a baseline
    return lambda s: 0


HEURISTICS: Dict[str, Callable[[Valley], Heuristic]] = {
    "manhattan": manhattan,
    "zero": zero,
}
