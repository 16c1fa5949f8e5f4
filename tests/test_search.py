import pytest

from basin.domains.valley import BlizzardCollisionError, Valley, parse_map
from basin.heuristics.manhattan import manhattan, zero
from basin.search.a_star import a_star
from basin.search.bfs import bfs


def _solve(v: Valley, **kw):
    return a_star(v.START, v.is_goal, manhattan(v), neighbors_fn=v.neighbors, **kw)


def _bfs(v: Valley, **kw):
    return bfs(v.first_entries(), v.is_goal, v.neighbors, check_fn=v.check, **kw)


def _assert_walkable(v: Valley, path) -> None:
    assert path[0] == v.START
    assert path[-1][1] == v.EXIT
    for a, b in zip(path, path[1:]):
        assert b in v.options(a)


def test_manhattan_heuristic_measures_to_exit(example_valley) -> None:
    v = example_valley
    assert manhattan(v)(v.START) == 10
    assert manhattan(v)((3, v.EXIT)) == 0
    assert zero(v)(v.START) == 0


def test_a_star_example_takes_18_steps(example_valley) -> None:
    res = _solve(example_valley)

    assert res["termination"] == "ok"
    assert res["g"] == 18
    assert len(res["path"]) == 19
    _assert_walkable(example_valley, res["path"])


def test_a_star_small_valley_waits_once_at_entrance(small_valley) -> None:
    v = small_valley
    res = _solve(v)

    assert res["g"] == 9
    assert v.positions(res["path"])[:3] == [v.ENTRANCE, v.ENTRANCE, (0, 0)]
    _assert_walkable(v, res["path"])


def test_a_star_is_deterministic(example_valley) -> None:
    first = _solve(example_valley)
    second = _solve(example_valley)

    assert first["path"] == second["path"]
    assert first["g"] == second["g"]


@pytest.mark.parametrize("tie_break", ["h", "g", "fifo", "lifo"])
def test_a_star_tie_breaks_keep_optimum(example_valley, tie_break) -> None:
    res = _solve(example_valley, tie_break=tie_break)
    assert res["g"] == 18
    assert res["tie_break"] == tie_break


def test_a_star_zero_heuristic_matches(example_valley) -> None:
    v = example_valley
    res = a_star(v.START, v.is_goal, zero(v), neighbors_fn=v.neighbors)
    assert res["g"] == 18


def test_a_star_without_blizzards_walks_manhattan_distance() -> None:
    v = Valley(4, 4, [])
    res = _solve(v)
    assert res["g"] == 8
    assert res["expanded"] == 8


def test_a_star_unsolvable_valley_exhausts() -> None:
    v = Valley(*parse_map("#.#\n#v#\n#.#\n"))
    res = _solve(v)

    assert res["path"] is None
    assert res["g"] is None
    assert res["termination"] == "exhausted"


def test_a_star_timeout_and_bad_tie_break(example_valley) -> None:
    assert _solve(example_valley, timeout_sec=-1.0)["termination"] == "timeout"
    with pytest.raises(ValueError):
        _solve(example_valley, tie_break="random")


def test_a_star_can_skip_path(example_valley) -> None:
    res = _solve(example_valley, return_path=False)
    assert res["path"] is None
    assert res["g"] == 18


def test_bfs_agrees_with_a_star(example_valley, small_valley) -> None:
    for v in (example_valley, small_valley):
        ra = _solve(v)
        rb = _bfs(v)
        assert rb["g"] >= ra["g"]
        assert rb["g"] == ra["g"]
        _assert_walkable(v, rb["path"])


def test_bfs_records_its_single_optimal_completion(example_valley) -> None:
    seen = []
    res = _bfs(example_valley, on_improvement=lambda g, path: seen.append(g))

    assert res["termination"] == "ok"
    # FIFO order: the first completion is optimal, nothing can improve on it
    assert seen == [18]
    assert [g for g, _ in res["improvements"]] == [18]
    assert res["improvements"][0][1] == res["path"]


def test_bfs_first_only_stops_early(example_valley) -> None:
    full = _bfs(example_valley)
    first = _bfs(example_valley, exhaustive=False)

    assert first["g"] == 18
    assert first["expanded"] <= full["expanded"]


def test_bfs_seed_order_does_not_matter(small_valley) -> None:
    v = small_valley
    seeds = list(reversed(v.first_entries()))
    res = bfs(seeds, v.is_goal, v.neighbors)
    assert res["g"] == 9


def test_bfs_unsolvable_valley_exhausts() -> None:
    v = Valley(*parse_map("#.#\n#v#\n#.#\n"))
    res = _bfs(v)

    assert res["path"] is None
    assert res["termination"] == "exhausted"
    assert res["improvements"] == []


def test_bfs_rejects_state_inside_a_blizzard(example_valley) -> None:
    v = example_valley
    bad = (0, (0, 0))
    with pytest.raises(BlizzardCollisionError):
        bfs([(bad, [bad])], v.is_goal, v.neighbors, check_fn=v.check)
