from __future__ import annotations

import pytest

from beverage_bandits import pathing
from beverage_bandits.components import Faction, Position, Side
from beverage_bandits.errors import GridError, PathingError
from beverage_bandits.parsing import parse_map
from beverage_bandits.pathing import MovePlan, distances_from, in_range_cells, plan_move


def _enemy_cells(world, side: Side):
    _, rows = world.view(Position, Faction)
    return [pos.cell for pos, fac in rows if fac.side is side]


def test_distances_cover_open_cells_from_occupied_start() -> None:
    grid, _ = parse_map(
        [
            "#####",
            "#E..#",
            "#.#.#",
            "#####",
        ]
    )
    dist = distances_from(grid, (1, 1))

    assert dist == {(1, 1): 0, (2, 1): 1, (1, 2): 1, (3, 1): 2, (3, 2): 3}


def test_distances_do_not_pass_through_units() -> None:
    grid, _ = parse_map(["#######", "#E.G..#", "#######"])
    dist = distances_from(grid, (1, 1))

    assert (4, 1) not in dist
    assert dist[(2, 1)] == 1


def test_in_range_cells_are_open_neighbours_of_enemies() -> None:
    grid, world = parse_map(
        [
            "#######",
            "#E..G.#",
            "#...#.#",
            "#.G.#G#",
            "#######",
        ]
    )
    cells = in_range_cells(grid, _enemy_cells(world, Side.GOBLIN))

    assert cells == {(3, 1), (5, 1), (2, 2), (5, 2), (1, 3), (3, 3)}


def test_nearest_target_and_first_step_follow_reading_order() -> None:
    grid, world = parse_map(
        [
            "#######",
            "#E..G.#",
            "#...#.#",
            "#.G.#G#",
            "#######",
        ]
    )
    targets = in_range_cells(grid, _enemy_cells(world, Side.GOBLIN))

    plan = plan_move(grid, (1, 1), targets)
    assert plan == MovePlan(destination=(3, 1), distance=2, step=(2, 1))


def test_first_step_tie_broken_by_step_cell_not_destination() -> None:
    grid, world = parse_map(
        [
            "#######",
            "#.E...#",
            "#.....#",
            "#...G.#",
            "#######",
        ]
    )
    targets = in_range_cells(grid, _enemy_cells(world, Side.GOBLIN))

    plan = plan_move(grid, (2, 1), targets)
    assert plan is not None
    assert plan.destination == (4, 2)
    assert plan.distance == 3
    assert plan.step == (3, 1)


def test_up_beats_left_when_both_steps_are_shortest() -> None:
    grid, _ = parse_map(
        [
            "#####",
            "#...#",
            "#..E#",
            "#####",
        ]
    )
    plan = plan_move(grid, (3, 2), {(2, 1)})
    assert plan is not None
    assert plan.step == (3, 1)


def test_unreachable_targets_give_no_plan() -> None:
    grid, world = parse_map(
        [
            "#######",
            "#E#..G#",
            "#######",
        ]
    )
    targets = in_range_cells(grid, _enemy_cells(world, Side.GOBLIN))

    assert targets == {(4, 1)}
    assert plan_move(grid, (1, 1), targets) is None


def test_missing_first_step_raises_pathing_error(monkeypatch: pytest.MonkeyPatch) -> None:
    grid, _ = parse_map(["#######", "#E...G#", "#######"])
    real = pathing.distances_from
    calls = []

    def no_way_back(grid, start):
        calls.append(start)
        # second search (from the destination) finds nothing
        return real(grid, start) if len(calls) == 1 else {}

    monkeypatch.setattr(pathing, "distances_from", no_way_back)

    with pytest.raises(PathingError) as excinfo:
        plan_move(grid, (1, 1), {(4, 1)})
    assert isinstance(excinfo.value, GridError)
    assert calls == [(1, 1), (4, 1)]
