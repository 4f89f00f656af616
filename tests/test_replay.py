from __future__ import annotations

import pytest

from beverage_bandits.battle import Battle
from beverage_bandits.components import Side
from beverage_bandits.constants import ViewerFlags
from beverage_bandits.events import EventBus, StepFrame, ToggleFlag, TogglePause
from beverage_bandits.replay import FrameRecorder, snapshot
from beverage_bandits.scenes import Playback, ReplayScene
from tests.helpers.maps import SAMPLE


def _recorded_frames():
    battle = Battle.from_lines(SAMPLE.rows)
    recorder = FrameRecorder(battle.grid, battle.world)
    recorder.attach(battle.bus)
    battle.run()
    return recorder


def test_recorder_keeps_initial_every_round_and_final_frame() -> None:
    recorder = _recorded_frames()
    frames = recorder.frames

    assert len(frames) == SAMPLE.rounds + 2
    assert [f.round for f in frames[:3]] == [0, 1, 2]
    assert frames[-1].final
    assert frames[-1].round == SAMPLE.rounds
    assert recorder.outcome is not None
    assert recorder.outcome.winner is Side.GOBLIN


def test_frames_are_independent_snapshots() -> None:
    recorder = _recorded_frames()
    first, last = recorder.frames[0], recorder.frames[-1]

    assert len(first.units) == 6
    assert len(last.units) == 4
    assert sum(u.hp for u in last.units) == SAMPLE.hit_points
    assert first.size == (7, 7)


def test_snapshot_orders_units_by_reading_order() -> None:
    battle = Battle.from_lines(["#####", "#G.E#", "#E..#", "#####"])
    frame = snapshot(battle.grid, battle.world, 0)

    assert [(u.x, u.y, u.side) for u in frame.units] == [
        (1, 1, Side.GOBLIN),
        (3, 1, Side.ELF),
        (1, 2, Side.ELF),
    ]


def test_playback_advances_on_delay_and_stops_at_end() -> None:
    frames = _recorded_frames().frames
    playback = Playback(frames, delay=0.5)

    playback.update(0.4)
    assert playback.index == 0
    playback.update(0.2)
    assert playback.index == 1
    playback.update(1000.0)
    assert playback.at_end


def test_playback_requires_frames() -> None:
    with pytest.raises(ValueError):
        Playback([])


def test_replay_scene_reacts_to_bus_events() -> None:
    bus = EventBus()
    playback = Playback(_recorded_frames().frames, delay=0.5)
    scene = ReplayScene(bus, playback, ViewerFlags())
    scene.enter()

    bus.publish(StepFrame(3))
    assert playback.paused
    assert playback.index == 3
    bus.publish(StepFrame(-10))
    assert playback.index == 0

    scene.update(10.0)
    assert playback.index == 0  # paused

    bus.publish(TogglePause())
    scene.update(0.5)
    assert playback.index == 1

    bus.publish(ToggleFlag("show_grid"))
    assert scene.flags.show_grid is False
    bus.publish(ToggleFlag("no_such_flag"))

    scene.exit()
    bus.publish(StepFrame(1))
    assert playback.index == 1
