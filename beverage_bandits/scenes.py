from __future__ import annotations

from typing import List, Sequence

from .constants import FRAME_DELAY, ViewerFlags
from .events import EventBus, StepFrame, ToggleFlag, TogglePause
from .replay import Frame


class Playback:
    """
    Frame cursor for a recorded battle: advances on a fixed delay unless
    paused, and can be stepped by hand. Holds no pygame state.
    """

    def __init__(self, frames: Sequence[Frame], delay: float = FRAME_DELAY) -> None:
        if not frames:
            raise ValueError("nothing to play back")
        self.frames = frames
        self.delay = delay
        self.index = 0
        self.paused = False
        self._acc = 0.0

    @property
    def current(self) -> Frame:
        return self.frames[self.index]

    @property
    def at_end(self) -> bool:
        return self.index == len(self.frames) - 1

    def step(self, delta: int) -> None:
        self.index = max(0, min(len(self.frames) - 1, self.index + delta))
        self._acc = 0.0

    def update(self, dt: float) -> None:
        if self.paused or self.at_end:
            return
        self._acc += dt
        while self._acc >= self.delay and not self.at_end:
            self._acc -= self.delay
            self.index += 1


class ReplayScene:
    """
    Plays recorded frames; input is routed through the bus.
    enter/exit bracket the bus subscriptions.
    """

    def __init__(self, bus: EventBus, playback: Playback, flags: ViewerFlags | None = None) -> None:
        self.bus = bus
        self.playback = playback
        self.flags = flags or ViewerFlags()
        self._subs: List[tuple] = []

    def enter(self) -> None:
        self._subs = [
            (TogglePause, self.bus.subscribe(TogglePause, self._on_pause)),
            (StepFrame, self.bus.subscribe(StepFrame, self._on_step)),
            (ToggleFlag, self.bus.subscribe(ToggleFlag, self._on_flag)),
        ]

    def exit(self) -> None:
        for event_type, handle in self._subs:
            self.bus.unsubscribe(event_type, handle_id=handle)
        self._subs = []

    def _on_pause(self, _: TogglePause) -> None:
        self.playback.paused = not self.playback.paused

    def _on_step(self, ev: StepFrame) -> None:
        self.playback.paused = True
        self.playback.step(ev.delta)

    def _on_flag(self, ev: ToggleFlag) -> None:
        if hasattr(self.flags, ev.name):
            setattr(self.flags, ev.name, not getattr(self.flags, ev.name))

    def update(self, fixed_dt: float) -> None:
        self.playback.update(fixed_dt)
