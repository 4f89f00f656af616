from __future__ import annotations

import pygame

from ..events import EventBus, Quit, StepFrame, ToggleFlag, TogglePause

FLAG_KEYS = {
    pygame.K_F1: "show_hud",
    pygame.K_g: "show_grid",
    pygame.K_h: "show_hp_bars",
}


class InputSystem:
    """
    Event-driven input: turns pygame key presses into bus events.
    Camera panning is polled by the scene, not handled here.
    """

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus

    def handle_event(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.QUIT:
            self.bus.publish(Quit())
            return

        if ev.type != pygame.KEYDOWN:
            return
        if ev.key == pygame.K_ESCAPE:
            self.bus.publish(Quit())
        elif ev.key == pygame.K_SPACE:
            self.bus.publish(TogglePause())
        elif ev.key == pygame.K_PERIOD:
            self.bus.publish(StepFrame(1))
        elif ev.key == pygame.K_COMMA:
            self.bus.publish(StepFrame(-1))
        elif ev.key in FLAG_KEYS:
            self.bus.publish(ToggleFlag(FLAG_KEYS[ev.key]))
