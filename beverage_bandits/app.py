from __future__ import annotations

import logging
from time import perf_counter
from typing import Sequence

import pygame

from .constants import (
    DT_CLAMP,
    FIXED_DT,
    FRAME_DELAY,
    HUD_H,
    MAX_STEPS_PER_FRAME,
    TILE,
    WIN_H,
    WIN_W,
)
from .events import EventBus, Quit
from .replay import Frame
from .scenes import Playback, ReplayScene
from .systems.input import InputSystem
from .systems.render import Camera, RenderSystem

logger = logging.getLogger(__name__)


class ViewerScene(ReplayScene):
    def __init__(self, bus: EventBus, playback: Playback, camera: Camera, screen: pygame.Surface) -> None:
        super().__init__(bus, playback)
        self.camera = camera
        self.screen = screen
        self.input_sys = InputSystem(bus)
        self.font = pygame.font.SysFont("consolas,menlo,monaco,dejavu sans mono", 14)
        self.renderer = RenderSystem(camera, screen, self.font, self.flags)

    def handle_event(self, ev: pygame.event.Event) -> None:
        self.input_sys.handle_event(ev)

    def update(self, fixed_dt: float) -> None:
        # WASD/arrow panning for maps bigger than the window
        keys = pygame.key.get_pressed()
        speed = 12
        if keys[pygame.K_a] or keys[pygame.K_LEFT]:
            self.camera.x -= speed
        if keys[pygame.K_d] or keys[pygame.K_RIGHT]:
            self.camera.x += speed
        if keys[pygame.K_w] or keys[pygame.K_UP]:
            self.camera.y -= speed
        if keys[pygame.K_s] or keys[pygame.K_DOWN]:
            self.camera.y += speed
        w, h = self.playback.current.size
        self.camera.clamp_to_map(w * TILE, h * TILE)

        super().update(fixed_dt)

    def render(self) -> None:
        self.renderer.render(self.playback.current, "paused" if self.playback.paused else "")


def run_viewer(frames: Sequence[Frame], delay: float = FRAME_DELAY, title: str = "beverage bandits") -> None:
    """Open a window and play the recorded rounds until it's closed."""
    if not frames:
        logger.warning("no frames recorded, nothing to show")
        return

    w, h = frames[0].size
    win_w = min(WIN_W, max(320, w * TILE))
    win_h = min(WIN_H, h * TILE + HUD_H)

    pygame.init()
    try:
        pygame.display.set_caption(title)
        screen = pygame.display.set_mode((win_w, win_h))
        clock = pygame.time.Clock()

        bus = EventBus()
        running = True

        def _quit(_: Quit) -> None:
            nonlocal running
            running = False

        bus.subscribe(Quit, _quit)

        scene = ViewerScene(bus, Playback(frames, delay), Camera(0, 0, win_w, win_h), screen)
        scene.enter()

        last_time = perf_counter()
        acc = 0.0
        while running:
            for ev in pygame.event.get():
                scene.handle_event(ev)

            # Timing
            now = perf_counter()
            dt = min(now - last_time, DT_CLAMP)
            last_time = now
            acc += dt

            steps = 0
            while acc >= FIXED_DT and steps < MAX_STEPS_PER_FRAME:
                scene.update(FIXED_DT)
                acc -= FIXED_DT
                steps += 1

            scene.render()
            pygame.display.flip()
            clock.tick(60)
        scene.exit()
    finally:
        pygame.quit()
