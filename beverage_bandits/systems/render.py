from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import pygame

from ..components import Side
from ..constants import (
    ELF_COLOR,
    GOBLIN_COLOR,
    GRAY,
    GRID_LINE,
    HP_BACK,
    HP_FRONT,
    HUD_H,
    LIGHT_GRAY,
    TILE,
    WALL_COLOR,
    WHITE,
    ViewerFlags,
)
from ..replay import Frame

SIDE_COLORS: Dict[Side, Tuple[int, int, int]] = {Side.ELF: ELF_COLOR, Side.GOBLIN: GOBLIN_COLOR}


@dataclass
class Camera:
    x: int = 0  # pixels
    y: int = 0  # pixels
    w: int = 1280
    h: int = 720

    def clamp_to_map(self, map_px_w: int, map_px_h: int) -> None:
        self.x = max(0, min(self.x, max(0, map_px_w - self.w)))
        self.y = max(0, min(self.y, max(0, map_px_h - self.h)))

    def world_to_screen(self, wx: int, wy: int) -> Tuple[int, int]:
        return wx - self.x, wy - self.y + HUD_H


class RenderSystem:
    """
    Draws one replay frame: terrain (cached per map), units coloured by
    faction with HP bars, and a one-line HUD.
    """

    def __init__(self, camera: Camera, screen: pygame.Surface, font: Optional[pygame.font.Font], flags: ViewerFlags) -> None:
        self.camera = camera
        self.screen = screen
        self.font = font
        self.flags = flags

        self.terrain_surf: Optional[pygame.Surface] = None
        self.gridlines_surf: Optional[pygame.Surface] = None
        self._terrain_key: Optional[Tuple[Tuple[bool, ...], ...]] = None

    # ---- Helpers ----
    def ensure_surfaces(self, frame: Frame) -> None:
        if self._terrain_key == frame.walls:
            return
        w, h = frame.size
        w_px, h_px = w * TILE, h * TILE
        self.terrain_surf = pygame.Surface((w_px, h_px))
        self.terrain_surf.fill(GRAY)
        for y, row in enumerate(frame.walls):
            for x, wall in enumerate(row):
                rect = pygame.Rect(x * TILE, y * TILE, TILE, TILE)
                if wall:
                    color = WALL_COLOR
                else:
                    color = GRAY if ((x + y) % 2 == 0) else LIGHT_GRAY
                pygame.draw.rect(self.terrain_surf, color, rect)

        self.gridlines_surf = pygame.Surface((w_px, h_px), pygame.SRCALPHA)
        for x in range(w + 1):
            pygame.draw.line(self.gridlines_surf, GRID_LINE, (x * TILE, 0), (x * TILE, h_px))
        for y in range(h + 1):
            pygame.draw.line(self.gridlines_surf, GRID_LINE, (0, y * TILE), (w_px, y * TILE))
        self._terrain_key = frame.walls

    # ---- Main ----
    def render(self, frame: Frame, status: str = "") -> None:
        cam = self.camera
        self.ensure_surfaces(frame)
        self.screen.fill((0, 0, 0))

        # Terrain
        src = pygame.Rect(cam.x, cam.y, cam.w, cam.h - HUD_H)
        self.screen.blit(self.terrain_surf, (0, HUD_H), area=src)
        if self.flags.show_grid:
            self.screen.blit(self.gridlines_surf, (0, HUD_H), area=src)

        # Units
        radius = TILE // 2 - 3
        for unit in frame.units:
            sx, sy = cam.world_to_screen(unit.x * TILE + TILE // 2, unit.y * TILE + TILE // 2)
            pygame.draw.circle(self.screen, SIDE_COLORS[unit.side], (sx, sy), radius)

            if self.flags.show_hp_bars and unit.max_hp > 0:
                bar_w = TILE - 4
                fill = max(0, int(bar_w * unit.hp / unit.max_hp))
                x0 = sx - bar_w // 2
                y0 = sy - TILE // 2 + 1
                pygame.draw.rect(self.screen, HP_BACK, pygame.Rect(x0, y0, bar_w, 3))
                if fill:
                    pygame.draw.rect(self.screen, HP_FRONT, pygame.Rect(x0, y0, fill, 3))

        # HUD
        if self.flags.show_hud and self.font is not None:
            elves = sum(1 for u in frame.units if u.side is Side.ELF)
            goblins = len(frame.units) - elves
            label = f"round {frame.round}  elves {elves}  goblins {goblins}"
            if frame.final:
                label += "  (final)"
            if status:
                label += f"  {status}"
            txt = self.font.render(label, True, WHITE)
            self.screen.blit(txt, (8, 6))
