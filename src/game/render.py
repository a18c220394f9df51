# src/game/render.py
"""pygame drawing for a WorldState. Reads the state, never changes it."""
from __future__ import annotations
from typing import List, Tuple

import pygame

from .config import (
    WIDTH, HEIGHT, LOADING_TICKS,
    COLOR_BG, COLOR_FG, COLOR_ACCENT, COLOR_GROUND, COLOR_PLAT, COLOR_MOVING,
    COLOR_DANGER, COLOR_FLAG, COLOR_PICKUP, COLOR_MENU_BG, PLAYER_COLORS,
    MENU, SETTINGS, INSTRUCTIONS, LOADING, PAUSED, LEVEL_COMPLETE, GAME_OVER, VICTORY,
)
from .geometry import to_rect
from .modes import MENU_OPTIONS, SETTINGS_OPTIONS
from .world import WorldState

HOW_TO_PLAY = (
    "Collect all three flags to finish a level.",
    "",
    "Left / Right: move     Space: jump     P: pause",
    "Jump on enemies to defeat them (+200).",
    "Touching them from the side costs a life.",
    "",
    "Green S / J pickups: speed or jump boost for 5 s.",
    "Each level adds enemies and speeds them up.",
)


class Renderer:
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = pygame.font.SysFont("jetbrainsmono", 18)
        self.font_big = pygame.font.SysFont("jetbrainsmono", 40, bold=True)

    # ---- helpers ----
    def _text(self, msg: str, pos: Tuple[int, int], color=COLOR_FG, big=False, centered=False):
        font = self.font_big if big else self.font
        img = font.render(msg, True, color)
        x, y = pos
        if centered:
            x -= img.get_width() // 2
        self.screen.blit(img, (x, y))

    def _overlay(self, alpha: int = 150):
        panel = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        panel.fill((0, 0, 0, alpha))
        self.screen.blit(panel, (0, 0))

    def _options(self, options: List[str], selected: int, y0: int, values: List[str] = ()):
        for i, name in enumerate(options):
            color = COLOR_ACCENT if i == selected else COLOR_FG
            label = f"> {name} <" if i == selected else name
            if i < len(values) and values[i]:
                label = f"{label}: {values[i]}"
            self._text(label, (WIDTH // 2, y0 + i * 44), color=color, centered=True)

    # ---- screens ----
    def draw(self, state: WorldState):
        mode = state.mode
        if mode == MENU:
            self.screen.fill(COLOR_MENU_BG)
            self._text("FLAG CATCHER", (WIDTH // 2, 70), big=True, centered=True)
            self._options(list(MENU_OPTIONS), state.menu_index, 180)
        elif mode == SETTINGS:
            self.screen.fill(COLOR_MENU_BG)
            self._text("SETTINGS", (WIDTH // 2, 50), big=True, centered=True)
            s = state.settings
            values = ["ON" if s.sound_enabled else "OFF", s.difficulty.upper(), "", ""]
            self._options(list(SETTINGS_OPTIONS), state.settings_index, 140, values)
            swatch = pygame.Rect(WIDTH // 2 + 110, 140 + 2 * 44, 20, 20)
            pygame.draw.rect(self.screen, PLAYER_COLORS[s.color_index], swatch)
        elif mode == INSTRUCTIONS:
            self.screen.fill(COLOR_MENU_BG)
            self._text("HOW TO PLAY", (WIDTH // 2, 30), big=True, centered=True)
            for i, line in enumerate(HOW_TO_PLAY):
                self._text(line, (60, 110 + i * 28))
            self._text("Enter / Esc: back", (WIDTH // 2, HEIGHT - 40), centered=True)
        elif mode == LOADING:
            self.screen.fill((20, 20, 40))
            self._text(f"LEVEL {state.level}", (WIDTH // 2, HEIGHT // 2 - 70), big=True, centered=True)
            bar = pygame.Rect((WIDTH - 300) // 2, HEIGHT // 2, 300, 20)
            fill = bar.copy()
            fill.width = int(bar.width * min(1.0, state.loading_timer / LOADING_TICKS))
            pygame.draw.rect(self.screen, COLOR_ACCENT, fill)
            pygame.draw.rect(self.screen, COLOR_FG, bar, width=2)
        else:
            self.draw_gameplay(state)
            if mode == PAUSED:
                self._overlay()
                self._text("PAUSED", (WIDTH // 2, HEIGHT // 2 - 30), big=True, centered=True)
                self._text("P to resume", (WIDTH // 2, HEIGHT // 2 + 20), centered=True)
            elif mode == GAME_OVER:
                self._overlay(180)
                self._text("GAME OVER", (WIDTH // 2, HEIGHT // 2 - 50), COLOR_DANGER, big=True, centered=True)
                self._text(f"Score: {state.score}", (WIDTH // 2, HEIGHT // 2), centered=True)
                self._text("Enter: restart   Esc: menu", (WIDTH // 2, HEIGHT // 2 + 40), centered=True)
            elif mode == LEVEL_COMPLETE:
                self._overlay()
                self._text(f"LEVEL {state.level} COMPLETE", (WIDTH // 2, HEIGHT // 2 - 50),
                           COLOR_ACCENT, big=True, centered=True)
                self._text("Enter: next level   Esc: menu", (WIDTH // 2, HEIGHT // 2 + 20), centered=True)
            elif mode == VICTORY:
                self._overlay(120)
                self._text("VICTORY!", (WIDTH // 2, HEIGHT // 2 - 50), COLOR_ACCENT, big=True, centered=True)
                self._text(f"Final score: {state.score}", (WIDTH // 2, HEIGHT // 2), centered=True)
                self._text("Enter: play again   Esc: menu", (WIDTH // 2, HEIGHT // 2 + 40), centered=True)

    def draw_gameplay(self, state: WorldState):
        surf = self.screen
        cam = state.camera_x
        surf.fill(COLOR_BG)
        for p in state.platforms:
            color = COLOR_GROUND if p.ground else (COLOR_MOVING if p.kind == "moving" else COLOR_PLAT)
            pygame.draw.rect(surf, color, to_rect(p, cam))
        for mk in state.markers:
            r = to_rect(mk, cam)
            pygame.draw.line(surf, (139, 69, 19), r.topleft, r.bottomleft, 3)
            pygame.draw.rect(surf, COLOR_FLAG, pygame.Rect(r.x + 3, r.y, r.width - 3, r.height // 2))
            self._text(str(mk.value), (r.x + 6, r.y - 2), (0, 0, 0))
        for pu in state.pickups:
            r = to_rect(pu, cam)
            pygame.draw.rect(surf, COLOR_PICKUP, r, border_radius=4)
            self._text("S" if pu.kind == "speed" else "J", (r.x + 4, r.y), (0, 0, 0))
        for hz in state.hazards:
            pygame.draw.rect(surf, COLOR_DANGER if hz.kind == "patrol" else (200, 40, 160), to_rect(hz, cam))
        pl = state.player
        if pl is not None and not (pl.invulnerable and (pl.invulnerability // 10) % 2):
            pygame.draw.rect(surf, pl.color, to_rect(pl, cam))
        for fx in state.effects:
            x, y = int(fx.x - cam), int(fx.y)
            a = int(255 * fx.alpha)
            if fx.kind == "popup":
                img = self.font.render(fx.text or "", True, fx.color)
                img.set_alpha(a)
                surf.blit(img, (x, y))
            else:
                dot = pygame.Surface((3, 3), pygame.SRCALPHA)
                dot.fill((*fx.color, a))
                surf.blit(dot, (x, y))

        hud = (f"Score: {state.score}   Lives: {state.lives}   Level: {state.level}   "
               f"Flags: {state.markers_collected}/{state.markers_needed}")
        self._text(hud, (12, 10))
        self._text(f"{state.settings.difficulty.upper()}   P pause", (12, 32), (40, 40, 60))
