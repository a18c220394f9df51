# src/game/world.py
"""
World state and the per-tick simulation step.

WorldState is the only owner of game data. `step` mutates the state it is
given and hands it back; nothing here draws or touches the keyboard.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .audio import AudioCues, SilentAudio
from .config import (
    WIDTH, HEIGHT, WORLD_WIDTH, FALL_MARGIN, CAMERA_SMOOTHING,
    MARKER_SCORE, MARKERS_NEEDED, PICKUP_SCORE, STOMP_EPSILON, STOMP_BOUNCE,
    STOMP_SCORE, MAX_LEVEL, DIFFICULTY_LIVES, SEED_DEFAULT,
    COLOR_FLAG, COLOR_PICKUP, COLOR_DANGER,
    MENU, PLAYING, LEVEL_COMPLETE, GAME_OVER, VICTORY,
)
from .controls import InputState, NO_INPUT
from .entities import (
    Platform, Marker, Hazard, Pickup, Effect,
    spawn_particles, score_popup, decay_effects,
)
from .geometry import overlaps, center
from .level import build_level
from .player import Player, make_player

log = logging.getLogger(__name__)

_SILENT = SilentAudio()


@dataclass
class Settings:
    difficulty: str = "normal"
    sound_enabled: bool = True
    color_index: int = 0


@dataclass
class WorldState:
    mode: str = MENU
    previous_mode: str = MENU
    settings: Settings = field(default_factory=Settings)
    score: int = 0
    lives: int = 3
    level: int = 1
    markers_collected: int = 0
    markers_needed: int = MARKERS_NEEDED
    camera_x: float = 0.0
    loading_timer: int = 0
    menu_index: int = 0
    settings_index: int = 0

    player: Optional[Player] = None
    platforms: List[Platform] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    hazards: List[Hazard] = field(default_factory=list)
    pickups: List[Pickup] = field(default_factory=list)
    effects: List[Effect] = field(default_factory=list)

    prev_inputs: Optional[InputState] = field(default=None, repr=False)
    rng: random.Random = field(default_factory=lambda: random.Random(SEED_DEFAULT),
                               repr=False, compare=False)


def new_world(settings: Optional[Settings] = None, seed: Optional[int] = SEED_DEFAULT) -> WorldState:
    """Fresh state sitting in the menu. seed=None gives a random particle spray."""
    st = WorldState(settings=settings or Settings())
    st.rng = random.Random(seed)
    st.lives = starting_lives(st.settings.difficulty)
    return st


def starting_lives(difficulty: str) -> int:
    return DIFFICULTY_LIVES.get(difficulty, DIFFICULTY_LIVES["normal"])


def load_level(state: WorldState) -> WorldState:
    """Replace every entity with a fresh build of state.level."""
    layout = build_level(state.level, state.settings.difficulty)
    state.player = make_player(state.settings.color_index)
    state.platforms = layout.platforms
    state.markers = layout.markers
    state.hazards = layout.hazards
    state.pickups = layout.pickups
    state.effects = []
    state.camera_x = 0.0
    return state


def cues_for(state: WorldState, audio: Optional[AudioCues]) -> AudioCues:
    if audio is None or not state.settings.sound_enabled:
        return _SILENT
    return audio


# ----------------------------------------------------------------------
# Simulation step
# ----------------------------------------------------------------------

def step(state: WorldState, inputs: InputState = NO_INPUT, audio: Optional[AudioCues] = None) -> WorldState:
    """Advance a playing world by one tick."""
    player = state.player
    if player is None:
        return state
    cues = cues_for(state, audio)

    player.update(inputs, state.platforms, cues)
    for hz in state.hazards:
        hz.update(state.platforms)
    for plat in state.platforms:
        if plat.updatable:
            plat.update()
    state.effects = decay_effects(state.effects)

    _collect_markers(state, cues)
    _collect_pickups(state)
    _resolve_hazards(state, cues)
    if player.y > HEIGHT + FALL_MARGIN:
        player_hit(state)

    update_camera(state)
    _check_level_state(state)
    return state


def _collect_markers(state: WorldState, cues: AudioCues):
    kept = []
    for mk in state.markers:
        if overlaps(state.player, mk):
            points = mk.value * MARKER_SCORE
            state.markers_collected += 1
            state.score += points
            state.effects.extend(spawn_particles(state.rng, mk.x, mk.y, COLOR_FLAG, 8))
            state.effects.append(score_popup(mk.x, mk.y, f"+{points}"))
            cues.on_flag_collect()
        else:
            kept.append(mk)
    state.markers = kept


def _collect_pickups(state: WorldState):
    kept = []
    for pu in state.pickups:
        if overlaps(state.player, pu):
            state.score += PICKUP_SCORE
            state.player.apply_power_up(pu.kind)
            state.effects.extend(spawn_particles(state.rng, pu.x, pu.y, COLOR_PICKUP, 6))
        else:
            kept.append(pu)
    state.pickups = kept


def is_stomp(player: Player, hazard: Hazard) -> bool:
    """Player coming down on the hazard from clearly above."""
    return player.vy > 0 and player.y < hazard.y - STOMP_EPSILON


def _resolve_hazards(state: WorldState, cues: AudioCues):
    player = state.player
    for hz in list(state.hazards):
        if not overlaps(player, hz):
            continue
        if is_stomp(player, hz):
            defeat_hazard(state, hz, cues)
        elif not player.invulnerable:
            player_hit(state)


def defeat_hazard(state: WorldState, hazard: Hazard, cues: AudioCues):
    state.hazards.remove(hazard)
    state.player.vy = STOMP_BOUNCE
    state.score += STOMP_SCORE
    state.effects.append(score_popup(hazard.x, hazard.y, f"+{STOMP_SCORE}"))
    cx, cy = center(hazard)
    state.effects.extend(spawn_particles(state.rng, cx, cy, COLOR_DANGER, 12))
    state.effects.extend(spawn_particles(state.rng, cx, cy, COLOR_FLAG, 8))
    cues.on_kill()


def player_hit(state: WorldState):
    state.lives = max(0, state.lives - 1)
    state.player.respawn()
    state.effects.extend(spawn_particles(state.rng, state.player.x, state.player.y, COLOR_DANGER, 10))
    log.info("Player hit, lives left: %d", state.lives)
    if state.lives <= 0:
        state.mode = GAME_OVER
        log.info("Game over at level %d, score %d", state.level, state.score)


def update_camera(state: WorldState):
    target_x = state.player.x - WIDTH / 2
    state.camera_x += (target_x - state.camera_x) * CAMERA_SMOOTHING
    state.camera_x = max(0.0, min(state.camera_x, WORLD_WIDTH - WIDTH))


def _check_level_state(state: WorldState):
    if state.mode != PLAYING:
        return
    if state.markers_collected >= state.markers_needed:
        state.mode = VICTORY if state.level >= MAX_LEVEL else LEVEL_COMPLETE
        log.info("Level %d cleared -> %s (score %d)", state.level, state.mode, state.score)
