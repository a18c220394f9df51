# src/game/modes.py
"""
Top-level game modes and the intents that move between them.

Every intent is safe to call in any mode: when it does not apply it is
logged at debug level and ignored, so a UI can fire intents out of order
without breaking the tick loop.
"""
from __future__ import annotations
import logging
from typing import Optional

from .audio import AudioCues
from .config import (
    LOADING_TICKS, DIFFICULTIES, PLAYER_COLORS, MAX_LEVEL,
    MENU, SETTINGS, INSTRUCTIONS, LOADING, PLAYING, PAUSED,
    LEVEL_COMPLETE, GAME_OVER, VICTORY,
)
from .controls import InputState, NO_INPUT
from .entities import decay_effects
from .world import WorldState, load_level, starting_lives, step

log = logging.getLogger(__name__)

TERMINAL_MODES = (LEVEL_COMPLETE, GAME_OVER, VICTORY)

MENU_OPTIONS = ("Start Game", "Settings", "Instructions")
SETTINGS_OPTIONS = ("Sound", "Difficulty", "Player Color", "Back")


def _ignored(intent: str, state: WorldState) -> WorldState:
    log.debug("Ignoring %s in mode %s", intent, state.mode)
    return state


def _set_mode(state: WorldState, mode: str):
    if state.mode != mode:
        log.info("Mode %s -> %s", state.mode, mode)
    state.mode = mode


def _begin_loading(state: WorldState):
    state.loading_timer = 0
    state.markers_collected = 0
    load_level(state)
    _set_mode(state, LOADING)


# ----------------------------------------------------------------------
# Intents
# ----------------------------------------------------------------------

def _new_run(state: WorldState) -> WorldState:
    state.score = 0
    state.lives = starting_lives(state.settings.difficulty)
    state.level = 1
    _begin_loading(state)
    return state


def start_game(state: WorldState) -> WorldState:
    """New run from level 1, started from the menu."""
    if state.mode != MENU:
        return _ignored("start_game", state)
    return _new_run(state)


def restart(state: WorldState) -> WorldState:
    """New run from level 1 after gameOver or victory."""
    if state.mode not in (GAME_OVER, VICTORY):
        return _ignored("restart", state)
    return _new_run(state)


def advance_level(state: WorldState) -> WorldState:
    if state.mode != LEVEL_COMPLETE or state.level >= MAX_LEVEL:
        return _ignored("advance_level", state)
    state.level += 1
    _begin_loading(state)
    return state


def toggle_pause(state: WorldState) -> WorldState:
    if state.mode == PLAYING:
        state.previous_mode = PLAYING
        _set_mode(state, PAUSED)
    elif state.mode == PAUSED:
        _set_mode(state, state.previous_mode)
    else:
        return _ignored("toggle_pause", state)
    return state


def return_to_menu(state: WorldState) -> WorldState:
    """Leave a finished screen (or settings/instructions) for the main menu."""
    if state.mode not in TERMINAL_MODES + (SETTINGS, INSTRUCTIONS):
        return _ignored("return_to_menu", state)
    if state.mode in TERMINAL_MODES:
        state.player = None
        state.platforms = []
        state.markers = []
        state.hazards = []
        state.pickups = []
        state.effects = []
        state.menu_index = 0
    state.camera_x = 0.0
    _set_mode(state, MENU)
    return state


def open_settings(state: WorldState) -> WorldState:
    if state.mode != MENU:
        return _ignored("open_settings", state)
    state.settings_index = 0
    _set_mode(state, SETTINGS)
    return state


def open_instructions(state: WorldState) -> WorldState:
    if state.mode != MENU:
        return _ignored("open_instructions", state)
    _set_mode(state, INSTRUCTIONS)
    return state


def move_cursor(state: WorldState, delta: int) -> WorldState:
    if state.mode == MENU:
        state.menu_index = (state.menu_index + delta) % len(MENU_OPTIONS)
    elif state.mode == SETTINGS:
        state.settings_index = (state.settings_index + delta) % len(SETTINGS_OPTIONS)
    else:
        return _ignored("move_cursor", state)
    return state


def select_menu_option(state: WorldState, index: Optional[int] = None) -> WorldState:
    """Activate a main-menu entry (the highlighted one by default)."""
    if state.mode != MENU:
        return _ignored("select_menu_option", state)
    if index is not None:
        state.menu_index = index % len(MENU_OPTIONS)
    choice = MENU_OPTIONS[state.menu_index]
    if choice == "Start Game":
        return start_game(state)
    if choice == "Settings":
        return open_settings(state)
    return open_instructions(state)


def change_setting(state: WorldState, increase: bool = True) -> WorldState:
    """Cycle the highlighted setting. On "Back" this returns to the menu."""
    if state.mode != SETTINGS:
        return _ignored("change_setting", state)
    s = state.settings
    option = SETTINGS_OPTIONS[state.settings_index]
    step_by = 1 if increase else -1
    if option == "Sound":
        s.sound_enabled = not s.sound_enabled
    elif option == "Difficulty":
        i = DIFFICULTIES.index(s.difficulty) if s.difficulty in DIFFICULTIES else 1
        s.difficulty = DIFFICULTIES[(i + step_by) % len(DIFFICULTIES)]
        state.lives = starting_lives(s.difficulty)
    elif option == "Player Color":
        s.color_index = (s.color_index + step_by) % len(PLAYER_COLORS)
    else:
        return return_to_menu(state)
    return state


# ----------------------------------------------------------------------
# Input dispatch + tick
# ----------------------------------------------------------------------

def handle_input(state: WorldState, pressed: InputState) -> WorldState:
    """Translate freshly pressed keys into intents for the current mode."""
    mode = state.mode
    if mode == MENU:
        if pressed.up:
            move_cursor(state, -1)
        elif pressed.down:
            move_cursor(state, +1)
        elif pressed.confirm or pressed.jump:
            select_menu_option(state)
    elif mode == SETTINGS:
        if pressed.up:
            move_cursor(state, -1)
        elif pressed.down:
            move_cursor(state, +1)
        elif pressed.left or pressed.right:
            change_setting(state, increase=pressed.right)
        elif pressed.confirm or pressed.jump:
            change_setting(state, increase=True)
        elif pressed.cancel:
            return_to_menu(state)
    elif mode == INSTRUCTIONS:
        if pressed.confirm or pressed.cancel:
            return_to_menu(state)
    elif mode in (PLAYING, PAUSED):
        if pressed.pause:
            toggle_pause(state)
    elif mode == LEVEL_COMPLETE:
        if pressed.confirm:
            advance_level(state)
        elif pressed.cancel:
            return_to_menu(state)
    elif mode in (GAME_OVER, VICTORY):
        if pressed.confirm:
            restart(state)
        elif pressed.cancel:
            return_to_menu(state)
    return state


def update(state: WorldState, inputs: InputState = NO_INPUT,
           audio: Optional[AudioCues] = None) -> WorldState:
    """Run whatever the current mode runs for one tick (no input dispatch)."""
    mode = state.mode
    if mode == LOADING:
        state.loading_timer += 1
        if state.loading_timer >= LOADING_TICKS:
            _set_mode(state, PLAYING)
    elif mode == PLAYING:
        step(state, inputs, audio)
    elif mode in TERMINAL_MODES:
        state.effects = decay_effects(state.effects)
    # menu, settings, instructions, paused: idle
    return state


def tick(state: WorldState, inputs: InputState = NO_INPUT,
         audio: Optional[AudioCues] = None) -> WorldState:
    """One frame: dispatch key presses, then advance the active mode."""
    handle_input(state, inputs.pressed_since(state.prev_inputs))
    state.prev_inputs = inputs
    update(state, inputs, audio)
    return state
