# src/tests/test_modes.py
"""
Mode machine: transitions, ignored intents, input-driven navigation.

Usage (from repo root):
  python -m src.tests.test_modes
"""
from __future__ import annotations

from src.game.controls import InputState, NO_INPUT
from src.game.entities import Effect
from src.game.modes import (
    tick, start_game, restart, advance_level, toggle_pause, return_to_menu,
    select_menu_option, change_setting, open_settings,
    MENU, SETTINGS, INSTRUCTIONS, LOADING, PLAYING, PAUSED,
    LEVEL_COMPLETE, GAME_OVER, VICTORY,
)
from src.game.world import Settings, new_world


def press(st, **keys):
    """Press then release, so the next press is a fresh edge."""
    tick(st, InputState(**keys))
    tick(st, NO_INPUT)


def playing(difficulty: str = "normal"):
    st = new_world(Settings(difficulty=difficulty))
    start_game(st)
    for _ in range(120):
        tick(st, NO_INPUT)
    return st


def test_initial_mode_is_menu():
    st = new_world()
    assert st.mode == MENU and st.player is None


def test_loading_lasts_exactly_120_ticks():
    st = new_world()
    start_game(st)
    assert st.mode == LOADING
    for _ in range(119):
        tick(st, NO_INPUT)
    assert st.mode == LOADING
    tick(st, NO_INPUT)
    assert st.mode == PLAYING


def test_starting_lives_follow_difficulty():
    for difficulty, lives in (("easy", 5), ("normal", 3), ("hard", 2)):
        st = new_world(Settings(difficulty=difficulty))
        start_game(st)
        assert st.lives == lives


def test_invalid_intents_are_ignored():
    st = new_world()
    for intent in (advance_level, toggle_pause, restart, return_to_menu):
        intent(st)
        assert st.mode == MENU

    st = playing()
    for intent in (advance_level, restart, return_to_menu, start_game, select_menu_option,
                   change_setting, open_settings):
        intent(st)
        assert st.mode == PLAYING
    assert st.level == 1


def test_pause_freezes_and_resume_restores_playing():
    st = playing()
    toggle_pause(st)
    assert st.mode == PAUSED and st.previous_mode == PLAYING
    y = st.player.y
    for _ in range(30):
        tick(st, NO_INPUT)
    assert st.player.y == y
    toggle_pause(st)
    assert st.mode == PLAYING


def test_pause_key_is_edge_triggered():
    st = playing()
    tick(st, InputState(pause=True))
    assert st.mode == PAUSED
    tick(st, InputState(pause=True))        # still held
    assert st.mode == PAUSED
    tick(st, NO_INPUT)
    tick(st, InputState(pause=True))
    assert st.mode == PLAYING


def test_menu_cursor_wraps_and_selects():
    st = new_world()
    press(st, up=True)
    assert st.menu_index == 2
    press(st, down=True)
    assert st.menu_index == 0
    press(st, down=True)
    assert st.menu_index == 1
    press(st, confirm=True)
    assert st.mode == SETTINGS


def test_menu_instructions_and_back():
    st = new_world()
    select_menu_option(st, 2)
    assert st.mode == INSTRUCTIONS
    press(st, cancel=True)
    assert st.mode == MENU


def test_menu_start_with_space():
    st = new_world()
    press(st, jump=True)
    assert st.mode == LOADING
    assert st.player is not None and len(st.markers) == 3


def test_settings_cycle_values():
    st = new_world()
    open_settings(st)
    assert st.mode == SETTINGS and st.settings_index == 0

    change_setting(st)
    assert st.settings.sound_enabled is False

    press(st, down=True)                    # Difficulty
    press(st, right=True)
    assert st.settings.difficulty == "hard"
    press(st, right=True)
    assert st.settings.difficulty == "easy"
    press(st, left=True)
    assert st.settings.difficulty == "hard"

    press(st, down=True)                    # Player Color
    press(st, left=True)
    assert st.settings.color_index == 5

    press(st, down=True)                    # Back
    press(st, confirm=True)
    assert st.mode == MENU


def test_settings_difficulty_reaches_new_game():
    st = new_world()
    open_settings(st)
    st.settings_index = 1
    change_setting(st, increase=False)
    assert st.settings.difficulty == "easy"
    return_to_menu(st)
    select_menu_option(st, 0)
    assert st.lives == 5
    assert all(abs(h.speed - 0.8) < 1e-9 for h in st.hazards)


def test_advance_level_rebuilds():
    st = playing()
    st.mode = LEVEL_COMPLETE
    st.markers_collected = 3
    st.score = 700
    press(st, confirm=True)
    assert st.mode == LOADING
    assert st.level == 2
    assert st.markers_collected == 0
    assert st.score == 700
    assert len(st.hazards) == 4 and len(st.markers) == 3


def test_advance_level_never_passes_max():
    st = playing()
    st.level = 5
    st.mode = LEVEL_COMPLETE
    advance_level(st)
    assert st.level == 5 and st.mode == LEVEL_COMPLETE


def test_restart_from_game_over_and_victory():
    for terminal in (GAME_OVER, VICTORY):
        st = playing("hard")
        st.mode = terminal
        st.score, st.lives, st.level, st.markers_collected = 1234, 0, 4, 2
        press(st, confirm=True)
        assert st.mode == LOADING
        assert (st.score, st.lives, st.level, st.markers_collected) == (0, 2, 1, 0)


def test_start_game_only_from_menu():
    for terminal in (GAME_OVER, VICTORY, LEVEL_COMPLETE):
        st = playing()
        st.mode = terminal
        st.score, st.level = 900, 3
        start_game(st)
        assert st.mode == terminal
        assert (st.score, st.level) == (900, 3)
    st = playing()
    st.mode = GAME_OVER
    restart(st)
    assert st.mode == LOADING and st.score == 0 and st.level == 1


def test_return_to_menu_from_terminal_screens():
    for terminal in (GAME_OVER, LEVEL_COMPLETE, VICTORY):
        st = playing()
        st.mode = terminal
        st.menu_index = 2
        return_to_menu(st)
        assert st.mode == MENU
        assert st.player is None and st.hazards == []
        assert st.camera_x == 0.0 and st.menu_index == 0


def test_terminal_screens_keep_decaying_effects():
    st = playing()
    st.mode = GAME_OVER
    st.effects = [Effect(0, 0, 0, 0, life=2)]
    y = st.player.y
    tick(st, NO_INPUT)
    assert st.effects[0].life == 1
    tick(st, NO_INPUT)
    assert st.effects == []
    assert st.player.y == y, "the player is frozen on terminal screens"


def test_playing_collects_all_markers_to_level_complete():
    st = playing()
    pl = st.player
    for mk in list(st.markers):
        mk.x, mk.y = pl.x, pl.y
        tick(st, NO_INPUT)
    assert st.markers == []
    assert st.score == 600
    assert st.mode == LEVEL_COMPLETE


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
