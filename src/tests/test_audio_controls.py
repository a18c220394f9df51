# src/tests/test_audio_controls.py
"""
Audio cue sinks and the logical input snapshot.

Usage (from repo root):
  python -m src.tests.test_audio_controls
"""
from __future__ import annotations

import numpy as np
import pygame

from src.game import audio as audio_mod
from src.game.audio import SAMPLE_RATE, SilentAudio, ToneAudio, build_waveforms
from src.game.controls import InputState, NO_INPUT


def test_waveforms_are_mono_and_bounded():
    waves = build_waveforms()
    assert set(waves) == {"jump", "kill", "flag"}
    assert len(waves["jump"]) == int(0.1 * SAMPLE_RATE)
    assert len(waves["kill"]) == int(0.3 * SAMPLE_RATE)
    assert len(waves["flag"]) == int(0.1 * SAMPLE_RATE) + int(0.2 * SAMPLE_RATE)
    for name, w in waves.items():
        assert w.ndim == 1, name
        assert np.all(np.isfinite(w)), name
        assert np.max(np.abs(w)) <= 1.0, name


def test_tone_audio_without_mixer_is_silent():
    def broken_init(*args, **kwargs):
        raise pygame.error("no audio device")

    mixer = audio_mod.pygame.mixer
    orig_init, orig_get_init = mixer.init, mixer.get_init
    mixer.init = broken_init
    mixer.get_init = lambda: None
    try:
        sink = ToneAudio()
    finally:
        mixer.init, mixer.get_init = orig_init, orig_get_init

    assert sink._sounds == {}
    assert sink.on_jump() is None
    assert sink.on_kill() is None
    assert sink.on_flag_collect() is None


def test_silent_audio_cues_are_noops():
    sink = SilentAudio()
    assert sink.on_jump() is None
    assert sink.on_kill() is None
    assert sink.on_flag_collect() is None


def test_input_from_mapping():
    st = InputState.from_mapping({"left": 1, "jump": True})
    assert st == InputState(left=True, jump=True)
    assert InputState.from_mapping({}) == NO_INPUT


def test_input_from_mapping_rejects_unknown_keys():
    try:
        InputState.from_mapping({"left": True, "fire": True})
    except ValueError as ex:
        assert "fire" in str(ex)
    else:
        raise AssertionError("unknown logical key must raise ValueError")


def test_pressed_since_reports_rising_edges_only():
    held = InputState(left=True, pause=True)
    now = InputState(left=True, pause=True, jump=True)
    assert now.pressed_since(held) == InputState(jump=True)
    assert now.pressed_since(None) == now
    assert NO_INPUT.pressed_since(held) == NO_INPUT


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
