# src/game/audio.py
"""
Audio cue sinks.

The simulation only ever calls on_jump / on_kill / on_flag_collect and never
waits for them. ToneAudio synthesises short tones with numpy; when the mixer
cannot be opened every cue quietly becomes a no-op.
"""
from __future__ import annotations
import logging
from typing import Dict, Optional, Protocol

import numpy as np
import pygame

log = logging.getLogger(__name__)

SAMPLE_RATE = 22050


class AudioCues(Protocol):
    def on_jump(self) -> None: ...
    def on_kill(self) -> None: ...
    def on_flag_collect(self) -> None: ...


class SilentAudio:
    """No-op sink used headless, in tests, and when sound is disabled."""

    def on_jump(self) -> None:
        pass

    def on_kill(self) -> None:
        pass

    def on_flag_collect(self) -> None:
        pass


def _envelope(n: int, vol: float) -> np.ndarray:
    # exponential ramp from vol down to 0.01, like a short pluck
    return vol * np.exp(np.linspace(0.0, np.log(0.01 / vol), n))


def _square(freq: float, dur: float, vol: float) -> np.ndarray:
    n = max(1, int(dur * SAMPLE_RATE))
    t = np.arange(n) / SAMPLE_RATE
    return np.where(np.mod(t * freq, 1.0) < 0.5, 1.0, -1.0) * _envelope(n, vol)


def _sine(freq: float, dur: float, vol: float) -> np.ndarray:
    n = max(1, int(dur * SAMPLE_RATE))
    t = np.arange(n) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t) * _envelope(n, vol)


def _saw_sweep(f0: float, f1: float, dur: float, vol: float) -> np.ndarray:
    n = max(1, int(dur * SAMPLE_RATE))
    f = np.geomspace(f0, f1, n)
    phase = np.cumsum(f) / SAMPLE_RATE
    return (2.0 * np.mod(phase, 1.0) - 1.0) * _envelope(n, vol)


def build_waveforms() -> Dict[str, np.ndarray]:
    """Mono float waveforms in [-1, 1] for each cue."""
    # C then E
    chime = np.concatenate([_sine(523, 0.1, 0.08), _sine(659, 0.2, 0.08)])
    return {
        "jump": _square(200, 0.1, 0.05),
        "kill": _saw_sweep(400, 100, 0.3, 0.1),
        "flag": chime,
    }


class ToneAudio:
    """pygame.mixer backed sink. Construction never raises."""

    def __init__(self):
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            _freq, _size, channels = pygame.mixer.get_init()
            for name, wave in build_waveforms().items():
                pcm = (wave * 32767).astype(np.int16)
                if channels > 1:
                    pcm = np.repeat(pcm[:, None], channels, axis=1)
                self._sounds[name] = pygame.sndarray.make_sound(np.ascontiguousarray(pcm))
        except pygame.error as ex:
            log.warning("Audio unavailable, cues disabled: %s", ex)
            self._sounds = {}

    def _play(self, name: str) -> None:
        snd: Optional["pygame.mixer.Sound"] = self._sounds.get(name)
        if snd is not None:
            snd.play()

    def on_jump(self) -> None:
        self._play("jump")

    def on_kill(self) -> None:
        self._play("kill")

    def on_flag_collect(self) -> None:
        self._play("flag")
