"""Audio cues for ReadySetBeep, synthesised with numpy and played through
``QSoundEffect``.

Every cue is a short sequence of enveloped sine notes written to a WAV
file in the app-support directory the first time it is needed.

Sound names
-----------
``beep``
    Countdown cue, 880 Hz for 180 ms.  Shorter than the one-second beep
    spacing so consecutive cues never overlap.
``segment_run``
    Two rising notes when a run segment begins.
``segment_walk``
    Two falling, softer notes when a walk segment begins.
``session_complete``
    Rising C major arpeggio when the session runs its course.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

log = logging.getLogger("readysetbeep.audio")

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "ReadySetBeep"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

BEEP = "beep"
SEGMENT_RUN = "segment_run"
SEGMENT_WALK = "segment_walk"
SESSION_COMPLETE = "session_complete"

SOUND_NAMES = (BEEP, SEGMENT_RUN, SEGMENT_WALK, SESSION_COMPLETE)

SAMPLE_RATE = 44100


class AudioUnavailableError(RuntimeError):
    """The requested sound cannot be played right now."""


# ═══════════════════════════════════════════════════════════════════════════
#  SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _tone(
    freq: float,
    seconds: float,
    *,
    gain: float = 0.6,
    attack_s: float = 0.004,
    release_s: float = 0.03,
) -> np.ndarray:
    """Sine note with a linear fade in and fade out."""
    n = int(SAMPLE_RATE * seconds)
    t = np.arange(n) / SAMPLE_RATE
    samples = np.sin(2 * np.pi * freq * t) * gain

    fade_in = min(n, int(SAMPLE_RATE * attack_s))
    fade_out = min(n - fade_in, int(SAMPLE_RATE * release_s))
    if fade_in:
        samples[:fade_in] *= np.linspace(0.0, 1.0, fade_in)
    if fade_out:
        samples[n - fade_out:] *= np.linspace(1.0, 0.0, fade_out)
    return samples


def _sequence(notes: list[tuple[float, float]], *, gap_s: float = 0.03, **tone_kw) -> np.ndarray:
    """Concatenate ``(freq, seconds)`` notes with *gap_s* of silence after each."""
    gap = np.zeros(int(SAMPLE_RATE * gap_s))
    parts: list[np.ndarray] = []
    for freq, seconds in notes:
        parts.append(_tone(freq, seconds, **tone_kw))
        parts.append(gap)
    return np.concatenate(parts)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Encode float samples in -1..1 as mono 16-bit PCM WAV."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def _generate_beep() -> bytes:
    return _to_wav_bytes(_sequence([(880.0, 0.18)], gap_s=0.05, gain=0.8))


def _generate_run_cue() -> bytes:
    return _to_wav_bytes(_sequence([(880.0, 0.14), (1318.51, 0.14)]))


def _generate_walk_cue() -> bytes:
    return _to_wav_bytes(_sequence([(659.25, 0.14), (440.0, 0.14)], gain=0.45))


def _generate_complete() -> bytes:
    notes = [(523.25, 0.10), (659.25, 0.10), (783.99, 0.10), (1046.50, 0.35)]
    return _to_wav_bytes(_sequence(notes, gap_s=0.02, gain=0.5, release_s=0.08))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    BEEP: _generate_beep,
    SEGMENT_RUN: _generate_run_cue,
    SEGMENT_WALK: _generate_walk_cue,
    SESSION_COMPLETE: _generate_complete,
}


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class SoundPlayer(QObject):
    """Audio output for the app's cues.

    Usage::

        player = SoundPlayer(parent=self)
        player.play(BEEP, volume=0.5)

    ``play`` mixes over whatever else is playing on the system; nothing
    here pauses or ducks other audio.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.5
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}
        self._prepare()

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_volume(self, volume: float) -> None:
        """Volume (0.0-1.0) for cues played without an explicit one."""
        self._volume = max(0.0, min(float(volume), 1.0))

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str, volume: float | None = None) -> None:
        """Play cue *name*.  No-op while disabled.

        Raises :class:`AudioUnavailableError` if the cue never loaded.
        """
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None or effect.status() == QSoundEffect.Status.Error:
            raise AudioUnavailableError(f"Sound {name!r} is not available")
        level = self._volume if volume is None else max(0.0, min(float(volume), 1.0))
        effect.setVolume(level)
        effect.play()

    def _prepare(self) -> None:
        """Write missing cue files, then load one effect per cue on disk."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, generate in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(generate())
        except OSError as exc:
            log.warning("Could not write sound cache in %s: %s", self._sounds_dir, exc)

        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                log.warning("Sound %s missing from %s", name, self._sounds_dir)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            self._effects[name] = effect
