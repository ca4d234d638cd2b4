"""Tests for countdown beeps, sound synthesis and the sound player.

Covers:
- BeepScheduler spacing, failure reporting and pause independence
- WAV generators produce valid mono 16-bit audio
- SoundPlayer cache generation and playback API
"""

from __future__ import annotations

import io
import logging
import wave

import pytest

from readysetbeep.audio.beeps import BeepScheduler, BEEP_SPACING_MS
from readysetbeep.audio.sounds import (
    SoundPlayer,
    AudioUnavailableError,
    BEEP,
    SOUND_NAMES,
    _generate_beep,
    _generate_run_cue,
    _generate_walk_cue,
    _generate_complete,
)

from helpers import FakeDelay, FakePlayer, SignalCollector, make_engine


# ═══════════════════════════════════════════════════════════════════════
#  BEEP SCHEDULER
# ═══════════════════════════════════════════════════════════════════════


class TestBeepScheduler:

    def test_cues_spaced_one_second_apart(self, player):
        delay = FakeDelay()
        sched = BeepScheduler(player, delay=delay)
        sched.schedule(3, 0.6)
        assert delay.delays == [0, BEEP_SPACING_MS, 2 * BEEP_SPACING_MS]
        assert player.played == []

        delay.run_all()
        assert player.played == [(BEEP, 0.6)] * 3

    def test_cue_played_signal(self, player):
        delay = FakeDelay()
        sched = BeepScheduler(player, delay=delay)
        c = SignalCollector()
        sched.cue_played.connect(c)
        sched.schedule(2, 0.5)
        delay.run_all()
        assert c.items == [0, 1]

    def test_zero_count_schedules_nothing(self, player):
        delay = FakeDelay()
        BeepScheduler(player, delay=delay).schedule(0, 0.5)
        assert delay.calls == []

    def test_custom_spacing(self, player):
        delay = FakeDelay()
        BeepScheduler(player, delay=delay, spacing_ms=250).schedule(3, 0.5)
        assert delay.delays == [0, 250, 500]

    def test_unavailable_audio_is_reported_not_raised(self, caplog):
        player = FakePlayer(available=False)
        delay = FakeDelay()
        sched = BeepScheduler(player, delay=delay)
        failed = SignalCollector()
        sched.cue_failed.connect(failed)

        sched.schedule(2, 0.5)
        with caplog.at_level(logging.WARNING, logger="readysetbeep.audio"):
            delay.run_all()

        assert [index for index, _ in failed.items] == [0, 1]
        assert "dropped" in caplog.text

    def test_cues_keep_playing_after_pause(self, player, clock):
        delay = FakeDelay()
        sched = BeepScheduler(player, delay=delay)
        eng = make_engine(clock=clock, beeps=sched, run_duration=5, beep_count=3)
        eng.start()
        clock.fire(2)  # remaining 3 → cues queued
        assert len(delay.calls) == 3

        eng.pause()
        delay.run_all()
        assert player.names() == [BEEP, BEEP, BEEP]

    def test_qt_delay_fires(self, qapp, player):
        from PyQt6.QtTest import QTest

        sched = BeepScheduler(player, spacing_ms=10)
        sched.schedule(2, 0.5)
        QTest.qWait(200)
        assert player.names() == [BEEP, BEEP]


# ═══════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


class TestWavGeneration:

    @pytest.mark.parametrize("gen_fn", [
        _generate_beep,
        _generate_run_cue,
        _generate_walk_cue,
        _generate_complete,
    ])
    def test_wav_is_parseable(self, gen_fn):
        data = gen_fn()
        assert data[:4] == b"RIFF"
        with wave.open(io.BytesIO(data), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 44100
            assert wf.getnframes() > 0

    def test_beep_shorter_than_spacing(self):
        with wave.open(io.BytesIO(_generate_beep()), "rb") as wf:
            seconds = wf.getnframes() / wf.getframerate()
        assert seconds < BEEP_SPACING_MS / 1000


# ═══════════════════════════════════════════════════════════════════════
#  SOUND PLAYER
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestSoundPlayer:

    def test_wav_files_generated(self, tmp_path):
        SoundPlayer(sounds_dir=tmp_path)
        for name in SOUND_NAMES:
            path = tmp_path / f"{name}.wav"
            assert path.exists(), f"Missing WAV: {name}"
            assert path.stat().st_size > 100

    def test_existing_files_not_rewritten(self, tmp_path):
        SoundPlayer(sounds_dir=tmp_path)
        path = tmp_path / f"{BEEP}.wav"
        before = path.stat().st_mtime_ns
        SoundPlayer(sounds_dir=tmp_path)
        assert path.stat().st_mtime_ns == before

    def test_unknown_sound_raises(self, tmp_path):
        player = SoundPlayer(sounds_dir=tmp_path)
        with pytest.raises(AudioUnavailableError):
            player.play("nonexistent_sound")

    def test_disabled_is_noop(self, tmp_path):
        player = SoundPlayer(sounds_dir=tmp_path)
        player.set_enabled(False)
        assert player.enabled is False
        player.play("nonexistent_sound")  # no raise while disabled

    @pytest.mark.parametrize("value, expected", [
        (0.3, 0.3),
        (2.0, 1.0),
        (-1.0, 0.0),
    ])
    def test_set_volume_clamps(self, tmp_path, value, expected):
        player = SoundPlayer(sounds_dir=tmp_path)
        player.set_volume(value)
        assert player.volume == pytest.approx(expected)
