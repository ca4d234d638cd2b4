"""Audio package."""

from .sounds import SoundPlayer, AudioUnavailableError, SOUND_NAMES, BEEP
from .beeps import BeepScheduler

__all__ = ["SoundPlayer", "AudioUnavailableError", "SOUND_NAMES", "BEEP", "BeepScheduler"]
