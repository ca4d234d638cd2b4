"""Shared test helpers for ReadySetBeep."""

from readysetbeep.audio.sounds import AudioUnavailableError
from readysetbeep.timer.engine import IntervalEngine
from readysetbeep.timer.plan import SessionSettings


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualClock:
    """Tick clock that only fires when the test says so."""

    def __init__(self):
        self._callback = None
        self.is_active = False
        self.starts = 0
        self.stops = 0

    def start(self, callback):
        self._callback = callback
        self.is_active = True
        self.starts += 1

    def stop(self):
        self.is_active = False
        self.stops += 1

    def fire(self, times: int = 1):
        """Deliver up to *times* ticks while armed."""
        for _ in range(times):
            if not self.is_active:
                break
            self._callback()


class FakeDelay:
    """Records delayed callbacks instead of waiting for them."""

    def __init__(self):
        self.calls: list[tuple[int, object]] = []

    def __call__(self, ms, callback):
        self.calls.append((ms, callback))

    @property
    def delays(self) -> list[int]:
        return [ms for ms, _ in self.calls]

    def run_all(self):
        pending, self.calls = self.calls, []
        for _, callback in sorted(pending, key=lambda c: c[0]):
            callback()


class FakePlayer:
    """Audio port that records what would have been played."""

    def __init__(self, *, available: bool = True):
        self.available = available
        self.enabled = True
        self.played: list[tuple[str, float | None]] = []

    def set_enabled(self, enabled: bool):
        self.enabled = enabled

    def play(self, name, volume=None):
        if not self.available:
            raise AudioUnavailableError(f"Sound {name!r} is not available")
        self.played.append((name, volume))

    def names(self) -> list[str]:
        return [name for name, _ in self.played]


class FakeBeeps:
    def __init__(self):
        self.requests: list[tuple[int, float]] = []

    def schedule(self, count, volume):
        self.requests.append((count, volume))


class FakeWakeScheduler:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.handler = None
        self.submissions: list[tuple[str, float]] = []

    def register(self, handler):
        self.handler = handler

    def submit(self, identifier, delay_seconds):
        if self.fail:
            raise RuntimeError("scheduler unavailable")
        self.submissions.append((identifier, delay_seconds))


def make_settings(**overrides) -> SessionSettings:
    values = dict(
        run_duration=3,
        walk_duration=2,
        total_duration=100,
        total_is_running_time=False,
        beep_count=1,
        beep_volume=0.5,
    )
    values.update(overrides)
    return SessionSettings(**values)


def make_engine(*, clock=None, beeps=None, **overrides) -> IntervalEngine:
    return IntervalEngine(
        make_settings(**overrides),
        clock=clock if clock is not None else ManualClock(),
        beeps=beeps,
    )


def run_to_end(engine: IntervalEngine, limit: int = 100_000) -> int:
    """Tick until the engine stops.  Returns the number of ticks used."""
    ticks = 0
    while engine.is_running and ticks < limit:
        engine.tick()
        ticks += 1
    return ticks
