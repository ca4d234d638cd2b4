"""UI package."""

from .timer_widget import TimerWidget
from .progress_ring import ProgressRing
from .new_run_dialog import NewRunDialog
from .overview import OverviewWidget
from .onboarding import OnboardingWidget

__all__ = [
    "TimerWidget",
    "ProgressRing",
    "NewRunDialog",
    "OverviewWidget",
    "OnboardingWidget",
]
