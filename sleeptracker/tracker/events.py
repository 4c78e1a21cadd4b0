from dataclasses import dataclass

from sleeptracker.db.schemas.sleep_night import SleepNightRead


@dataclass(frozen=True)
class NavigateToSleepQuality:
    """Tracking stopped; the view should open the quality-rating screen for this night."""
    night: SleepNightRead


@dataclass(frozen=True)
class ShowSnackbar:
    """All nights were cleared."""
    message: str = "All your data is gone forever."


TrackerEvent = NavigateToSleepQuality | ShowSnackbar
