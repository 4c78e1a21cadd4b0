from .sleep_night import SleepNight


__all__ = [
    "SleepNight",
]
