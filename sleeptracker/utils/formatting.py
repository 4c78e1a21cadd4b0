from datetime import datetime
from typing import Iterable

TITLE = "HERE IS YOUR SLEEP DATA"
NO_DATA = "No sleep data recorded."

QUALITY_LABELS = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent",
}

def convert_numeric_quality_to_string(quality: int) -> str:
    return QUALITY_LABELS.get(quality, "--")

def convert_long_to_date_string(time_milli: int) -> str:
    """Epoch milliseconds -> e.g. 'Monday Oct-19-2026 Time: 23:05' in local time."""
    return datetime.fromtimestamp(time_milli / 1000).strftime("%A %b-%d-%Y Time: %H:%M")

def convert_duration_to_string(duration_milli: int) -> str:
    total_seconds = max(duration_milli, 0) // 1000
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"

def format_nights(nights: Iterable) -> str:
    """
    Render nights (SleepNightRead snapshots or SleepNight rows) as display text.
    Nights still in progress only show their start time.
    """
    blocks = []
    for night in nights:
        lines = [f"Start:\t{convert_long_to_date_string(night.start_time_milli)}"]
        if not night.in_progress:
            lines.append(f"End:\t{convert_long_to_date_string(night.end_time_milli)}")
            lines.append(f"Quality:\t{convert_numeric_quality_to_string(night.sleep_quality)}")
            lines.append(
                f"Hours:Minutes:Seconds\t{convert_duration_to_string(night.duration_milli)}"
            )
        blocks.append("\n".join(lines))

    if not blocks:
        return NO_DATA
    return TITLE + "\n\n" + "\n\n".join(blocks)
