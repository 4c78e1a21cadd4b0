from datetime import datetime

from sleeptracker.db.models.sleep_night import SleepNight
from sleeptracker.db.schemas.sleep_night import SleepNightRead
from sleeptracker.utils.formatting import (
    NO_DATA,
    TITLE,
    convert_duration_to_string,
    convert_long_to_date_string,
    convert_numeric_quality_to_string,
    format_nights,
)


def _night(night_id, start, end, quality=-1):
    return SleepNightRead(night_id=night_id, start_time_milli=start, end_time_milli=end, sleep_quality=quality)


def test_quality_labels():
    assert convert_numeric_quality_to_string(0) == "Very bad"
    assert convert_numeric_quality_to_string(5) == "Excellent"
    assert convert_numeric_quality_to_string(-1) == "--"
    assert convert_numeric_quality_to_string(9) == "--"


def test_date_string_uses_local_time():
    ms = int(datetime(2026, 10, 19, 23, 5).timestamp() * 1000)
    assert convert_long_to_date_string(ms) == "Monday Oct-19-2026 Time: 23:05"


def test_duration_string():
    assert convert_duration_to_string(0) == "0:00:00"
    assert convert_duration_to_string((8 * 3600 + 5 * 60 + 9) * 1000) == "8:05:09"


def test_empty_history_is_no_data():
    assert format_nights([]) == NO_DATA


def test_finished_and_open_nights():
    text = format_nights([
        _night(2, 10_000, 10_000),
        _night(1, 0, 3_600_000, quality=4),
    ])
    assert text.startswith(TITLE)
    blocks = text.split("\n\n")[1:]
    assert len(blocks) == 2
    assert "End:" not in blocks[0]
    assert "Quality:\tPretty good" in blocks[1]
    assert blocks[1].endswith("1:00:00")


def test_snapshot_progress_and_duration():
    open_night = _night(1, 2_000, 2_000)
    finished = _night(2, 2_000, 9_000)
    assert open_night.in_progress and open_night.duration_milli == 0
    assert not finished.in_progress and finished.duration_milli == 7_000


def test_orm_rows_format_like_snapshots():
    rows = [SleepNight(night_id=1, start_time_milli=0, end_time_milli=90_000, sleep_quality=2)]
    snapshots = [SleepNightRead.model_validate(row) for row in rows]
    assert format_nights(rows) == format_nights(snapshots)
    assert format_nights(rows).endswith("0:01:30")
