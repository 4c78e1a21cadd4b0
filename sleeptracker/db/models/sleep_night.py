from __future__ import annotations
import time
from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sleeptracker.config import UNRATED_QUALITY
from sleeptracker.db.base import Base


def now_millis() -> int:
    return int(time.time() * 1000)


class SleepNight(Base):
    """
    One tracked sleep session.
    A night is "in progress" while end_time_milli == start_time_milli.
    """
    __tablename__ = "daily_sleep_quality_table"

    night_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    start_time_milli: Mapped[int] = mapped_column("start_time_milli", BigInteger, nullable=False)
    end_time_milli: Mapped[int] = mapped_column("end_time_milli", BigInteger, nullable=False)

    sleep_quality: Mapped[int] = mapped_column("quality_rating", Integer, nullable=False, default=UNRATED_QUALITY)

    def __init__(self, **kwargs):
        # both timestamps default to the moment the night object is created
        kwargs.setdefault("start_time_milli", now_millis())
        kwargs.setdefault("end_time_milli", kwargs["start_time_milli"])
        kwargs.setdefault("sleep_quality", UNRATED_QUALITY)
        super().__init__(**kwargs)

    @property
    def in_progress(self) -> bool:
        return self.end_time_milli == self.start_time_milli

    @property
    def duration_milli(self) -> int:
        return self.end_time_milli - self.start_time_milli

    def __repr__(self) -> str:
        return (
            f"SleepNight(night_id={self.night_id!r}, start_time_milli={self.start_time_milli!r}, "
            f"end_time_milli={self.end_time_milli!r}, sleep_quality={self.sleep_quality!r})"
        )
