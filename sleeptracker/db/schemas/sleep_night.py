from pydantic import BaseModel, ConfigDict

# ----------- SleepNight Schemas -----------

class SleepNightRead(BaseModel):
    """Immutable snapshot of a row, safe to hand to view-layer observers."""
    night_id: int
    start_time_milli: int
    end_time_milli: int
    sleep_quality: int
    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def in_progress(self) -> bool:
        return self.end_time_milli == self.start_time_milli

    @property
    def duration_milli(self) -> int:
        return self.end_time_milli - self.start_time_milli
