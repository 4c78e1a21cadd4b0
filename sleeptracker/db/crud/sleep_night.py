import logging
from typing import Optional
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from sleeptracker.db.engine import SleepDatabase
from sleeptracker.db.models.sleep_night import SleepNight

logger = logging.getLogger(__name__)


def insert_night(db: Session, *, night: SleepNight) -> SleepNight:
    """Insert a night; night_id is assigned by the database."""
    db.add(night)
    db.commit()
    db.refresh(night)
    logger.debug("Inserted %r", night)
    return night

def update_night(db: Session, *, night: SleepNight) -> Optional[SleepNight]:
    """
    Copy the timestamps and quality of `night` onto the stored row with the same night_id.
    Returns None and writes nothing when that row no longer exists.
    """
    db_obj = db.get(SleepNight, night.night_id)
    if db_obj is None:
        logger.debug("Night %s is gone, update skipped", night.night_id)
        return None

    db_obj.start_time_milli = night.start_time_milli
    db_obj.end_time_milli = night.end_time_milli
    db_obj.sleep_quality = night.sleep_quality
    db.commit()
    db.refresh(db_obj)
    logger.debug("Updated %r", db_obj)
    return db_obj

def get_night(db: Session, *, night_id: int) -> Optional[SleepNight]:
    return db.get(SleepNight, night_id)

def get_tonight(db: Session) -> Optional[SleepNight]:
    """Most recently inserted night, finished or not."""
    stmt = select(SleepNight).order_by(SleepNight.night_id.desc()).limit(1)
    return db.execute(stmt).scalars().first()

def get_all_nights(db: Session) -> list[SleepNight]:
    """All nights, most recent first."""
    stmt = select(SleepNight).order_by(SleepNight.night_id.desc())
    return list(db.execute(stmt).scalars().all())

def delete_all_rows(db: Session) -> int:
    result = db.execute(delete(SleepNight))
    db.commit()
    logger.debug("Deleted %s nights", result.rowcount)
    return result.rowcount


class SleepDatabaseDao:
    """
    The storage operations the tracker needs, bound to one database.
    Each call runs in its own short-lived session and returns detached rows.
    """

    def __init__(self, database: SleepDatabase):
        self.database = database

    def insert(self, night: SleepNight) -> SleepNight:
        with self.database.session_scope() as db:
            return insert_night(db, night=night)

    def update(self, night: SleepNight) -> Optional[SleepNight]:
        with self.database.session_scope() as db:
            return update_night(db, night=night)

    def get(self, night_id: int) -> Optional[SleepNight]:
        with self.database.session_scope() as db:
            return get_night(db, night_id=night_id)

    def get_tonight(self) -> Optional[SleepNight]:
        with self.database.session_scope() as db:
            return get_tonight(db)

    def get_all_nights(self) -> list[SleepNight]:
        with self.database.session_scope() as db:
            return get_all_nights(db)

    def delete_all_rows(self) -> int:
        with self.database.session_scope() as db:
            return delete_all_rows(db)
