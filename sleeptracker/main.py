import logging
from typing import Optional

from sleeptracker.config import SLEEP_DATABASE_URL, SLEEP_LOG_FORMAT, SLEEP_LOG_LEVEL
from sleeptracker.core.tasks import DatabaseExecutor
from sleeptracker.db.crud.sleep_night import SleepDatabaseDao
from sleeptracker.db.engine import SleepDatabase
from sleeptracker.tracker.controller import Formatter, SleepTrackerController
from sleeptracker.utils.formatting import format_nights

logger = logging.getLogger(__name__)


class SleepTrackerApp:
    """Everything the tracker screen needs, built once at startup."""

    def __init__(self, database: SleepDatabase):
        self.database = database
        self.dao = SleepDatabaseDao(database)
        self.executor = DatabaseExecutor()

    def create_controller(self, formatter: Formatter = format_nights) -> SleepTrackerController:
        # call from inside the running event loop
        return SleepTrackerController(self.dao, self.executor, formatter=formatter)

    def close(self) -> None:
        self.executor.shutdown()
        self.database.dispose()
        logger.info("Sleep tracker closed")


def configure_logging(level: str = SLEEP_LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=SLEEP_LOG_FORMAT)


def create_app(database_url: Optional[str] = None) -> SleepTrackerApp:
    configure_logging()
    database = SleepDatabase(database_url or SLEEP_DATABASE_URL)
    database.create_tables()
    logger.info("Sleep tracker ready")
    return SleepTrackerApp(database)
