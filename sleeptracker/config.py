import os
from dotenv import load_dotenv

load_dotenv()

SLEEP_DATABASE_URL = os.getenv("SLEEP_DATABASE_URL", "sqlite:///sleep_history_database.db")

SLEEP_LOG_LEVEL = os.getenv("SLEEP_LOG_LEVEL", "INFO")
SLEEP_LOG_FORMAT = os.getenv("SLEEP_LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")

SLEEP_SQL_ECHO = os.getenv("SLEEP_SQL_ECHO", "0").lower() in ("1", "true", "yes")

# "unrated" sentinel stored in quality_rating until the night is scored
UNRATED_QUALITY = -1
