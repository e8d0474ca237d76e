import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_PATH = os.getenv("DATABASE_PATH", "../data/hive.db")
DATABASE_URL = os.getenv("DATABASE_URL", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "")

# "production" enforces certificate verification towards a networked store
APP_ENV = os.getenv("APP_ENV", "development")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:8080").split(",")
    if origin.strip()
]

# History query limits - hardcoded for easy tweaking
HISTORY_LIMIT = 500
DEFAULT_HISTORY_DAYS = 7

# Dashboard polling interval for the latest reading
POLL_INTERVAL_SECONDS = 5


def is_production() -> bool:
    return APP_ENV.lower() == "production"
