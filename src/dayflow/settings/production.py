import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "dayflow"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

LEAVE_ANNUAL_ALLOTMENT = int(os.getenv("LEAVE_ANNUAL_ALLOTMENT", "20"))
TREND_MONTHS = int(os.getenv("TREND_MONTHS", "6"))
TREND_WORKERS = int(os.getenv("TREND_WORKERS", "4"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
