import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create demo accounts and payroll rows on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

LEAVE_ANNUAL_ALLOTMENT = int(os.getenv("LEAVE_ANNUAL_ALLOTMENT", "20"))
TREND_MONTHS = int(os.getenv("TREND_MONTHS", "6"))
TREND_WORKERS = int(os.getenv("TREND_WORKERS", "4"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
