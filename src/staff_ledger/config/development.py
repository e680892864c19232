import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_ledger"),
}

COMPANY_NAME = os.getenv("COMPANY_NAME", "AMIN TOUCH")
COMPANY_TAGLINE = os.getenv("COMPANY_TAGLINE", "TRADING CONTRACTING & HOSPITALITY SERVICES")

# Ticket copies are written here and served back under UPLOAD_URL_PREFIX
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = os.getenv("UPLOAD_URL_PREFIX", "/uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
