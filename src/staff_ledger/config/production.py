import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_ledger"),
}

COMPANY_NAME = os.getenv("COMPANY_NAME", "AMIN TOUCH")
COMPANY_TAGLINE = os.getenv("COMPANY_TAGLINE", "TRADING CONTRACTING & HOSPITALITY SERVICES")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/staff_ledger/uploads")
UPLOAD_URL_PREFIX = os.getenv("UPLOAD_URL_PREFIX", "/uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
