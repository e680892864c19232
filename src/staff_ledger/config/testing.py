import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_ledger_test"),
}

COMPANY_NAME = "AMIN TOUCH"
COMPANY_TAGLINE = "TRADING CONTRACTING & HOSPITALITY SERVICES"

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads-test")
UPLOAD_URL_PREFIX = "/uploads"
MAX_UPLOAD_BYTES = 1024 * 1024

SESSION_DAYS = 7

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
