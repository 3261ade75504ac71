import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_management"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create the demo employee account on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ACCEPTED_LEAVE_TYPES = ["AL", "SL", "CL", "UPL", "HML", "HEL"]

LEAVE_POLICY = {
    "advance_notice_hours": int(os.getenv("LEAVE_ADVANCE_NOTICE_HOURS", "48")),
    "monthly_consecutive_days": int(os.getenv("LEAVE_MONTHLY_CONSECUTIVE_DAYS", "2")),
    "annual_quota_days": int(os.getenv("LEAVE_ANNUAL_QUOTA_DAYS", "6")),
}

# ON_TIME / LATE_FINE / HALF_UNPAID_LEAVE upper bounds, inclusive
COMPLIANCE_CUTOFFS = ["09:30", "10:00", "12:30"]

DEFAULT_ADMIN = {
    "name": os.getenv("ADMIN_NAME", "Super Admin"),
    "email": os.getenv("ADMIN_EMAIL", "admin@system.com"),
    "password": os.getenv("ADMIN_PASSWORD", "Admin@123"),
}
