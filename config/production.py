import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_management"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

ACCEPTED_LEAVE_TYPES = [t.strip() for t in os.getenv("ACCEPTED_LEAVE_TYPES", "AL,SL,CL,UPL,HML,HEL").split(",") if t.strip()]

LEAVE_POLICY = {
    "advance_notice_hours": int(os.getenv("LEAVE_ADVANCE_NOTICE_HOURS", "48")),
    "monthly_consecutive_days": int(os.getenv("LEAVE_MONTHLY_CONSECUTIVE_DAYS", "2")),
    "annual_quota_days": int(os.getenv("LEAVE_ANNUAL_QUOTA_DAYS", "6")),
}

COMPLIANCE_CUTOFFS = [
    os.getenv("CUTOFF_ON_TIME", "09:30"),
    os.getenv("CUTOFF_LATE_FINE", "10:00"),
    os.getenv("CUTOFF_HALF_UNPAID", "12:30"),
]

DEFAULT_ADMIN = {
    "name": os.getenv("ADMIN_NAME", "Super Admin"),
    "email": os.getenv("ADMIN_EMAIL", "admin@system.com"),
    "password": os.getenv("ADMIN_PASSWORD", "please-set-ADMIN_PASSWORD"),
}
