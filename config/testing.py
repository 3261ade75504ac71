import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_management_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/tmp/employee_management_uploads")
MAX_UPLOAD_BYTES = 1024 * 1024

ACCEPTED_LEAVE_TYPES = ["AL", "SL", "CL", "UPL", "HML", "HEL"]

LEAVE_POLICY = {
    "advance_notice_hours": 48,
    "monthly_consecutive_days": 2,
    "annual_quota_days": 6,
}

COMPLIANCE_CUTOFFS = ["09:30", "10:00", "12:30"]

DEFAULT_ADMIN = {
    "name": "Super Admin",
    "email": "admin@system.com",
    "password": "Admin@123",
}
