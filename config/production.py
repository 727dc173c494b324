import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "squad_attendance"),
}

# Empty secret disables the scheduled endpoints.
CRON_SECRET = os.getenv("CRON_SECRET", "")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ATTENDANCE_POLICY_DEFAULTS = {
    "minimum_work_hours": float(os.getenv("POLICY_MIN_WORK_HOURS", "8")),
    "standard_check_in_time": os.getenv("POLICY_CHECK_IN", "09:00"),
    "standard_check_out_time": os.getenv("POLICY_CHECK_OUT", "17:00"),
    "late_threshold_minutes": int(os.getenv("POLICY_LATE_THRESHOLD", "15")),
    "early_checkout_threshold_minutes": int(os.getenv("POLICY_EARLY_THRESHOLD", "30")),
}

REMINDER_DEDUPLICATE = bool(int(os.getenv("REMINDER_DEDUPLICATE", "0")))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "json"},
    },
    "root": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
}
