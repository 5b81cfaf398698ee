import os

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_portal_test"),
    "pool_size": 2,
}

UPSTREAM_BASE_URL = "https://upstream.test/api"
UPSTREAM_TIMEOUT = 5.0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
