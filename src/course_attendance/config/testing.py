import os

PORT = 3000
DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "course_attendance_test"),
}
DB_CONNECT_TIMEOUT = 5
DB_STATEMENT_TIMEOUT_MS = 0

TOKEN_SECRET = "test-secret"
TOKEN_VALIDITY_DAYS = 7

MAX_IMAGE_BYTES = 1024 * 1024
MAX_FORM_FIELD_BYTES = 256 * 1024
PUBLIC_IMAGE_ACCESS = True

AUTO_INIT_DB = False
