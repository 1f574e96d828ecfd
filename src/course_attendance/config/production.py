import os

PORT = int(os.getenv("PORT", "3000"))
DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "course_attendance"),
}
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "5"))
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))

# No default: the app refuses to start without a signing secret.
TOKEN_SECRET = os.getenv("TOKEN_SECRET", "")
TOKEN_VALIDITY_DAYS = int(os.getenv("TOKEN_VALIDITY_DAYS", "7"))

MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))
MAX_FORM_FIELD_BYTES = int(os.getenv("MAX_FORM_FIELD_BYTES", str(2 * 1024 * 1024)))
PUBLIC_IMAGE_ACCESS = bool(int(os.getenv("PUBLIC_IMAGE_ACCESS", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
