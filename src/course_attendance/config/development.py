import os

PORT = int(os.getenv("PORT", "3000"))
DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "course_attendance"),
}
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))

TOKEN_SECRET = os.getenv("TOKEN_SECRET", "dev-token-secret")
TOKEN_VALIDITY_DAYS = int(os.getenv("TOKEN_VALIDITY_DAYS", "7"))

MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))
MAX_FORM_FIELD_BYTES = int(os.getenv("MAX_FORM_FIELD_BYTES", str(2 * 1024 * 1024)))
PUBLIC_IMAGE_ACCESS = bool(int(os.getenv("PUBLIC_IMAGE_ACCESS", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
