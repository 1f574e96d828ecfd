"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NEPTUN_CODE_LENGTH = 6
MIN_PASSWORD_LENGTH = 8

DEFAULT_TOKEN_VALIDITY_DAYS = 7
TOKEN_SALT = "course-attendance-auth"

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_FORM_FIELD_BYTES = 2 * 1024 * 1024

DEFAULT_IMAGE_CONTENT_TYPE = "application/octet-stream"
