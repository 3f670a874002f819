import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Record store: "sheets" (Google Sheets) or "memory" (process-local, lost on restart)
STORE_BACKEND = os.getenv("STORE_BACKEND", "sheets")
SPREADSHEET_ID = os.getenv("SPREADSHEET_ID", "")
GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", "")
GOOGLE_SHEETS_CLIENT_EMAIL = os.getenv("GOOGLE_SHEETS_CLIENT_EMAIL", "")
GOOGLE_SHEETS_PRIVATE_KEY = os.getenv("GOOGLE_SHEETS_PRIVATE_KEY", "")
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

# Localhost callers have no usable IP; look up the public one instead.
PUBLIC_IP_FALLBACK = bool(int(os.getenv("PUBLIC_IP_FALLBACK", "1")))
IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "https://api.ipify.org?format=json")
IP_LOOKUP_TIMEOUT_SECONDS = float(os.getenv("IP_LOOKUP_TIMEOUT_SECONDS", "5"))

TIMEZONE = os.getenv("TIMEZONE", "America/New_York")

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app creates missing sheets + header rows on startup (idempotent)
AUTO_INIT_SHEETS = bool(int(os.getenv("AUTO_INIT_SHEETS", "1")))
# Optional: also seed demo employees and the default job site
AUTO_SEED_SHEETS = bool(int(os.getenv("AUTO_SEED_SHEETS", "0")))

DEFAULT_SITE_NAME = os.getenv("DEFAULT_SITE_NAME", "Main Office")
DEFAULT_SITE_ADDRESS = os.getenv("DEFAULT_SITE_ADDRESS", "")
DEFAULT_SITE_LATITUDE = float(os.getenv("DEFAULT_SITE_LATITUDE", "40.7128"))
DEFAULT_SITE_LONGITUDE = float(os.getenv("DEFAULT_SITE_LONGITUDE", "-74.0060"))
DEFAULT_SITE_RADIUS = float(os.getenv("DEFAULT_SITE_RADIUS", "100"))
