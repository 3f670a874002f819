import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "sheets")
SPREADSHEET_ID = os.getenv("SPREADSHEET_ID", "")
GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", "")
GOOGLE_SHEETS_CLIENT_EMAIL = os.getenv("GOOGLE_SHEETS_CLIENT_EMAIL", "")
GOOGLE_SHEETS_PRIVATE_KEY = os.getenv("GOOGLE_SHEETS_PRIVATE_KEY", "")
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

# Behind a proxy the forwarded headers carry the real address; no lookup by default.
PUBLIC_IP_FALLBACK = bool(int(os.getenv("PUBLIC_IP_FALLBACK", "0")))
IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "https://api.ipify.org?format=json")
IP_LOOKUP_TIMEOUT_SECONDS = float(os.getenv("IP_LOOKUP_TIMEOUT_SECONDS", "5"))

TIMEZONE = os.getenv("TIMEZONE", "America/New_York")

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_SHEETS = bool(int(os.getenv("AUTO_INIT_SHEETS", "0")))
AUTO_SEED_SHEETS = bool(int(os.getenv("AUTO_SEED_SHEETS", "0")))
