SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
STORE_TIMEOUT_SECONDS = 1.0

PUBLIC_IP_FALLBACK = False

TIMEZONE = "UTC"

ADMIN_PASSWORD = "admin-test"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_SHEETS = True
AUTO_SEED_SHEETS = False

DEFAULT_SITE_NAME = "Test Office"
DEFAULT_SITE_ADDRESS = "1 Test Way"
DEFAULT_SITE_LATITUDE = 40.7128
DEFAULT_SITE_LONGITUDE = -74.0060
DEFAULT_SITE_RADIUS = 100.0
