"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_SITE_RADIUS_METERS = 100

ADMIN_TOKEN_MAX_AGE_SECONDS = 24 * 60 * 60
EMPLOYEE_TOKEN_MAX_AGE_SECONDS = 8 * 60 * 60

EMPLOYEE_TOKEN_COOKIE = "employee-token"
ADMIN_TOKEN_COOKIE = "admin-token"
ADMIN_SUBJECT = "admin"

DEFAULT_STORE_TIMEOUT_SECONDS = 10
DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"
DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS = 5

LOOPBACK_ADDRESSES = frozenset({"::1", "127.0.0.1", "unknown", ""})

DEFAULT_RECENT_DAYS = 7
DEFAULT_RECENT_LIMIT = 10
DEFAULT_DASHBOARD_RECENT_LIMIT = 20
MIN_PASSWORD_LENGTH = 6
