"""Collection names and header rows of the tabular store."""

EMPLOYEES = "Employees"
TIME_ENTRIES = "TimeEntries"
ALLOWED_NETWORKS = "AllowedNetworks"
AUDIT_LOG = "AuditLog"
JOB_SITES = "JobSites"
ADMIN_SETTINGS = "AdminSettings"

EMPLOYEE_COLUMNS = (
    "id",
    "name",
    "isActive",
    "currentStatus",
    "lastClockIn",
    "lastClockOut",
    "passwordHash",
)

TIME_ENTRY_COLUMNS = (
    "employeeId",
    "employeeName",
    "clockInTime",
    "clockOutTime",
    "date",
    "locationLat",
    "locationLng",
    "hoursWorked",
    "isEdited",
    "editedBy",
    "notes",
)

NETWORK_COLUMNS = ("id", "name", "ipAddress", "isActive", "notes")

AUDIT_COLUMNS = (
    "timestamp",
    "adminUser",
    "action",
    "employeeId",
    "employeeName",
    "details",
    "originalData",
    "newData",
)

JOB_SITE_COLUMNS = ("id", "name", "latitude", "longitude", "radius", "address")

ADMIN_SETTING_COLUMNS = ("setting", "value")

DEFAULT_JOB_SITE_SETTING = "defaultJobSiteId"

ALL_SHEETS = {
    EMPLOYEES: EMPLOYEE_COLUMNS,
    TIME_ENTRIES: TIME_ENTRY_COLUMNS,
    ALLOWED_NETWORKS: NETWORK_COLUMNS,
    AUDIT_LOG: AUDIT_COLUMNS,
    JOB_SITES: JOB_SITE_COLUMNS,
    ADMIN_SETTINGS: ADMIN_SETTING_COLUMNS,
}
