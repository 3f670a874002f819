"""Example: drive the service layer directly (no Flask).

Controllers are thin; the clock-in rules live in the services. Runs against
the in-memory store from the testing settings, so it needs no credentials.
"""

from datetime import timedelta

from config import testing

from src.timeclock_system.timeclock_system.attendance.model import Coordinates
from src.timeclock_system.timeclock_system.common.datetime_utils import now_utc
from src.timeclock_system.timeclock_system.container import build_container
from src.timeclock_system.timeclock_system.settings import build_settings
from src.timeclock_system.timeclock_system.store.bootstrap import ensure_default_site, ensure_sheets


def main():
    settings = build_settings(testing)
    container = build_container(settings)
    ensure_sheets(container.store)
    site = settings.default_site
    ensure_default_site(container.store, name=site.name, latitude=site.latitude, longitude=site.longitude, radius=site.radius)

    profile = container.employee_service.create(name="John Smith", password="password123")
    start = now_utc()
    container.attendance_service.clock_in(
        profile.employee_id,
        coordinates=Coordinates(latitude=site.latitude, longitude=site.longitude),
        now=start,
    )
    out = container.attendance_service.clock_out(profile.employee_id, now=start + timedelta(hours=7, minutes=30))
    print(f"{profile.name} worked {out.hours_worked:.2f} h")
    print(container.report_service.employee_timesheet(profile.employee_id, now=start))


if __name__ == "__main__":
    main()
