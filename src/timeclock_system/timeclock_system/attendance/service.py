from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional

from ..common.datetime_utils import hours_between, local_date, now_utc, to_iso, truncate_to_millis
from ..core.enums import ClockStatus, VerificationChannel
from ..core.exceptions import (
    AlreadyOpenError,
    ConfigurationError,
    InactiveError,
    InvalidDurationError,
    NoActiveSessionError,
    NotFoundError,
    OutOfRangeError,
    UpstreamUnavailableError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..sites.repository import JobSiteRepository
from ..verification.geo import within_radius
from ..verification.network import NetworkVerifier
from .model import ClockInResult, ClockOutResult, Coordinates, StatusReport, TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in/clock-out state machine.

    Invariant: an employee has at most one open time entry, and has one iff
    their status is clocked_in. The store gives no transactions, so the open
    entry is always written before the status flips: a crash in between leaves
    a dangling open entry (detectable by `status`) rather than a phantom
    clocked_in status.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        employees: EmployeeRepository,
        sites: JobSiteRepository,
        network_verifier: NetworkVerifier,
        *,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._entries = entries
        self._employees = employees
        self._sites = sites
        self._network = network_verifier
        self._tz = tz
        self._clock = clock

    def _get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _verify_presence(self, *, coordinates: Optional[Coordinates], client_ip: Optional[str]) -> VerificationChannel:
        if self._network.is_allowed(client_ip):
            return VerificationChannel.NETWORK

        if coordinates is None:
            raise ValidationError("Location is required unless connected to an allowed network")

        site = self._sites.get_default_site()
        if not site:
            raise ConfigurationError("No job site configured")

        if not within_radius(coordinates.latitude, coordinates.longitude, site.latitude, site.longitude, site.radius):
            raise OutOfRangeError(site_name=site.name, address=site.address, radius=site.radius)
        return VerificationChannel.GPS

    def clock_in(
        self,
        employee_id: str,
        *,
        coordinates: Optional[Coordinates] = None,
        client_ip: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ClockInResult:
        employee = self._get_employee(employee_id)
        if not employee.is_active:
            raise InactiveError("Employee is not active")

        if self._entries.list_open_for_employee(employee_id):
            raise AlreadyOpenError("Already clocked in. Please clock out first.")

        channel = self._verify_presence(coordinates=coordinates, client_ip=client_ip)

        now = truncate_to_millis(now or self._clock())
        entry = TimeEntry(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            clock_in=now,
            clock_out=None,
            work_date=local_date(now, self._tz),
            location_lat=coordinates.latitude if coordinates else None,
            location_lng=coordinates.longitude if coordinates else None,
            hours_worked=None,
            is_edited=False,
        )

        try:
            self._entries.append(entry)
        except UpstreamUnavailableError:
            if not self._append_landed(entry):
                raise
            logger.warning("Append for %s reported failure but the entry is present; continuing", employee_id)

        open_entries = self._entries.list_open_for_employee(employee_id)
        if len(open_entries) > 1:
            # Lost a race with a concurrent clock-in; surfaced via status(), not repaired here.
            logger.error("Employee %s has %d open entries after clock-in", employee_id, len(open_entries))

        self._employees.set_clock_status(employee_id, status=ClockStatus.CLOCKED_IN, timestamp=now)
        logger.info("Employee %s clocked in at %s via %s", employee_id, to_iso(now), channel.value)
        return ClockInResult(
            timestamp=now,
            verified_by=channel,
            client_ip=client_ip if channel == VerificationChannel.NETWORK else None,
        )

    def _append_landed(self, entry: TimeEntry) -> bool:
        """Append is at-least-once: after an ambiguous failure, check whether it was written."""
        try:
            return self._entries.find(entry.employee_id, entry.clock_in) is not None
        except UpstreamUnavailableError:
            return False

    def clock_out(
        self,
        employee_id: str,
        *,
        coordinates: Optional[Coordinates] = None,
        now: Optional[datetime] = None,
    ) -> ClockOutResult:
        # Coordinates are accepted but exit is not location-gated.
        self._get_employee(employee_id)

        open_entries = self._entries.list_open_for_employee(employee_id)
        if not open_entries:
            raise NoActiveSessionError("No active clock in found. Please clock in first.")
        if len(open_entries) > 1:
            logger.error("Employee %s has %d open entries; refusing to pick one", employee_id, len(open_entries))
            raise NoActiveSessionError("Multiple open time entries found. Please contact an administrator.")

        active = open_entries[0]
        now = truncate_to_millis(now or self._clock())
        if now < active.clock_in:
            raise InvalidDurationError("Clock-out time is before clock-in time")

        hours = hours_between(active.clock_in, now)
        closed = replace(active, clock_out=now, hours_worked=hours)
        self._entries.replace(employee_id, active.clock_in, closed)

        self._employees.set_clock_status(employee_id, status=ClockStatus.CLOCKED_OUT, timestamp=now)
        logger.info("Employee %s clocked out at %s (%.2f h)", employee_id, to_iso(now), hours)
        return ClockOutResult(timestamp=now, clock_in=active.clock_in, hours_worked=hours)

    def status(self, employee_id: str) -> StatusReport:
        employee = self._get_employee(employee_id)
        open_entries = self._entries.list_open_for_employee(employee_id)
        report = StatusReport(
            employee_id=employee_id,
            status=employee.current_status,
            open_entry=open_entries[0] if open_entries else None,
            open_entry_count=len(open_entries),
        )
        if not report.consistent:
            logger.warning(
                "Inconsistent clock state for %s: status=%s open_entries=%d",
                employee_id,
                employee.current_status.value,
                len(open_entries),
            )
        return report
