from __future__ import annotations

from dataclasses import dataclass

from .attendance.service import AttendanceService
from .attendance.sheet_time_entry_repository import SheetTimeEntryRepository
from .audit.sheet_audit_repository import SheetAuditLogRepository
from .auth.session_gate import SessionGate
from .employees.service import AuthService, EmployeeService
from .employees.sheet_employee_repository import SheetEmployeeRepository
from .networks.service import NetworkService
from .networks.sheet_network_repository import SheetNetworkRuleRepository
from .reconciliation.service import ReconciliationService
from .reports.service import ReportService
from .settings import Settings
from .sites.sheet_site_repository import SheetJobSiteRepository
from .store.google_sheets import GoogleSheetsRecordStore, SheetsConfig, SheetsConnection
from .store.memory import InMemoryRecordStore
from .store.record_store import RecordStore
from .verification.network import ClientIpResolver, NetworkVerifier, PublicIpLookup


@dataclass(frozen=True)
class Container:
    settings: Settings
    store: RecordStore

    employees_repo: SheetEmployeeRepository
    entries_repo: SheetTimeEntryRepository
    networks_repo: SheetNetworkRuleRepository
    sites_repo: SheetJobSiteRepository
    audit_repo: SheetAuditLogRepository

    session_gate: SessionGate
    ip_resolver: ClientIpResolver
    network_verifier: NetworkVerifier

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    reconciliation_service: ReconciliationService
    network_service: NetworkService
    report_service: ReportService


def build_store(settings: Settings) -> RecordStore:
    if settings.store_backend == "memory":
        return InMemoryRecordStore()
    conn = SheetsConnection.get_instance(
        SheetsConfig(
            spreadsheet_id=settings.spreadsheet_id,
            service_account_file=settings.service_account_file or None,
            client_email=settings.client_email or None,
            private_key=settings.private_key or None,
            timeout_seconds=settings.store_timeout_seconds,
        )
    )
    return GoogleSheetsRecordStore(conn)


def build_container(settings: Settings, *, store: RecordStore | None = None) -> Container:
    store = store if store is not None else build_store(settings)

    employees_repo = SheetEmployeeRepository(store)
    entries_repo = SheetTimeEntryRepository(store)
    networks_repo = SheetNetworkRuleRepository(store)
    sites_repo = SheetJobSiteRepository(store)
    audit_repo = SheetAuditLogRepository(store)

    session_gate = SessionGate(settings.secret_key)
    lookup = None
    if settings.public_ip_fallback:
        lookup = PublicIpLookup(url=settings.ip_lookup_url, timeout_seconds=settings.ip_lookup_timeout_seconds)
    ip_resolver = ClientIpResolver(lookup)
    network_verifier = NetworkVerifier(networks_repo)

    auth_service = AuthService(
        employees_repo,
        session_gate,
        admin_password=settings.admin_password or None,
        admin_password_hash=settings.admin_password_hash or None,
    )
    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(entries_repo, employees_repo, sites_repo, network_verifier, tz=settings.tz)
    reconciliation_service = ReconciliationService(entries_repo, employees_repo, audit_repo, tz=settings.tz)
    network_service = NetworkService(networks_repo)
    report_service = ReportService(entries_repo, employees_repo, tz=settings.tz)

    return Container(
        settings=settings,
        store=store,
        employees_repo=employees_repo,
        entries_repo=entries_repo,
        networks_repo=networks_repo,
        sites_repo=sites_repo,
        audit_repo=audit_repo,
        session_gate=session_gate,
        ip_resolver=ip_resolver,
        network_verifier=network_verifier,
        auth_service=auth_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        reconciliation_service=reconciliation_service,
        network_service=network_service,
        report_service=report_service,
    )
