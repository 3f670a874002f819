from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.session_gate import SessionGate
from ..common.validators import require_min_length, require_non_empty, slugify
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import ClockStatus
from ..core.exceptions import AuthenticationError, InactiveError, NotFoundError, ValidationError
from .model import Employee, EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the controller puts into the session cookie after login."""

    token: str
    profile: Optional[EmployeeProfile] = None


class AuthService:
    """Use case: authenticate employees and the administrator (login)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        gate: SessionGate,
        *,
        admin_password: Optional[str] = None,
        admin_password_hash: Optional[str] = None,
    ):
        self._employees = employees
        self._gate = gate
        self._admin_password = admin_password
        self._admin_password_hash = admin_password_hash

    def login_employee(self, employee_id: str, password: str) -> LoginResult:
        employee_id = require_non_empty(employee_id, "Employee ID")
        require_non_empty(password, "Password")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise AuthenticationError("Invalid credentials")
        if not employee.is_active:
            raise InactiveError("Account is inactive")

        try:
            ok = check_password_hash(employee.password_hash, password)
        except (ValueError, TypeError):
            # e.g. blank or corrupted hashes in the sheet
            ok = False
        if not ok:
            raise AuthenticationError("Invalid credentials")

        return LoginResult(token=self._gate.issue_employee_token(employee.employee_id), profile=EmployeeProfile.of(employee))

    def login_admin(self, password: str) -> LoginResult:
        require_non_empty(password, "Password")
        if self._admin_password_hash:
            ok = check_password_hash(self._admin_password_hash, password)
        elif self._admin_password:
            ok = password == self._admin_password
        else:
            logger.error("Admin login attempted but no admin password is configured")
            ok = False
        if not ok:
            raise AuthenticationError("Invalid password")
        return LoginResult(token=self._gate.issue_admin_token())


class EmployeeService:
    """Use case: manage employees (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_active(self) -> Sequence[EmployeeProfile]:
        return [EmployeeProfile.of(e) for e in self._employees.list_all() if e.is_active]

    def get(self, employee_id: str) -> EmployeeProfile:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return EmployeeProfile.of(employee)

    def create(self, *, name: str, password: str) -> EmployeeProfile:
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        employee_id = slugify(name)
        if self._employees.get_by_id(employee_id):
            raise ValidationError(f"Employee already exists: {employee_id}")

        employee = Employee(
            employee_id=employee_id,
            name=name,
            is_active=True,
            current_status=ClockStatus.CLOCKED_OUT,
            last_clock_in=None,
            last_clock_out=None,
            password_hash=generate_password_hash(password),
        )
        self._employees.create(employee)
        logger.info("Created employee %s", employee_id)
        return EmployeeProfile.of(employee)

    def update(
        self,
        *,
        employee_id: str,
        name: Optional[str] = None,
        password: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> EmployeeProfile:
        employee_id = require_non_empty(employee_id, "Employee ID")
        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        updated = self._employees.update_profile(
            employee_id,
            name=name.strip() if name and name.strip() else None,
            password_hash=password_hash,
            is_active=None if is_active is None else bool(is_active),
        )
        return EmployeeProfile.of(updated)

    def deactivate(self, employee_id: str) -> EmployeeProfile:
        """Soft delete: history stays attributable, the row is never removed."""
        return self.update(employee_id=employee_id, is_active=False)
