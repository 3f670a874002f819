from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class UnauthorizedError(DomainError):
    """Raised when a bearer token is missing, expired or invalid."""


class NotFoundError(DomainError):
    """Raised when an employee, time entry or network rule does not exist."""


class InactiveError(DomainError):
    """Raised when a disabled employee tries to log in or clock."""


class AlreadyOpenError(DomainError):
    """Raised on clock-in while the employee already has an open time entry."""


class NoActiveSessionError(DomainError):
    """Raised on clock-out when there is no single open time entry to close."""


class InvalidDurationError(ValidationError):
    """Raised when clock-out precedes clock-in or a required time is missing."""


class InvalidClockOutRequiredError(ValidationError):
    """Raised when a manual entry would be left open."""


class ConfigurationError(DomainError):
    """Raised when required site/settings data is not configured."""


class OutOfRangeError(DomainError):
    """Raised when the caller is outside the geofence and not on an allowed network."""

    def __init__(self, *, site_name: str, address: str, radius: float):
        self.site_name = site_name
        self.address = address
        self.radius = radius
        super().__init__(
            f"You must be within {radius:g} meters of {site_name} to clock in, "
            "or connected to the office network."
        )


class StoreError(Exception):
    """Base exception for record store failures (infrastructure, not business)."""


class SheetNotFoundError(StoreError):
    """Raised when a named collection does not exist in the store."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Sheet not found: {sheet_name}")


class UpstreamUnavailableError(StoreError):
    """Raised when the record store or IP lookup failed or timed out.

    Retryable from the client side; never retried automatically.
    """

    def __init__(self, message: str, *, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)
