from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Request, Response, jsonify, request

from ..core.exceptions import (
    AlreadyOpenError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DomainError,
    InactiveError,
    NoActiveSessionError,
    NotFoundError,
    OutOfRangeError,
    SheetNotFoundError,
    UnauthorizedError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: the first isinstance match wins.
_STATUS_BY_ERROR = (
    (UnauthorizedError, 401),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InactiveError, 403),
    (OutOfRangeError, 403),
    (AlreadyOpenError, 409),
    (NoActiveSessionError, 409),
    (ValidationError, 400),
    (ConfigurationError, 500),
)


def error_response(exc: Exception) -> tuple[Response, int]:
    """Map a raised error to a JSON body and HTTP status."""
    if isinstance(exc, OutOfRangeError):
        body = {
            "error": str(exc),
            "kind": type(exc).__name__,
            "jobSite": {"name": exc.site_name, "address": exc.address, "radius": exc.radius},
        }
        return jsonify(body), 403

    if isinstance(exc, UpstreamUnavailableError):
        return jsonify({"error": "Service temporarily unavailable. Please try again.", "kind": type(exc).__name__, "retryable": True}), 503

    if isinstance(exc, SheetNotFoundError):
        logger.error("Missing sheet: %s", exc.sheet_name)
        return jsonify({"error": "Record store is not initialized", "kind": "ConfigurationError"}), 500

    if isinstance(exc, DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return jsonify({"error": str(exc), "kind": type(exc).__name__}), status

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error", "kind": "InternalError"}), 500


def json_api(view):
    """Run a view and turn any raised error into a JSON error response."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except Exception as e:
            return error_response(e)

    return wrapper


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def request_token(req: Request, cookie_name: str) -> Optional[str]:
    """Session token from the named cookie, else from an Authorization: Bearer header."""
    token = req.cookies.get(cookie_name)
    if token:
        return token
    auth = req.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


def parse_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    v = str(value).strip().lower()
    if v in {"true", "1", "yes"}:
        return True
    if v in {"false", "0", "no"}:
        return False
    raise ValidationError("isActive must be true or false")
