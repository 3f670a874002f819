from __future__ import annotations

from functools import wraps

from flask import g, request

from ..common.http import request_token
from ..core.constants import ADMIN_TOKEN_COOKIE, EMPLOYEE_TOKEN_COOKIE
from ..core.enums import TokenKind
from ..core.exceptions import UnauthorizedError
from .session_gate import SessionGate

_COOKIES = {TokenKind.ADMIN: ADMIN_TOKEN_COOKIE, TokenKind.EMPLOYEE: EMPLOYEE_TOKEN_COOKIE}


def token_required(gate: SessionGate, kind: TokenKind):
    """Build a view decorator that admits only holders of a valid `kind` token.

    The subject id lands in `g.subject_id`. Must sit inside `json_api` so the
    UnauthorizedError becomes a 401.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            result = gate.validate(request_token(request, _COOKIES[kind]), kind)
            if not result.valid:
                raise UnauthorizedError("Authentication required" if kind == TokenKind.EMPLOYEE else "Unauthorized")
            g.subject_id = result.subject_id
            return view(*args, **kwargs)

        return wrapper

    return decorator
