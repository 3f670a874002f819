from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer

from ..common.datetime_utils import now_utc
from ..core.constants import ADMIN_SUBJECT, ADMIN_TOKEN_MAX_AGE_SECONDS, EMPLOYEE_TOKEN_MAX_AGE_SECONDS
from ..core.enums import TokenKind


@dataclass(frozen=True)
class TokenValidation:
    valid: bool
    subject_id: Optional[str] = None


class SessionGate:
    """Issue and validate opaque bearer tokens.

    Tokens carry the subject and kind, signed with the app secret; the signer
    embeds the issue time. Validation is stateless (no revocation list).
    """

    _SALT = "timeclock-session"

    def __init__(
        self,
        secret_key: str,
        *,
        admin_max_age: timedelta = timedelta(seconds=ADMIN_TOKEN_MAX_AGE_SECONDS),
        employee_max_age: timedelta = timedelta(seconds=EMPLOYEE_TOKEN_MAX_AGE_SECONDS),
        clock: Callable[[], datetime] = now_utc,
    ):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self._SALT)
        self._max_age = {TokenKind.ADMIN: admin_max_age, TokenKind.EMPLOYEE: employee_max_age}
        self._clock = clock

    def issue_admin_token(self) -> str:
        return self._serializer.dumps({"sub": ADMIN_SUBJECT, "kind": TokenKind.ADMIN.value})

    def issue_employee_token(self, employee_id: str) -> str:
        return self._serializer.dumps({"sub": employee_id, "kind": TokenKind.EMPLOYEE.value})

    def validate(self, token: Optional[str], kind: TokenKind) -> TokenValidation:
        if not token:
            return TokenValidation(valid=False)
        try:
            payload, issued_at = self._serializer.loads(token, return_timestamp=True)
        except BadSignature:
            return TokenValidation(valid=False)

        if not isinstance(payload, dict) or payload.get("kind") != kind.value or not payload.get("sub"):
            return TokenValidation(valid=False)

        age = self._clock() - issued_at
        if age >= self._max_age[kind] or age < -timedelta(minutes=5):
            return TokenValidation(valid=False)
        return TokenValidation(valid=True, subject_id=str(payload["sub"]))
