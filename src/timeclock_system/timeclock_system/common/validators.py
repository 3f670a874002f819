from __future__ import annotations

import ipaddress
import math
import re
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_ip_address(value: str, field_name: str = "IP address") -> str:
    v = require_non_empty(value, field_name)
    try:
        ipaddress.ip_address(v)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid IP address")
    return v


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def optional_coordinate(value: Any, field_name: str) -> Optional[float]:
    """Coerce a latitude/longitude to float; rejects NaN/inf and non-numbers."""
    if value is None or value == "":
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(f):
        raise ValidationError(f"{field_name} must be a finite number")
    return f


def slugify(name: str) -> str:
    """'John Smith' -> 'john-smith' (stable identifier for employees/networks)."""
    return re.sub(r"\s+", "-", name.strip().lower())
