from __future__ import annotations

from typing import Optional

from calc_backend.core.errors import InvalidParameter


def require_non_negative(value: Optional[float], field: str) -> float:
    if value is None or value < 0:
        raise InvalidParameter(f"{field} must be >= 0", field=field)
    return value


def require_positive(value: Optional[float], field: str) -> float:
    if value is None or value <= 0:
        raise InvalidParameter(f"{field} must be > 0", field=field)
    return value
