"""
Query Parameter Helpers

Scope parameters are lenient: a malformed or missing value falls back to the
route's default instead of failing the request.
"""

import re
from typing import Callable, Optional

from fastapi import Query

from bi_dashboard.config import get_settings

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")

# Largest value a signed 64-bit LIMIT accepts
MAX_LIMIT = 2 ** 63 - 1


def parse_limit(raw: Optional[str], default: int) -> int:
    """
    Parse a ``limit`` query value.

    The leading integer is used ("7" and "7days" both give 7). Missing,
    non-numeric and non-positive values give ``default``; values past a
    64-bit integer are clamped to ``MAX_LIMIT``.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    sign, digits = match.groups()
    digits = digits.lstrip("0")
    if sign == "-" or not digits:
        return default
    if len(digits) > len(str(MAX_LIMIT)):
        return MAX_LIMIT
    return min(int(digits), MAX_LIMIT)


def limit_param(setting: str) -> Callable[[Optional[str]], int]:
    """
    FastAPI dependency resolving ``?limit=`` against a ReportingSettings default.

    Example:
        limit: int = Depends(limit_param("recent_orders_limit"))
    """

    def resolve(limit: Optional[str] = Query(None, description="Row or scope limit")) -> int:
        return parse_limit(limit, getattr(get_settings().reporting, setting))

    return resolve
