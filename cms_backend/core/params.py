# File: cms_backend/core/params.py

"""
Coercion helpers for loosely-typed query-string and form values.
"""

import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_boolish_flag(value: Any) -> bool:
    """
    Coerce a boolean-like input to ``bool``.

    =================  ======
    input              result
    =================  ======
    ``True``           True
    ``"true"``         True
    anything else      False
    =================  ======

    The string match is exact, so ``"TRUE"`` and ``"1"`` are false. Callers
    that need to tell "absent" from "false" must check for ``None`` first.
    """
    return value is True or value == "true"


def parse_int(value: Optional[str]) -> Optional[int]:
    """Read the leading integer of ``value`` ("12abc" -> 12), or None."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_positive_int(value: Optional[str], default: int) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        return default
    return parsed
