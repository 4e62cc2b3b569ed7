"""Expansion of menu timestamp codes such as ``Updated mm/dd/yyyy``."""

from __future__ import annotations

import re
from datetime import date

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Longest codes first so "month" wins over "mon" and "m".
_CODE_RE = re.compile(r"(?<![A-Za-z])(month|mon|mm|m|day|dd|d|yyyy|year|yy)(?![A-Za-z])")


def day_with_suffix(day: int) -> str:
    """Return ``1st``, ``2nd``, ``11th``, ``23rd`` and so on."""
    if 10 <= day % 100 <= 20:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _expand(code: str, day: date) -> str:
    if code == "m":
        return str(day.month)
    if code == "mm":
        return f"{day.month:02d}"
    if code == "mon":
        return _MONTHS[day.month - 1][:3]
    if code == "month":
        return _MONTHS[day.month - 1]
    if code == "d":
        return str(day.day)
    if code == "dd":
        return f"{day.day:02d}"
    if code == "day":
        return day_with_suffix(day.day)
    if code == "yy":
        return f"{day.year % 100:02d}"
    return f"{day.year:04d}"


def format_timestamp(code: str, day: date | None = None) -> str:
    """Replace timestamp codes in ``code``; other text is kept literally."""
    day = day or date.today()
    return _CODE_RE.sub(lambda match: _expand(match.group(1), day), code)


__all__ = ["day_with_suffix", "format_timestamp"]
