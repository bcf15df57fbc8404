# stc_utils/normalizers.py
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Union

# ---------------- Dates ----------------

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "SEPT": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

MDY_RX = re.compile(r"^\s*(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})\s*$")
YMD_RX = re.compile(r"^\s*(\d{4})[./-](\d{1,2})[./-](\d{1,2})\s*$")
MON_D_Y_RX = re.compile(r"^\s*([A-Za-z]{3,})\.?\s+(\d{1,2}),?\s+(\d{2,4})\s*$")


def _clip_year(y: int) -> int:
    if y < 100:
        return 2000 + y if y < 70 else 1900 + y
    return y


def _safe_date(y: int, m: int, d: int) -> Optional[date]:
    try:
        return date(y, m, d)
    except ValueError:
        return None


def parse_date(raw: Union[str, date, None]) -> Optional[date]:
    """
    Best-effort calendar date from a transaction date field.

    Accepts date/datetime objects, ISO 8601 (with or without a time part),
    YYYY/MM/DD, MM/DD/YYYY (DD/MM when the first part is > 12) and
    "Mon D, YYYY". Returns None instead of raising on anything else.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None

    s = raw.strip()
    if not s:
        return None

    try:
        # "2025-04-25", "2025-04-25T10:30:00", "...Z" on 3.11+
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass

    m = YMD_RX.match(s)
    if m:
        return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = MON_D_Y_RX.match(s)
    if m:
        key = m.group(1).strip().upper()
        mon = MONTHS.get(key[:4]) or MONTHS.get(key[:3])
        if mon:
            return _safe_date(_clip_year(int(m.group(3))), mon, int(m.group(2)))
        return None

    m = MDY_RX.match(s)
    if m:
        a = int(m.group(1))
        b = int(m.group(2))
        y = _clip_year(int(m.group(3)))
        if a > 12 and b <= 12:
            d, mon = a, b
        else:
            mon, d = a, b
        return _safe_date(y, mon, d)

    return None


def to_iso_date(raw: Union[str, date, None]) -> Optional[str]:
    parsed = parse_date(raw)
    return parsed.isoformat() if parsed else None
