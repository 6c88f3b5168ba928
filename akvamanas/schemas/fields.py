"""
Lenient field types shared by the input schemas.

Upstream records come from spreadsheets and hand-edited JSON, so a bad
cell must degrade to `None` instead of rejecting the whole batch.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def parse_numeric(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        value = float(v)
    else:
        text = str(v).strip()
        if not text:
            return None
        # Comma decimal separators are common in the station sheets
        try:
            value = float(text.replace(",", "."))
        except ValueError:
            return None
    return value if math.isfinite(value) else None


def parse_timestamp(v: Any) -> Optional[datetime]:
    """Parse to an aware UTC datetime; naive values are taken as UTC."""
    if v is None:
        return None
    if isinstance(v, datetime):
        ts = v
    elif isinstance(v, date):
        ts = datetime(v.year, v.month, v.day)
    else:
        text = str(v).strip()
        if not text:
            return None
        try:
            ts = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def normalize_code(v: Any) -> str:
    return "" if v is None else str(v).strip()


def normalize_text(v: Any) -> str:
    return "" if v is None else str(v).strip()


def code_key(code: Any) -> str:
    """Join key for station codes: trimmed and case-insensitive."""
    return normalize_code(code).lower()


Numeric = Annotated[Optional[float], BeforeValidator(parse_numeric)]
Timestamp = Annotated[Optional[datetime], BeforeValidator(parse_timestamp)]
StationCode = Annotated[str, BeforeValidator(normalize_code)]
Text = Annotated[str, BeforeValidator(normalize_text)]
