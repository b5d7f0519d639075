# -*- coding: utf-8 -*-
"""UTC timestamp/date helpers shared by the storage and API modules."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import HTTPException


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat().replace("+00:00", "Z")


def today_utc() -> str:
    return utc_now().date().isoformat()


def resolve_day(value: Optional[str]) -> str:
    """Validate a YYYY-MM-DD string (default: today, UTC)."""
    if not value:
        return today_utc()
    return date.fromisoformat(value.strip()).isoformat()


def day_or_400(value: Optional[str]) -> str:
    try:
        return resolve_day(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid date (expected YYYY-MM-DD): {value}") from exc
