# -*- coding: utf-8 -*-
"""Water — one intake row per (user, day)."""

from __future__ import annotations

from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..timeutil import utc_now_iso


def get_amount(user_id: str, day: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT amount FROM water_intake WHERE user_id = ? AND date = ?",
            (user_id, day),
        ).fetchone()
        return int(row["amount"]) if row else 0


def set_amount(user_id: str, day: str, amount: int) -> int:
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO water_intake (id, user_id, date, amount, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(user_id, date) DO UPDATE SET amount = excluded.amount, updated_at = excluded.updated_at
            """,
            (str(uuid4()), user_id, day, int(amount), utc_now_iso()),
        )
    return int(amount)


def add_amount(user_id: str, day: str, amount: int) -> int:
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO water_intake (id, user_id, date, amount, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(user_id, date) DO UPDATE SET amount = amount + excluded.amount, updated_at = excluded.updated_at
            """,
            (str(uuid4()), user_id, day, int(amount), utc_now_iso()),
        )
        row = conn.execute(
            "SELECT amount FROM water_intake WHERE user_id = ? AND date = ?",
            (user_id, day),
        ).fetchone()
    return int(row["amount"])
