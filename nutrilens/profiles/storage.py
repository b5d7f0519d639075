# -*- coding: utf-8 -*-
"""Profiles — DB storage helpers."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, Optional

from ..app_db import db_conn
from ..config import settings
from ..timeutil import utc_now_iso
from .models import Profile


def insert_default_profile(
    conn: sqlite3.Connection,
    user_id: str,
    *,
    daily_calorie_goal: Optional[int] = None,
    daily_water_goal: Optional[int] = None,
    weight_goal: Optional[str] = None,
) -> None:
    now = utc_now_iso()
    conn.execute(
        """
        INSERT OR IGNORE INTO profiles (
            id, daily_calorie_goal, daily_water_goal, weight_goal,
            current_weight, target_weight, height, created_at, updated_at
        )
        VALUES (?, ?, ?, ?, NULL, NULL, NULL, ?, ?)
        """,
        (
            user_id,
            int(daily_calorie_goal or settings.default_calorie_goal),
            int(daily_water_goal if daily_water_goal is not None else settings.default_water_goal_ml),
            weight_goal or "maintain",
            now,
            now,
        ),
    )


def _row_to_profile(row: Dict[str, Any]) -> Profile:
    return Profile(
        id=row["id"],
        daily_calorie_goal=row["daily_calorie_goal"],
        daily_water_goal=row["daily_water_goal"],
        weight_goal=row["weight_goal"],
        current_weight=row["current_weight"],
        target_weight=row["target_weight"],
        height=row["height"],
        updated_at=row["updated_at"],
    )


def get_profile(user_id: str) -> Profile:
    """Return the user's profile, creating the default one on first access."""
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE id = ?", (user_id,)).fetchone()
        if not row:
            insert_default_profile(conn, user_id)
            row = conn.execute("SELECT * FROM profiles WHERE id = ?", (user_id,)).fetchone()
        return _row_to_profile(dict(row))


def update_goals(
    user_id: str,
    *,
    daily_calorie_goal: Optional[int] = None,
    daily_water_goal: Optional[int] = None,
    weight_goal: Optional[str] = None,
) -> Profile:
    fields: Dict[str, Any] = {}
    if daily_calorie_goal is not None:
        fields["daily_calorie_goal"] = int(daily_calorie_goal)
    if daily_water_goal is not None:
        fields["daily_water_goal"] = int(daily_water_goal)
    if weight_goal is not None:
        fields["weight_goal"] = weight_goal
    get_profile(user_id)
    if fields:
        fields["updated_at"] = utc_now_iso()
        assignments = ", ".join(f"{k} = ?" for k in fields)
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                f"UPDATE profiles SET {assignments} WHERE id = ?",
                (*fields.values(), user_id),
            )
    return get_profile(user_id)


def update_weight(
    user_id: str,
    *,
    current_weight: float,
    target_weight: float,
    height: Optional[float],
) -> Profile:
    get_profile(user_id)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            UPDATE profiles
            SET current_weight = ?, target_weight = ?, height = ?, updated_at = ?
            WHERE id = ?
            """,
            (float(current_weight), float(target_weight), height, utc_now_iso(), user_id),
        )
    return get_profile(user_id)
