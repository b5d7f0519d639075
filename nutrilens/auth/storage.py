# -*- coding: utf-8 -*-
"""Auth — user rows (plus the profile row every user starts with)."""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..profiles.storage import insert_default_profile
from ..timeutil import utc_now_iso


def _normalize_email(email: str) -> str:
    return email.lower().strip()


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (_normalize_email(email),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def create_user(
    *,
    email: str,
    password_hash: str,
    daily_calorie_goal: Optional[int] = None,
    daily_water_goal: Optional[int] = None,
    weight_goal: Optional[str] = None,
) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = utc_now_iso()
    email_norm = _normalize_email(email)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
            (user_id, email_norm, password_hash, now),
        )
        insert_default_profile(
            conn,
            user_id,
            daily_calorie_goal=daily_calorie_goal,
            daily_water_goal=daily_water_goal,
            weight_goal=weight_goal,
        )
    return {"id": user_id, "email": email_norm, "password_hash": password_hash, "created_at": now}
