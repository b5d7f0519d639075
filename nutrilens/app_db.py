# -*- coding: utf-8 -*-
"""App database (users, profiles, meals, daily water intake) — SQLite helpers."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    # One profile per user; the id is the user id.
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
        daily_calorie_goal INTEGER NOT NULL,
        daily_water_goal INTEGER NOT NULL,
        weight_goal TEXT NOT NULL DEFAULT 'maintain',
        current_weight REAL,
        target_weight REAL,
        height REAL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS meals (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        food_name TEXT NOT NULL,
        image_url TEXT,
        calories INTEGER NOT NULL CHECK (calories >= 0),
        protein REAL,
        carbs REAL,
        fat REAL,
        vitamins TEXT,
        minerals TEXT,
        serving_size TEXT,
        meal_type TEXT NOT NULL,
        health_rating TEXT,
        notes TEXT,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_meals_user_created ON meals(user_id, created_at DESC)",
    """
    CREATE TABLE IF NOT EXISTS water_intake (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        date TEXT NOT NULL,
        amount INTEGER NOT NULL DEFAULT 0 CHECK (amount >= 0),
        updated_at TEXT NOT NULL
    )
    """,
    # Upserts in water/storage.py rely on this.
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_water_user_date ON water_intake(user_id, date)",
)


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False, timeout=10.0)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_app_db(db_path: Path) -> None:
    with db_conn(db_path) as conn:
        for statement in _SCHEMA:
            conn.execute(statement)


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Connection that commits on success and rolls back on error."""
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
