# -*- coding: utf-8 -*-
"""Meals — SQLite storage for logged meals."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..analysis.models import NutritionRecord
from ..app_db import db_conn
from ..config import settings
from ..timeutil import utc_now_iso
from .models import MealCreateRequest, MealRecord

_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def coerce_grams(value: Any) -> Optional[float]:
    """Best-effort float for macro values such as 12, "12.5", or "12 g"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    if isinstance(value, str):
        m = _NUM_RE.search(value.replace(",", ""))
        if not m:
            return None
        return max(0.0, float(m.group(0)))
    return None


def create_meal(user_id: str, meal: MealCreateRequest) -> MealRecord:
    record = MealRecord(
        id=str(uuid4()),
        user_id=user_id,
        food_name=meal.food_name.strip(),
        image_url=meal.image_url,
        calories=meal.calories,
        protein=meal.protein,
        carbs=meal.carbs,
        fat=meal.fat,
        vitamins=meal.vitamins,
        minerals=meal.minerals,
        serving_size=meal.serving_size,
        meal_type=meal.meal_type,
        health_rating=meal.health_rating.value if meal.health_rating else None,
        notes=meal.notes,
        created_at=utc_now_iso(),
    )
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO meals (
                id, user_id, food_name, image_url, calories, protein, carbs, fat,
                vitamins, minerals, serving_size, meal_type, health_rating, notes, created_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.id,
                record.user_id,
                record.food_name,
                record.image_url,
                record.calories,
                record.protein,
                record.carbs,
                record.fat,
                record.vitamins,
                record.minerals,
                record.serving_size,
                record.meal_type.value,
                record.health_rating,
                record.notes,
                record.created_at,
            ),
        )
    return record


def meal_from_analysis(
    record: NutritionRecord,
    *,
    image_url: Optional[str],
    serving_size: Optional[str],
    meal_type: str,
    notes: Optional[str],
) -> MealCreateRequest:
    rating = record.health_rating if record.health_rating in {"good", "average", "poor"} else None
    return MealCreateRequest(
        food_name=record.food_name,
        calories=record.calories,
        protein=coerce_grams(record.protein),
        carbs=coerce_grams(record.carbs),
        fat=coerce_grams(record.fat),
        health_rating=rating,
        vitamins=record.vitamins,
        minerals=record.minerals,
        image_url=image_url,
        serving_size=serving_size or None,
        meal_type=meal_type,
        notes=notes or None,
    )


def list_meals(
    user_id: str,
    *,
    day: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[MealRecord]:
    sql = "SELECT * FROM meals WHERE user_id = ?"
    params: List[Any] = [user_id]
    if day:
        # created_at is ISO8601 UTC, so the first 10 chars are the calendar day.
        sql += " AND substr(created_at, 1, 10) = ?"
        params.append(day)
    sql += " ORDER BY created_at DESC LIMIT ? OFFSET ?"
    params.extend([int(limit), int(offset)])
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
        return [MealRecord.model_validate(dict(r)) for r in rows]


def delete_meal(user_id: str, meal_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM meals WHERE id = ? AND user_id = ?", (meal_id, user_id))
        return cur.rowcount > 0


def daily_totals(user_id: str, day: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            """
            SELECT
                COUNT(*) AS meal_count,
                COALESCE(SUM(calories), 0) AS total_calories,
                COALESCE(SUM(protein), 0) AS total_protein,
                COALESCE(SUM(carbs), 0) AS total_carbs,
                COALESCE(SUM(fat), 0) AS total_fat
            FROM meals
            WHERE user_id = ? AND substr(created_at, 1, 10) = ?
            """,
            (user_id, day),
        ).fetchone()
    return {
        "meal_count": int(row["meal_count"]),
        "total_calories": int(row["total_calories"]),
        "total_protein": round(float(row["total_protein"]), 1),
        "total_carbs": round(float(row["total_carbs"]), 1),
        "total_fat": round(float(row["total_fat"]), 1),
    }
