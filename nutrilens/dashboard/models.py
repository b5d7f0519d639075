# -*- coding: utf-8 -*-
"""Dashboard — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..profiles.models import Profile


class MealSummary(BaseModel):
    meal_count: int = Field(0, ge=0)
    total_calories: int = Field(0, ge=0)
    total_protein: float = Field(0.0, ge=0)
    total_carbs: float = Field(0.0, ge=0)
    total_fat: float = Field(0.0, ge=0)


class DashboardResponse(BaseModel):
    date: str
    profile: Profile
    meals: MealSummary
    water_intake: int = Field(0, ge=0, description="ml")
    calorie_progress: float = Field(0.0, ge=0, description="percent of daily_calorie_goal, may exceed 100")
    water_progress: float = Field(0.0, ge=0, description="percent of daily_water_goal, capped at 100")
    recommended_calories: Optional[int] = None
