# -*- coding: utf-8 -*-
"""Dashboard — one call for the day's totals, water and goals."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..meals.storage import daily_totals
from ..profiles.api import recommended_for
from ..profiles.storage import get_profile
from ..timeutil import day_or_400
from ..water.api import progress_percent
from ..water.storage import get_amount
from .models import DashboardResponse, MealSummary

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse, summary="Daily nutrition summary")
def dashboard(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD (default: today, UTC)"),
    user: dict = Depends(get_current_user),
):
    day = day_or_400(date)
    profile = get_profile(user["id"])
    meals = MealSummary(**daily_totals(user["id"], day))
    water = get_amount(user["id"], day)
    return DashboardResponse(
        date=day,
        profile=profile,
        meals=meals,
        water_intake=water,
        calorie_progress=progress_percent(meals.total_calories, profile.daily_calorie_goal, cap=False),
        water_progress=progress_percent(water, profile.daily_water_goal),
        recommended_calories=recommended_for(profile),
    )
