# -*- coding: utf-8 -*-
"""Water — API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..timeutil import day_or_400
from ..profiles.storage import get_profile
from .models import WaterAddRequest, WaterIntakeResponse, WaterSetRequest
from .storage import add_amount, get_amount, set_amount

router = APIRouter(prefix="/api/water", tags=["Water"])


def progress_percent(amount: float, goal: float, *, cap: bool = True) -> float:
    if goal <= 0:
        return 0.0
    percent = amount / goal * 100.0
    return round(min(100.0, percent) if cap else percent, 1)


def intake_response(user_id: str, day: str, amount: int) -> WaterIntakeResponse:
    goal = get_profile(user_id).daily_water_goal
    return WaterIntakeResponse(
        date=day,
        amount=amount,
        goal=goal,
        remaining=max(0, goal - amount),
        progress=progress_percent(amount, goal),
    )


@router.get("", response_model=WaterIntakeResponse, summary="Water intake for a day")
def read_intake(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    day = day_or_400(date)
    return intake_response(user["id"], day, get_amount(user["id"], day))


@router.put("", response_model=WaterIntakeResponse, summary="Set the day's total water intake")
def put_intake(request: WaterSetRequest, user: dict = Depends(get_current_user)):
    day = day_or_400(request.date)
    return intake_response(user["id"], day, set_amount(user["id"], day, request.amount))


@router.post("/add", response_model=WaterIntakeResponse, summary="Add water (e.g. one 250 ml glass)")
def add_intake(request: WaterAddRequest, user: dict = Depends(get_current_user)):
    day = day_or_400(request.date)
    return intake_response(user["id"], day, add_amount(user["id"], day, request.amount))
