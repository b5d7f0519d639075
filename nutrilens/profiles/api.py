# -*- coding: utf-8 -*-
"""Profiles — API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .calories import calculate_recommended_calories
from .models import Profile, ProfileResponse, ProfileUpdateRequest, WeightUpdateRequest
from .storage import get_profile, update_goals, update_weight

router = APIRouter(prefix="/api/profile", tags=["Profile"])


def recommended_for(profile: Profile) -> Optional[int]:
    if not profile.current_weight or not profile.target_weight:
        return None
    return calculate_recommended_calories(
        profile.current_weight,
        profile.target_weight,
        profile.weight_goal.value,
        profile.height,
    )


def _response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(profile=profile, recommended_calories=recommended_for(profile))


@router.get("", response_model=ProfileResponse, summary="Get my profile and goals")
def read_profile(user: dict = Depends(get_current_user)):
    return _response(get_profile(user["id"]))


@router.patch("", response_model=ProfileResponse, summary="Update calorie/water/weight goals")
def patch_profile(request: ProfileUpdateRequest, user: dict = Depends(get_current_user)):
    profile = update_goals(
        user["id"],
        daily_calorie_goal=request.daily_calorie_goal,
        daily_water_goal=request.daily_water_goal,
        weight_goal=request.weight_goal.value if request.weight_goal else None,
    )
    return _response(profile)


@router.put("/weight", response_model=ProfileResponse, summary="Set current/target weight and height")
def put_weight(request: WeightUpdateRequest, user: dict = Depends(get_current_user)):
    profile = update_weight(
        user["id"],
        current_weight=request.current_weight,
        target_weight=request.target_weight,
        height=request.height,
    )
    return _response(profile)
