# -*- coding: utf-8 -*-
"""Profiles — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WeightGoal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class Profile(BaseModel):
    id: str
    daily_calorie_goal: int = Field(..., ge=0)
    daily_water_goal: int = Field(..., ge=0, description="ml")
    weight_goal: WeightGoal = WeightGoal.maintain
    current_weight: Optional[float] = Field(None, gt=0, description="kg")
    target_weight: Optional[float] = Field(None, gt=0, description="kg")
    height: Optional[float] = Field(None, gt=0, description="cm")
    updated_at: str


class ProfileUpdateRequest(BaseModel):
    daily_calorie_goal: Optional[int] = Field(None, ge=500, le=10000)
    daily_water_goal: Optional[int] = Field(None, ge=0, le=10000, description="ml")
    weight_goal: Optional[WeightGoal] = None


class WeightUpdateRequest(BaseModel):
    current_weight: float = Field(..., gt=0, le=500, description="kg")
    target_weight: float = Field(..., gt=0, le=500, description="kg")
    height: Optional[float] = Field(None, gt=0, le=300, description="cm")


class ProfileResponse(BaseModel):
    profile: Profile
    recommended_calories: Optional[int] = None
