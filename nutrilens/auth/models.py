# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..profiles.models import WeightGoal


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    # Optional onboarding answers; omitted ones fall back to the configured defaults.
    daily_calorie_goal: Optional[int] = Field(None, ge=500, le=10000)
    daily_water_goal: Optional[int] = Field(None, ge=0, le=10000, description="ml")
    weight_goal: Optional[WeightGoal] = None


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserPublic(BaseModel):
    id: str
    email: str
    created_at: str


class AuthResponse(BaseModel):
    user: UserPublic
    token: str
