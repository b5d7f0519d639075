# -*- coding: utf-8 -*-
"""Meals — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..analysis.models import HealthRating


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class MealCreateRequest(BaseModel):
    food_name: str = Field(..., min_length=1, max_length=200)
    calories: int = Field(..., ge=0)
    protein: Optional[float] = Field(None, ge=0, description="grams")
    carbs: Optional[float] = Field(None, ge=0, description="grams")
    fat: Optional[float] = Field(None, ge=0, description="grams")
    health_rating: Optional[HealthRating] = None
    vitamins: Optional[str] = Field(None, max_length=2000)
    minerals: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = None
    serving_size: Optional[str] = Field(None, max_length=200)
    meal_type: MealType = MealType.lunch
    notes: Optional[str] = Field(None, max_length=2000)


class MealRecord(BaseModel):
    id: str
    user_id: str
    food_name: str
    image_url: Optional[str] = None
    calories: int
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    vitamins: Optional[str] = None
    minerals: Optional[str] = None
    serving_size: Optional[str] = None
    meal_type: MealType
    health_rating: Optional[str] = None
    notes: Optional[str] = None
    created_at: str


class MealListResponse(BaseModel):
    date: Optional[str] = None
    count: int
    meals: List[MealRecord]


class MealImageResponse(BaseModel):
    image_url: str
    content_type: str
    size_bytes: int
