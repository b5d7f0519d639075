# -*- coding: utf-8 -*-
"""Analysis — Pydantic models and request variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HealthRating(str, Enum):
    good = "good"
    average = "average"
    poor = "poor"


class NutritionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(..., alias="foodName", min_length=1)
    calories: int = Field(..., ge=0)
    # Macros pass through untouched; numeric coercion happens when a meal is stored.
    protein: Optional[Union[float, str]] = None
    carbs: Optional[Union[float, str]] = None
    fat: Optional[Union[float, str]] = None
    health_rating: Optional[str] = Field(None, alias="healthRating")
    vitamins: Optional[str] = None
    minerals: Optional[str] = None

    @field_validator("health_rating", mode="before")
    @classmethod
    def _normalize_rating(cls, value: object) -> object:
        if isinstance(value, str):
            v = value.strip().lower()
            if v in {r.value for r in HealthRating}:
                return v
        return value

    @field_validator("vitamins", "minerals", mode="before")
    @classmethod
    def _join_lists(cls, value: object) -> object:
        """Models sometimes answer with a list of nutrients instead of a sentence."""
        if isinstance(value, list):
            parts = [str(v).strip() for v in value if v is not None and str(v).strip()]
            return ", ".join(parts) if parts else None
        return value

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class AnalyzeFoodRequest(BaseModel):
    """Wire body of the analyze endpoint; exactly one field should be set."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: Optional[str] = Field(None, alias="imageUrl")
    food_name: Optional[str] = Field(None, alias="foodName")


class AnalyzeErrorResponse(BaseModel):
    error: str
    details: str = "Failed to analyze food"


@dataclass(frozen=True)
class ByImage:
    image_url: str


@dataclass(frozen=True)
class ByName:
    food_name: str


AnalysisRequest = Union[ByImage, ByName]
