# -*- coding: utf-8 -*-
"""Water — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class WaterSetRequest(BaseModel):
    date: Optional[str] = Field(None, description="YYYY-MM-DD (default: today, UTC)")
    amount: int = Field(..., ge=0, le=20000, description="ml")


class WaterAddRequest(BaseModel):
    date: Optional[str] = Field(None, description="YYYY-MM-DD (default: today, UTC)")
    amount: int = Field(..., gt=0, le=5000, description="ml, e.g. 250 for a glass")


class WaterIntakeResponse(BaseModel):
    date: str
    amount: int = Field(..., ge=0, description="ml")
    goal: int = Field(..., ge=0, description="ml")
    remaining: int = Field(..., ge=0, description="ml")
    progress: float = Field(..., ge=0, description="percent of goal, capped at 100")
