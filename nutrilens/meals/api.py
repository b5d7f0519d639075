# -*- coding: utf-8 -*-
"""Meals — API endpoints (manual log, list, delete, photo upload, analyze-and-save)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from ..analysis.gateway import GatewayClient, get_gateway_client
from ..analysis.handler import analyze_food
from ..analysis.models import AnalyzeFoodRequest
from ..auth.security import get_current_user
from ..timeutil import day_or_400
from .images import data_url, store_meal_image
from .models import MealCreateRequest, MealImageResponse, MealListResponse, MealRecord, MealType
from .storage import create_meal, delete_meal, list_meals, meal_from_analysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/meals", tags=["Meals"])


@router.post("", response_model=MealRecord, summary="Log a meal manually")
def create(request: MealCreateRequest, user: dict = Depends(get_current_user)):
    return create_meal(user["id"], request)


@router.get("", response_model=MealListResponse, summary="List my meals (optionally for one day)")
def list_my_meals(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: dict = Depends(get_current_user),
):
    day = day_or_400(date) if date else None
    meals = list_meals(user["id"], day=day, limit=limit, offset=offset)
    return MealListResponse(date=day, count=len(meals), meals=meals)


@router.delete("/{meal_id}", summary="Delete a meal")
def remove(meal_id: str, user: dict = Depends(get_current_user)):
    if not delete_meal(user["id"], meal_id):
        raise HTTPException(status_code=404, detail="Meal not found")
    return {"status": "ok"}


@router.post("/images", response_model=MealImageResponse, summary="Upload a meal photo (public URL)")
def upload_image(file: UploadFile = File(...), user: dict = Depends(get_current_user)):
    content_type = file.content_type or ""
    _, url, size = store_meal_image(user["id"], file)
    return MealImageResponse(image_url=url, content_type=content_type, size_bytes=size)


@router.post("/analyze", response_model=MealRecord, summary="Analyze a photo or food name and save the meal")
async def analyze_and_save(
    file: Optional[UploadFile] = File(default=None),
    food_name: Optional[str] = Form(default=None),
    meal_type: MealType = Form(default=MealType.lunch),
    serving_size: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
    user: dict = Depends(get_current_user),
    gateway: GatewayClient = Depends(get_gateway_client),
):
    upload = file if file is not None and file.filename else None
    name = (food_name or "").strip()
    if upload is None and not name:
        raise HTTPException(status_code=400, detail="Please upload an image or enter food name")

    image_path: Optional[Path] = None
    image_url: Optional[str] = None
    if upload is not None:
        mime = (upload.content_type or "image/jpeg").lower()
        image_path, image_url, _ = await run_in_threadpool(store_meal_image, user["id"], upload)
        # The stored URL may not be reachable from the gateway, so the photo goes inline.
        inline = await run_in_threadpool(data_url, image_path, mime)
        body = AnalyzeFoodRequest(image_url=inline)
    else:
        body = AnalyzeFoodRequest(food_name=name)

    try:
        record = await analyze_food(body, gateway)
    except Exception:
        # No meal row will point at the photo.
        if image_path is not None:
            image_path.unlink(missing_ok=True)
        raise
    meal = meal_from_analysis(
        record,
        image_url=image_url,
        serving_size=serving_size,
        meal_type=meal_type.value,
        notes=notes,
    )
    saved = await run_in_threadpool(create_meal, user["id"], meal)
    logger.info("saved analyzed meal %s for user %s", saved.id, user["id"])
    return saved
