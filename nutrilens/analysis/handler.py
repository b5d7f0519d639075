# -*- coding: utf-8 -*-
"""Analysis — request handler: validate, call the gateway, parse."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .errors import InvalidRequest
from .models import AnalysisRequest, AnalyzeFoodRequest, ByImage, ByName, NutritionRecord
from .parser import parse_nutrition

logger = logging.getLogger(__name__)


class Gateway(Protocol):
    async def complete(self, request: AnalysisRequest) -> str: ...


def _present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def to_analysis_request(body: AnalyzeFoodRequest) -> AnalysisRequest:
    has_image = _present(body.image_url)
    has_name = _present(body.food_name)
    if has_image and has_name:
        raise InvalidRequest("Provide either imageUrl or foodName, not both")
    if has_image:
        return ByImage(image_url=body.image_url.strip())  # type: ignore[union-attr]
    if has_name:
        return ByName(food_name=body.food_name.strip())  # type: ignore[union-attr]
    raise InvalidRequest("Either imageUrl or foodName must be provided")


async def analyze_food(body: AnalyzeFoodRequest, gateway: Gateway) -> NutritionRecord:
    request = to_analysis_request(body)
    logger.info(
        "analyzing food: has_image=%s food_name=%r",
        isinstance(request, ByImage),
        request.food_name if isinstance(request, ByName) else None,
    )
    raw = await gateway.complete(request)
    record = parse_nutrition(raw)
    logger.info("analyzed food: %s", record.food_name)
    return record
