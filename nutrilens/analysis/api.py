# -*- coding: utf-8 -*-
"""Analysis — API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import AnalysisError, InvalidRequest
from .gateway import GatewayClient, get_gateway_client
from .handler import analyze_food
from .models import AnalyzeErrorResponse, AnalyzeFoodRequest, NutritionRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])


def render_analysis_error(exc: AnalysisError) -> JSONResponse:
    body = AnalyzeErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:  # noqa: ARG001
    return render_analysis_error(exc)


# Paths whose failures always use the {error, details} body.
ANALYZE_PATHS = ("/api/analyze-food", "/api/meals/analyze")


async def analyze_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if request.url.path not in ANALYZE_PATHS:
        return await request_validation_exception_handler(request, exc)
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg") or "Invalid request"
    detail = f"{where}: {message}" if where else message
    return render_analysis_error(InvalidRequest(f"Invalid request: {detail}"))


@router.post(
    "/analyze-food",
    response_model=NutritionRecord,
    response_model_exclude_none=True,
    responses={
        400: {"model": AnalyzeErrorResponse},
        500: {"model": AnalyzeErrorResponse},
        502: {"model": AnalyzeErrorResponse},
    },
    summary="Analyze a food photo or name (no storage)",
)
async def analyze(request: AnalyzeFoodRequest, gateway: GatewayClient = Depends(get_gateway_client)):
    try:
        return await analyze_food(request, gateway)
    except AnalysisError:
        raise
    except Exception as exc:
        logger.exception("error in analyze-food")
        return JSONResponse(status_code=500, content=AnalyzeErrorResponse(error=str(exc) or "Unknown error").model_dump())
