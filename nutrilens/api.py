# -*- coding: utf-8 -*-
"""
NutriLens API

Food photo / name analysis through an AI gateway, meal logging, water intake,
weight goals and the daily dashboard.
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .analysis.api import analysis_error_handler, analyze_validation_error_handler
from .analysis.api import router as analysis_router
from .analysis.errors import AnalysisError
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .dashboard.api import router as dashboard_router
from .meals.api import router as meals_router
from .meals.images import PUBLIC_PREFIX
from .profiles.api import router as profiles_router
from .water.api import router as water_router

app = FastAPI(
    title="NutriLens",
    description="AI food analysis, meal logging and daily nutrition tracking",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)
settings.meal_images_root.mkdir(parents=True, exist_ok=True)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    # Preflight requests carry no credentials; CORSMiddleware answers them.
    if request.method == "OPTIONS":
        return await call_next(request)
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            user = get_current_user_from_request(request)
            request.state.user = user
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.add_exception_handler(AnalysisError, analysis_error_handler)
app.add_exception_handler(RequestValidationError, analyze_validation_error_handler)

app.include_router(auth_router)
app.include_router(analysis_router)
app.include_router(meals_router)
app.include_router(water_router)
app.include_router(profiles_router)
app.include_router(dashboard_router)

# Meal photos are public by URL, like a public storage bucket.
app.mount(
    PUBLIC_PREFIX,
    StaticFiles(directory=settings.meal_images_root, check_dir=False),
    name="meal-images",
)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (`nutrilens`)."""
    import uvicorn

    uvicorn.run("nutrilens.api:app", host=settings.host, port=settings.port, reload=False)
