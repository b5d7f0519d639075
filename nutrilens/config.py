from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the NutriLens backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("NUTRILENS_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("NUTRILENS_DB_PATH") or (self.data_root / "nutrilens.db")
        ).expanduser()
        # In production you MUST set NUTRILENS_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("NUTRILENS_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("NUTRILENS_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("NUTRILENS_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.max_upload_mb: int = int(os.environ.get("NUTRILENS_MAX_UPLOAD_MB") or "10")
        self.public_base_url: str = (
            os.environ.get("NUTRILENS_PUBLIC_BASE_URL") or "http://127.0.0.1:8000"
        ).rstrip("/")
        self.host: str = os.environ.get("NUTRILENS_HOST") or "127.0.0.1"
        try:
            self.port: int = int(os.environ.get("NUTRILENS_PORT") or "8000")
        except ValueError:
            self.port = 8000

        # ---- AI gateway (chat completions) ----
        self.ai_api_key: str | None = (
            os.environ.get("NUTRILENS_AI_API_KEY") or os.environ.get("LOVABLE_API_KEY") or None
        )
        self.ai_base_url: str = os.environ.get(
            "NUTRILENS_AI_BASE_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
        )
        self.ai_model: str = os.environ.get("NUTRILENS_AI_MODEL", "google/gemini-2.5-flash")
        self.ai_temperature: float = float(os.environ.get("NUTRILENS_AI_TEMPERATURE", "0.7"))
        self.ai_timeout: float = float(os.environ.get("NUTRILENS_AI_TIMEOUT", "30"))
        self.ai_max_retries: int = int(os.environ.get("NUTRILENS_AI_MAX_RETRIES", "1"))
        self.max_plausible_calories: int = int(
            os.environ.get("NUTRILENS_MAX_PLAUSIBLE_CALORIES", "10000")
        )

        # ---- Profile defaults ----
        self.default_calorie_goal: int = int(os.environ.get("NUTRILENS_DEFAULT_CALORIE_GOAL") or "2000")
        self.default_water_goal_ml: int = int(os.environ.get("NUTRILENS_DEFAULT_WATER_GOAL_ML") or "2000")

        cors = os.environ.get("NUTRILENS_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    @property
    def meal_images_root(self) -> Path:
        return self.data_root / "meal-images"


settings = Settings()
