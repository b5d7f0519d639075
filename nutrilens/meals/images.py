# -*- coding: utf-8 -*-
"""Meals — meal photo store (local files, served publicly under /media)."""

from __future__ import annotations

import base64
import re
import time
from pathlib import Path
from typing import Tuple
from uuid import uuid4

from fastapi import HTTPException, UploadFile

from ..config import settings

PUBLIC_PREFIX = "/media/meal-images"


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _safe_suffix(filename: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    if not suffix or len(suffix) > 12:
        return ""
    if not re.fullmatch(r"\.[a-z0-9]+", suffix):
        return ""
    return suffix


def public_url_for(user_id: str, name: str) -> str:
    return f"{settings.public_base_url}{PUBLIC_PREFIX}/{user_id}/{name}"


def store_meal_image(user_id: str, upload: UploadFile) -> Tuple[Path, str, int]:
    """Persist an uploaded image; returns (path, public_url, size_bytes)."""
    content_type = (upload.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail=f"Unsupported content type: {content_type or 'unknown'}")

    user_dir = settings.meal_images_root / user_id
    _ensure_dir(user_dir)
    name = f"{int(time.time() * 1000)}-{uuid4().hex[:8]}{_safe_suffix(upload.filename or '')}"
    path = user_dir / name

    size = 0
    max_bytes = int(settings.max_upload_mb) * 1024 * 1024
    try:
        with path.open("wb") as f:
            while True:
                chunk = upload.file.read(1024 * 256)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise HTTPException(status_code=413, detail=f"Image too large (> {settings.max_upload_mb} MB)")
                f.write(chunk)
    except HTTPException:
        path.unlink(missing_ok=True)
        raise
    finally:
        upload.file.close()

    if size == 0:
        path.unlink(missing_ok=True)
        raise HTTPException(status_code=400, detail="Empty image upload")
    return path, public_url_for(user_id, name), size


def data_url(path: Path, mime: str) -> str:
    b64 = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{b64}"
