# -*- coding: utf-8 -*-
"""Analysis — recover a NutritionRecord from free-form model output.

Chat models wrap their JSON in different ways: a ```json fence, a sentence
before or after the object, or nothing at all. Each extraction strategy here
is a pure function returning an ``ExtractionAttempt``; ``extract_json_object``
runs them in order and keeps the first success.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..config import settings
from .errors import ParseError, SchemaError
from .models import NutritionRecord

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```[ \t]*(json)?[ \t]*\r?\n?(.*?)```", re.IGNORECASE | re.DOTALL)
_FENCE_TAG_RE = re.compile(r"```[ \t]*([A-Za-z0-9_+-]*)")


@dataclass(frozen=True)
class ExtractionAttempt:
    strategy: str
    value: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def _loads_object(text: str) -> Dict[str, Any]:
    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _iter_fenced_blocks(text: str) -> List[str]:
    blocks: List[str] = []
    for match in _FENCE_RE.finditer(text):
        tag = _FENCE_TAG_RE.match(match.group(0))
        lang = (tag.group(1) if tag else "").lower()
        # Only ```json and bare ``` fences carry the payload.
        if lang and lang != "json":
            continue
        blocks.append(match.group(2))
    return blocks


def _iter_json_object_candidates(text: str) -> List[str]:
    """Extract balanced top-level {...} spans, honoring string literals inside them."""
    candidates: List[str] = []
    in_str = False
    escaped = False
    depth = 0
    start_idx: int | None = None

    for i, ch in enumerate(text):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "\"":
                in_str = False
            continue

        # Quotes in the prose around the object are not string literals.
        if ch == "\"" and depth > 0:
            in_str = True
            continue

        if ch == "{":
            if depth == 0:
                start_idx = i
            depth += 1
            continue

        if ch == "}":
            if depth > 0:
                depth -= 1
                if depth == 0 and start_idx is not None:
                    candidates.append(text[start_idx : i + 1])
                    start_idx = None
            continue

    return candidates


def from_fenced_block(text: str) -> ExtractionAttempt:
    blocks = _iter_fenced_blocks(text)
    if not blocks:
        return ExtractionAttempt("fenced_block", error="no fenced block")
    last_error = ""
    for block in blocks:
        try:
            return ExtractionAttempt("fenced_block", value=_loads_object(block.strip()))
        except ValueError as exc:
            last_error = str(exc)
    return ExtractionAttempt("fenced_block", error=last_error)


def from_bracket_span(text: str) -> ExtractionAttempt:
    candidates = _iter_json_object_candidates(text)
    if not candidates:
        return ExtractionAttempt("bracket_span", error="no {...} span")
    try:
        return ExtractionAttempt("bracket_span", value=_loads_object(candidates[0]))
    except ValueError as exc:
        return ExtractionAttempt("bracket_span", error=str(exc))


def from_whole_text(text: str) -> ExtractionAttempt:
    try:
        return ExtractionAttempt("whole_text", value=_loads_object(text.strip()))
    except ValueError as exc:
        return ExtractionAttempt("whole_text", error=str(exc))


STRATEGIES: Sequence[Callable[[str], ExtractionAttempt]] = (
    from_fenced_block,
    from_bracket_span,
    from_whole_text,
)


def extract_json_object(text: str) -> Dict[str, Any]:
    attempts: List[ExtractionAttempt] = []
    for strategy in STRATEGIES:
        attempt = strategy(text)
        if attempt.value is not None:
            return attempt.value
        attempts.append(attempt)

    logger.warning("could not extract JSON from model output: %r", text[:500])
    summary = "; ".join(f"{a.strategy}: {a.error}" for a in attempts)
    raise ParseError(
        f"Failed to parse nutrition data from AI response ({summary})",
        raw_text=text,
    )


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def validate_record(data: Dict[str, Any]) -> NutritionRecord:
    name = data.get("foodName")
    if not isinstance(name, str) or not name.strip():
        raise SchemaError("Invalid nutrition data structure from AI: foodName must be a non-empty string")

    calories = data.get("calories")
    if not _is_number(calories):
        raise SchemaError("Invalid nutrition data structure from AI: calories must be a number")
    if calories < 0:
        raise SchemaError(f"Invalid nutrition data structure from AI: calories is negative ({calories})")
    if calories > settings.max_plausible_calories:
        logger.warning("implausible calorie value for %r: %s", name, calories)

    for key in ("protein", "carbs", "fat"):
        value = data.get(key)
        if _is_number(value) and value < 0:
            raise SchemaError(f"Invalid nutrition data structure from AI: {key} is negative ({value})")

    known = {
        k: data.get(k)
        for k in ("foodName", "protein", "carbs", "fat", "healthRating", "vitamins", "minerals")
        if data.get(k) is not None
    }
    known["calories"] = int(round(calories))
    try:
        return NutritionRecord.model_validate(known)
    except ValidationError as exc:
        raise SchemaError(f"Invalid nutrition data structure from AI: {exc.errors()[0]['msg']}") from exc


def parse_nutrition(text: str) -> NutritionRecord:
    """Extract and validate a NutritionRecord from raw model text."""
    return validate_record(extract_json_object(text or ""))
