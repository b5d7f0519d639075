# -*- coding: utf-8 -*-
"""Analysis — chat-completion call to the AI gateway."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .errors import ConfigurationError, UpstreamError
from .models import AnalysisRequest, ByImage, ByName

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a nutrition expert AI. Analyze food and provide accurate nutrition information.
Always respond with JSON in this exact format:
{
  "foodName": "detected food name",
  "calories": number (integer),
  "protein": number (decimal, grams),
  "carbs": number (decimal, grams),
  "fat": number (decimal, grams),
  "healthRating": "good" or "average" or "poor",
  "vitamins": "brief description of key vitamins",
  "minerals": "brief description of key minerals"
}

Rating guidelines:
- "good": balanced macros, high in vitamins/minerals, whole foods
- "average": moderate nutritional value, some processed elements
- "poor": high in unhealthy fats/sugars, low nutritional value

Be accurate with numeric values. Use realistic portion sizes."""


@dataclass(frozen=True)
class GatewaySettings:
    api_key: Optional[str]
    base_url: str
    model: str
    temperature: float = 0.7
    timeout: float = 30.0
    max_retries: int = 1


def resolve_gateway_settings() -> GatewaySettings:
    return GatewaySettings(
        api_key=settings.ai_api_key,
        base_url=settings.ai_base_url,
        model=settings.ai_model,
        temperature=settings.ai_temperature,
        timeout=settings.ai_timeout,
        max_retries=max(0, settings.ai_max_retries),
    )


def build_messages(request: AnalysisRequest) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = [{"role": "system", "content": SYSTEM_PROMPT}]
    if isinstance(request, ByImage):
        messages.append(
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Analyze this food image and provide detailed nutrition information."},
                    {"type": "image_url", "image_url": {"url": request.image_url}},
                ],
            }
        )
    elif isinstance(request, ByName):
        messages.append(
            {
                "role": "user",
                "content": (
                    f'Analyze "{request.food_name}" and provide detailed nutrition '
                    "information for a standard serving."
                ),
            }
        )
    else:
        raise TypeError(f"unsupported analysis request: {request!r}")
    return messages


def _extract_message_content(data: object) -> str:
    """Return choices[0].message.content, joining text parts if the gateway sends a list."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        out: List[str] = []
        for part in content:
            if isinstance(part, dict) and part.get("type") in (None, "text", "output_text"):
                text = part.get("text")
                if isinstance(text, str):
                    out.append(text)
        return "".join(out)
    return ""


class GatewayClient:
    """Single-shot chat-completion client.

    ``transport`` is passed straight to ``httpx.AsyncClient``; tests use it to
    plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: GatewaySettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def build_payload(self, request: AnalysisRequest) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": build_messages(request),
            "temperature": self.config.temperature,
        }

    async def _post(self, client: httpx.AsyncClient, payload: Dict[str, Any]) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        attempts = self.config.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await client.post(self.config.base_url, headers=headers, json=payload)
            except httpx.TransportError as exc:
                if attempt >= attempts:
                    raise UpstreamError(
                        f"AI gateway request failed: {exc.__class__.__name__}: {exc}",
                        body=str(exc),
                    ) from exc
                logger.warning(
                    "AI gateway transport error (attempt %d/%d): %s", attempt, attempts, exc
                )
            except httpx.RequestError as exc:
                # Redirect loops and undecodable bodies will not fix themselves on retry.
                logger.error("AI gateway request error: %s: %s", exc.__class__.__name__, exc)
                raise UpstreamError(
                    f"AI gateway request failed: {exc.__class__.__name__}: {exc}",
                    body=str(exc),
                ) from exc
        raise UpstreamError("AI gateway request failed")

    async def complete(self, request: AnalysisRequest) -> str:
        if not self.config.api_key:
            raise ConfigurationError("AI gateway API key is not configured")

        payload = self.build_payload(request)
        async with httpx.AsyncClient(
            timeout=self.config.timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            resp = await self._post(client, payload)

        if not resp.is_success:
            body = resp.text or ""
            logger.error("AI gateway error: %s %s", resp.status_code, body[:500])
            raise UpstreamError(
                f"AI gateway returned {resp.status_code}: {body}",
                status_code_upstream=resp.status_code,
                body=body,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                "AI gateway returned a non-JSON response",
                status_code_upstream=resp.status_code,
                body=resp.text or "",
            ) from exc

        content = _extract_message_content(data)
        if not content.strip():
            raise UpstreamError(
                "No content in AI response",
                status_code_upstream=resp.status_code,
                body=resp.text or "",
            )
        return content


def get_gateway_client() -> GatewayClient:
    """FastAPI dependency; tests override it through ``app.dependency_overrides``."""
    return GatewayClient(resolve_gateway_settings())

