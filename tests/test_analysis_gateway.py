# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from typing import Callable, List

import httpx

from nutrilens.analysis.errors import ConfigurationError, UpstreamError
from nutrilens.analysis.gateway import GatewayClient, GatewaySettings
from nutrilens.analysis.models import ByImage, ByName

_URL = "https://gateway.test/v1/chat/completions"


def _settings(**overrides) -> GatewaySettings:
    base = dict(api_key="test-key", base_url=_URL, model="test/model", temperature=0.7, timeout=5.0, max_retries=1)
    base.update(overrides)
    return GatewaySettings(**base)


def _completion(content: object) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class _Recorder:
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class TestGatewayClient(unittest.IsolatedAsyncioTestCase):
    async def test_by_name_payload_and_auth(self) -> None:
        rec = _Recorder(lambda req: httpx.Response(200, json=_completion('{"foodName": "Rice", "calories": 200}')))
        client = GatewayClient(_settings(), transport=rec.transport)

        text = await client.complete(ByName(food_name="fried rice"))

        self.assertEqual(text, '{"foodName": "Rice", "calories": 200}')
        self.assertEqual(len(rec.requests), 1)
        sent = rec.requests[0]
        self.assertEqual(str(sent.url), _URL)
        self.assertEqual(sent.headers["authorization"], "Bearer test-key")
        body = json.loads(sent.content)
        self.assertEqual(body["model"], "test/model")
        self.assertEqual(body["temperature"], 0.7)
        self.assertEqual(body["messages"][0]["role"], "system")
        self.assertIn('"healthRating"', body["messages"][0]["content"])
        self.assertEqual(body["messages"][1]["role"], "user")
        self.assertIn('"fried rice"', body["messages"][1]["content"])

    async def test_by_image_sends_image_part(self) -> None:
        rec = _Recorder(lambda req: httpx.Response(200, json=_completion("{}")))
        client = GatewayClient(_settings(), transport=rec.transport)

        await client.complete(ByImage(image_url="https://cdn.test/meal.jpg"))

        content = json.loads(rec.requests[0].content)["messages"][1]["content"]
        self.assertIsInstance(content, list)
        self.assertEqual(content[0]["type"], "text")
        self.assertEqual(content[1], {"type": "image_url", "image_url": {"url": "https://cdn.test/meal.jpg"}})

    async def test_missing_credential_makes_no_call(self) -> None:
        rec = _Recorder(lambda req: httpx.Response(200, json=_completion("{}")))
        client = GatewayClient(_settings(api_key=None), transport=rec.transport)

        with self.assertRaises(ConfigurationError):
            await client.complete(ByName(food_name="apple"))
        self.assertEqual(rec.requests, [])

    async def test_error_status_is_upstream_error_without_retry(self) -> None:
        rec = _Recorder(lambda req: httpx.Response(429, text="rate limited"))
        client = GatewayClient(_settings(max_retries=3), transport=rec.transport)

        with self.assertRaises(UpstreamError) as ctx:
            await client.complete(ByName(food_name="apple"))
        self.assertEqual(ctx.exception.status_code_upstream, 429)
        self.assertEqual(ctx.exception.body, "rate limited")
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(len(rec.requests), 1)

    async def test_empty_content_is_upstream_error(self) -> None:
        for payload in (_completion(""), _completion(None), {"choices": []}, {}):
            rec = _Recorder(lambda req, p=payload: httpx.Response(200, json=p))
            client = GatewayClient(_settings(), transport=rec.transport)
            with self.assertRaises(UpstreamError, msg=str(payload)):
                await client.complete(ByName(food_name="apple"))

    async def test_non_json_body_is_upstream_error(self) -> None:
        rec = _Recorder(lambda req: httpx.Response(200, text="<html>gateway</html>"))
        client = GatewayClient(_settings(), transport=rec.transport)
        with self.assertRaises(UpstreamError):
            await client.complete(ByName(food_name="apple"))

    async def test_content_parts_are_joined(self) -> None:
        parts = [{"type": "text", "text": '{"foodName": '}, {"type": "text", "text": '"Tea", "calories": 2}'}]
        rec = _Recorder(lambda req: httpx.Response(200, json=_completion(parts)))
        client = GatewayClient(_settings(), transport=rec.transport)
        self.assertEqual(await client.complete(ByName(food_name="tea")), '{"foodName": "Tea", "calories": 2}')

    async def test_transient_transport_error_is_retried_once(self) -> None:
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] == 1:
                raise httpx.ConnectError("connection reset", request=request)
            return httpx.Response(200, json=_completion("ok"))

        client = GatewayClient(_settings(max_retries=1), transport=httpx.MockTransport(handler))
        self.assertEqual(await client.complete(ByName(food_name="apple")), "ok")
        self.assertEqual(calls["n"], 2)

    async def test_retries_exhausted_is_upstream_error(self) -> None:
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            raise httpx.ReadTimeout("timed out", request=request)

        client = GatewayClient(_settings(max_retries=1), transport=httpx.MockTransport(handler))
        with self.assertRaises(UpstreamError) as ctx:
            await client.complete(ByName(food_name="apple"))
        self.assertIsNone(ctx.exception.status_code_upstream)
        self.assertEqual(calls["n"], 2)

    async def test_redirect_loop_is_upstream_error_without_retry(self) -> None:
        rec = _Recorder(lambda req: httpx.Response(302, headers={"Location": _URL}))
        client = GatewayClient(_settings(max_retries=3), transport=rec.transport)

        with self.assertRaises(UpstreamError) as ctx:
            await client.complete(ByName(food_name="apple"))
        self.assertIsNone(ctx.exception.status_code_upstream)
        self.assertIn("TooManyRedirects", ctx.exception.message)
        # One request chain: the initial POST plus the followed redirects, never re-sent.
        self.assertEqual(sum(1 for r in rec.requests if r.method == "POST"), 1)

    async def test_zero_retries_fails_fast(self) -> None:
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            raise httpx.ConnectError("refused", request=request)

        client = GatewayClient(_settings(max_retries=0), transport=httpx.MockTransport(handler))
        with self.assertRaises(UpstreamError):
            await client.complete(ByName(food_name="apple"))
        self.assertEqual(calls["n"], 1)


if __name__ == "__main__":
    unittest.main()
