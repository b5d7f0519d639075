# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from typing import List, Optional

from nutrilens.analysis.errors import InvalidRequest, ParseError, UpstreamError
from nutrilens.analysis.handler import analyze_food, to_analysis_request
from nutrilens.analysis.models import AnalysisRequest, AnalyzeFoodRequest, ByImage, ByName

CHICKEN_SALAD_REPLY = (
    "Here's the breakdown:\n"
    "```json\n"
    '{"foodName":"Grilled Chicken Salad","calories":350,"protein":40,"carbs":12,"fat":14,"healthRating":"good"}\n'
    "```"
)


class StubGateway:
    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[AnalysisRequest] = []

    async def complete(self, request: AnalysisRequest) -> str:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


class TestToAnalysisRequest(unittest.TestCase):
    def test_variants(self) -> None:
        self.assertEqual(
            to_analysis_request(AnalyzeFoodRequest(imageUrl="https://x.test/a.jpg")),
            ByImage(image_url="https://x.test/a.jpg"),
        )
        self.assertEqual(to_analysis_request(AnalyzeFoodRequest(foodName=" oatmeal ")), ByName(food_name="oatmeal"))

    def test_blank_strings_count_as_absent(self) -> None:
        self.assertEqual(
            to_analysis_request(AnalyzeFoodRequest(imageUrl="  ", foodName="soup")),
            ByName(food_name="soup"),
        )
        with self.assertRaises(InvalidRequest):
            to_analysis_request(AnalyzeFoodRequest(imageUrl="", foodName=" "))


class TestAnalyzeFood(unittest.IsolatedAsyncioTestCase):
    async def test_grilled_chicken_salad_end_to_end(self) -> None:
        gateway = StubGateway(reply=CHICKEN_SALAD_REPLY)

        record = await analyze_food(AnalyzeFoodRequest(foodName="grilled chicken salad"), gateway)

        self.assertEqual(gateway.calls, [ByName(food_name="grilled chicken salad")])
        self.assertEqual(
            record.to_response(),
            {
                "foodName": "Grilled Chicken Salad",
                "calories": 350,
                "protein": 40,
                "carbs": 12,
                "fat": 14,
                "healthRating": "good",
            },
        )
        self.assertIsNone(record.vitamins)
        self.assertIsNone(record.minerals)

    async def test_both_or_neither_input_makes_no_upstream_call(self) -> None:
        for body in (
            AnalyzeFoodRequest(imageUrl="https://x.test/a.jpg", foodName="apple"),
            AnalyzeFoodRequest(),
        ):
            gateway = StubGateway(reply=CHICKEN_SALAD_REPLY)
            with self.assertRaises(InvalidRequest):
                await analyze_food(body, gateway)
            self.assertEqual(len(gateway.calls), 0)

    async def test_gateway_errors_propagate_unchanged(self) -> None:
        error = UpstreamError("AI gateway returned 503: down", status_code_upstream=503, body="down")
        gateway = StubGateway(error=error)
        with self.assertRaises(UpstreamError) as ctx:
            await analyze_food(AnalyzeFoodRequest(foodName="apple"), gateway)
        self.assertIs(ctx.exception, error)

    async def test_unparseable_reply_is_parse_error(self) -> None:
        gateway = StubGateway(reply="Sorry, I cannot help with that.")
        with self.assertRaises(ParseError):
            await analyze_food(AnalyzeFoodRequest(foodName="apple"), gateway)


if __name__ == "__main__":
    unittest.main()
