# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest

from nutrilens.analysis.errors import ParseError, SchemaError
from nutrilens.analysis.models import NutritionRecord
from nutrilens.analysis.parser import (
    extract_json_object,
    from_bracket_span,
    from_fenced_block,
    from_whole_text,
    parse_nutrition,
)


def _fenced(payload: dict, tag: str = "json") -> str:
    return f"Here is the analysis:\n```{tag}\n{json.dumps(payload)}\n```\nEnjoy your meal!"


class TestExtractionStrategies(unittest.TestCase):
    def test_fenced_block_tagged_and_untagged(self) -> None:
        for tag in ("json", "JSON", ""):
            attempt = from_fenced_block(_fenced({"foodName": "Rice", "calories": 200}, tag=tag))
            self.assertTrue(attempt.ok, tag)
            self.assertEqual(attempt.strategy, "fenced_block")
            self.assertEqual(attempt.value, {"foodName": "Rice", "calories": 200})

    def test_fenced_block_with_other_language_is_ignored(self) -> None:
        attempt = from_fenced_block('```python\n{"foodName": "Rice", "calories": 200}\n```')
        self.assertFalse(attempt.ok)

    def test_fenced_block_missing(self) -> None:
        attempt = from_fenced_block('{"foodName": "Rice", "calories": 200}')
        self.assertFalse(attempt.ok)
        self.assertEqual(attempt.error, "no fenced block")

    def test_bracket_span_skips_commentary_and_nested_braces(self) -> None:
        text = (
            'Sure! {"foodName": "Bowl {large}", "calories": 640, "extra": {"a": 1}} '
            'and also {"foodName": "Other", "calories": 1}'
        )
        attempt = from_bracket_span(text)
        self.assertTrue(attempt.ok)
        self.assertEqual(attempt.value["foodName"], "Bowl {large}")
        self.assertEqual(attempt.value["extra"], {"a": 1})

    def test_bracket_span_ignores_quotes_in_surrounding_prose(self) -> None:
        text = 'For a 12" pizza slice: {"foodName": "Pizza", "calories": 300} (about 1/8 of a 14" pie)'
        attempt = from_bracket_span(text)
        self.assertTrue(attempt.ok, attempt.error)
        self.assertEqual(attempt.value, {"foodName": "Pizza", "calories": 300})
        self.assertEqual(parse_nutrition(text).food_name, "Pizza")

    def test_whole_text_requires_an_object(self) -> None:
        self.assertTrue(from_whole_text('  {"foodName": "Egg", "calories": 78}  ').ok)
        self.assertFalse(from_whole_text("[1, 2, 3]").ok)
        self.assertFalse(from_whole_text("").ok)

    def test_fenced_block_wins_over_trailing_bare_object(self) -> None:
        text = (
            '```json\n{"foodName": "Fenced", "calories": 100}\n```\n'
            'Alternative: {"foodName": "Bare", "calories": 999}'
        )
        self.assertEqual(extract_json_object(text)["foodName"], "Fenced")

    def test_non_object_fence_falls_back_to_bracket_span(self) -> None:
        text = "```json\n[\"soup\"]\n```\nResult: {\"foodName\": \"Soup\", \"calories\": 120}"
        self.assertEqual(extract_json_object(text)["calories"], 120)


class TestParseNutrition(unittest.TestCase):
    def test_fenced_round_trip_reproduces_record(self) -> None:
        record = NutritionRecord(
            foodName="Greek Yogurt",
            calories=150,
            protein=15.5,
            carbs=8.0,
            fat=4.2,
            healthRating="good",
            vitamins="B12, calcium",
        )
        text = f"```json\n{json.dumps(record.to_response())}\n```"
        self.assertEqual(parse_nutrition(text), record)

    def test_bare_json_with_commentary(self) -> None:
        text = 'I estimate: {"foodName": "Banana", "calories": 105, "healthRating": "Good"} Hope this helps.'
        record = parse_nutrition(text)
        self.assertEqual(record.food_name, "Banana")
        self.assertEqual(record.calories, 105)
        self.assertEqual(record.health_rating, "good")
        self.assertIsNone(record.protein)
        self.assertIsNone(record.vitamins)

    def test_apology_text_is_a_parse_error(self) -> None:
        text = "Sorry, I cannot help with that."
        with self.assertRaises(ParseError) as ctx:
            parse_nutrition(text)
        self.assertEqual(ctx.exception.raw_text, text)
        self.assertEqual(ctx.exception.status_code, 500)

    def test_empty_food_name_is_a_schema_error(self) -> None:
        with self.assertRaises(SchemaError):
            parse_nutrition('{"foodName": "", "calories": 250}')
        with self.assertRaises(SchemaError):
            parse_nutrition('{"foodName": "   ", "calories": 250}')
        with self.assertRaises(SchemaError):
            parse_nutrition('{"calories": 250}')

    def test_non_numeric_calories_is_a_schema_error(self) -> None:
        for calories in ('"two hundred"', '"200"', "true", "null"):
            with self.assertRaises(SchemaError, msg=calories):
                parse_nutrition('{"foodName": "Apple", "calories": %s}' % calories)

    def test_negative_values_are_rejected(self) -> None:
        with self.assertRaises(SchemaError):
            parse_nutrition('{"foodName": "Apple", "calories": -5}')
        with self.assertRaises(SchemaError):
            parse_nutrition('{"foodName": "Apple", "calories": 95, "fat": -1}')

    def test_fractional_calories_round_and_large_values_pass_through(self) -> None:
        self.assertEqual(parse_nutrition('{"foodName": "Toast", "calories": 79.6}').calories, 80)
        self.assertEqual(parse_nutrition('{"foodName": "Feast", "calories": 1000000}').calories, 1000000)

    def test_implausible_calories_log_a_warning(self) -> None:
        with self.assertLogs("nutrilens.analysis.parser", "WARNING") as logs:
            record = parse_nutrition('{"foodName": "Feast", "calories": 1000000}')
        self.assertEqual(record.calories, 1000000)
        self.assertTrue(any("implausible" in line for line in logs.output))

    def test_macros_pass_through_unchanged(self) -> None:
        record = parse_nutrition('{"foodName": "Steak", "calories": 600, "protein": "45g", "carbs": 0}')
        self.assertEqual(record.protein, "45g")
        self.assertEqual(record.carbs, 0)
        self.assertIsNone(record.fat)

    def test_nutrient_lists_are_joined(self) -> None:
        record = parse_nutrition(
            '{"foodName": "Spinach", "calories": 23, "vitamins": ["A", "C", "K"], "minerals": "Iron"}'
        )
        self.assertEqual(record.vitamins, "A, C, K")
        self.assertEqual(record.minerals, "Iron")


if __name__ == "__main__":
    unittest.main()
