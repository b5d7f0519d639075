# -*- coding: utf-8 -*-
"""
Recommended daily calories from weight goals.

Mifflin-St Jeor BMR with a fixed reference age and a sex-neutral constant
(the profile does not collect either), moderate activity, then a goal
adjustment capped at -500 / +300 kcal.
"""

from __future__ import annotations

from typing import Optional

_REFERENCE_AGE = 30
# Midpoint of the male (+5) and female (-161) constants.
_NEUTRAL_SEX_CONSTANT = -78.0
_MODERATE_ACTIVITY = 1.55
_MIN_RECOMMENDED = 1200
DEFAULT_HEIGHT_CM = 170.0


def _mifflin_st_jeor(weight_kg: float, height_cm: float, age: int) -> float:
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + _NEUTRAL_SEX_CONSTANT


def _effective_goal(current_weight: float, target_weight: float, weight_goal: Optional[str]) -> str:
    # The weights win when they disagree with the declared goal.
    if target_weight < current_weight:
        return "lose"
    if target_weight > current_weight:
        return "gain"
    return weight_goal or "maintain"


def _goal_adjustment(tdee: float, goal: str) -> float:
    if goal == "lose":
        return max(-500.0, -0.15 * tdee)
    if goal == "gain":
        return min(300.0, 0.10 * tdee)
    return 0.0


def calculate_recommended_calories(
    current_weight: float,
    target_weight: float,
    weight_goal: Optional[str] = None,
    height: Optional[float] = None,
) -> int:
    bmr = _mifflin_st_jeor(current_weight, height or DEFAULT_HEIGHT_CM, _REFERENCE_AGE)
    tdee = bmr * _MODERATE_ACTIVITY
    goal = _effective_goal(current_weight, target_weight, weight_goal)
    return max(_MIN_RECOMMENDED, int(round(tdee + _goal_adjustment(tdee, goal))))
