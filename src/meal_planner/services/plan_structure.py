"""Structural checks for meal plans and their inputs."""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import replace

from meal_planner.domain.drafts import DraftDay
from meal_planner.domain.meal_plans import (
    DAYS_OF_WEEK,
    MEAL_TYPES,
    MealPlanDay,
    MealPlanPreferences,
)
from meal_planner.errors import ValidationError

MIN_MEALS_PER_DAY = 3
MAX_MEALS_PER_DAY = 4
# Edited plans may leave a day without meals.
EDITED_MIN_MEALS_PER_DAY = 0


def find_structure_violations(
    days: Sequence[MealPlanDay | DraftDay],
    *,
    min_meals: int = MIN_MEALS_PER_DAY,
    max_meals: int = MAX_MEALS_PER_DAY,
) -> list[str]:
    """Return every structural invariant the days break, in a stable order."""
    violations: list[str] = []
    if len(days) != len(DAYS_OF_WEEK):
        violations.append(f"expected {len(DAYS_OF_WEEK)} days, got {len(days)}")

    day_counts = Counter(day.day for day in days)
    for name in sorted(day_counts):
        if name not in DAYS_OF_WEEK:
            violations.append(
                f"day {name!r} is not one of {', '.join(DAYS_OF_WEEK)}"
            )
        elif day_counts[name] > 1:
            violations.append(f"day {name!r} appears {day_counts[name]} times")
    missing = [name for name in DAYS_OF_WEEK if name not in day_counts]
    if missing:
        violations.append(f"missing days: {', '.join(missing)}")

    for day in days:
        meal_count = len(day.meals)
        if not min_meals <= meal_count <= max_meals:
            expected = (
                f"{min_meals}-{max_meals}" if min_meals else f"at most {max_meals}"
            )
            violations.append(
                f"{day.day} has {meal_count} meals, expected {expected}"
            )
        type_counts = Counter(meal.meal_type for meal in day.meals)
        for meal_type in sorted(type_counts):
            if meal_type not in MEAL_TYPES:
                violations.append(
                    f"{day.day} meal type {meal_type!r} is not one of "
                    f"{', '.join(MEAL_TYPES)}"
                )
            elif type_counts[meal_type] > 1:
                violations.append(
                    f"{day.day} has {type_counts[meal_type]} {meal_type} meals"
                )
    return violations


def order_days(days: Iterable[MealPlanDay]) -> tuple[MealPlanDay, ...]:
    """Sort days Monday first and each day's meals by meal type.

    Expects structurally valid days; unknown names raise ValueError.
    """
    ordered = (
        replace(
            day,
            meals=tuple(
                sorted(day.meals, key=lambda meal: MEAL_TYPES.index(meal.meal_type))
            ),
        )
        for day in days
    )
    return tuple(sorted(ordered, key=lambda day: DAYS_OF_WEEK.index(day.day)))


def validate_day(day: str) -> str:
    """Ensure a day name is canonical."""
    if day not in DAYS_OF_WEEK:
        raise ValidationError(
            f"Invalid day {day!r}; must be one of {', '.join(DAYS_OF_WEEK)}",
            details={"field": "day", "allowed": list(DAYS_OF_WEEK)},
        )
    return day


def validate_meal_type(meal_type: str) -> str:
    """Ensure a meal type is canonical."""
    if meal_type not in MEAL_TYPES:
        raise ValidationError(
            f"Invalid mealType {meal_type!r}; must be one of {', '.join(MEAL_TYPES)}",
            details={"field": "mealType", "allowed": list(MEAL_TYPES)},
        )
    return meal_type


def parse_preferences(payload: dict[str, object]) -> MealPlanPreferences:
    """Validate raw preferences and build the domain model."""
    allergies = payload.get("allergies", [])
    if allergies is None:
        allergies = []
    if not isinstance(allergies, list | tuple | set | frozenset) or not all(
        isinstance(item, str) for item in allergies
    ):
        raise ValidationError(
            "allergies must be a list of strings", details={"field": "allergies"}
        )

    calorie_goal = payload.get("calorieGoal")
    if isinstance(calorie_goal, bool) or not isinstance(calorie_goal, int | float):
        raise ValidationError(
            "calorieGoal must be a number", details={"field": "calorieGoal"}
        )
    if isinstance(calorie_goal, float) and not calorie_goal.is_integer():
        raise ValidationError(
            "calorieGoal must be a whole number", details={"field": "calorieGoal"}
        )
    if calorie_goal <= 0:
        raise ValidationError(
            "calorieGoal must be positive", details={"field": "calorieGoal"}
        )

    return MealPlanPreferences(
        allergies=tuple(dict.fromkeys(item.strip() for item in allergies)),
        calorie_goal=int(calorie_goal),
        cultural_preference=_optional_text(payload, "culturalPreference"),
        diet_type=_optional_text(payload, "dietType"),
        notes=_optional_text(payload, "notes"),
    )


def _optional_text(payload: dict[str, object], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", details={"field": key})
    return value.strip()
