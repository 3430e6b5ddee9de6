"""Slot-level and bulk edits of a stored meal plan."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from meal_planner.domain.meal_plans import (
    Meal,
    MealPlanDay,
    MealPlanPreferences,
    MealPlanRecord,
    NutritionSummary,
)
from meal_planner.domain.recipes import Recipe
from meal_planner.errors import NotFoundError, ValidationError
from meal_planner.services.plan_store import MealPlanStore
from meal_planner.services.plan_structure import (
    EDITED_MIN_MEALS_PER_DAY,
    find_structure_violations,
    order_days,
    validate_day,
    validate_meal_type,
)
from meal_planner.services.recipes import RecipeResolver
from meal_planner.services.shopping_list import rebuild_shopping_list

_logger = logging.getLogger(__name__)


@dataclass
class MealPlanMutator:
    """Applies edits and keeps the derived shopping list consistent."""

    store: MealPlanStore
    resolver: RecipeResolver

    def get_plan(self, user_id: str) -> MealPlanRecord | None:
        """Return the user's current plan, if one was generated."""
        return self.store.get(user_id)

    def add_meal(
        self, user_id: str, day: str, meal_type: str, recipe_id: str
    ) -> MealPlanRecord:
        """Put a catalog recipe into a slot, replacing any meal already there."""
        validate_day(day)
        validate_meal_type(meal_type)
        record = self.store.require(user_id)
        recipe = self.resolver.get(recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")

        meal = meal_from_recipe(recipe, meal_type)
        days = tuple(
            _with_meal(plan_day, meal) if plan_day.day == day else plan_day
            for plan_day in _require_day(record, day)
        )
        _logger.info(
            "Adding meal: user_id=%s day=%s meal_type=%s recipe_id=%s",
            user_id,
            day,
            meal_type,
            recipe_id,
        )
        return self._commit(record, days)

    def remove_meal(self, user_id: str, day: str, meal_type: str) -> MealPlanRecord:
        """Empty a slot; the slot must currently hold a meal."""
        validate_day(day)
        validate_meal_type(meal_type)
        record = self.store.require(user_id)
        days = _require_day(record, day)
        target = next(plan_day for plan_day in days if plan_day.day == day)
        if target.find_meal(meal_type) is None:
            raise NotFoundError(f"No {meal_type} meal planned for {day}")

        updated_days = tuple(
            replace(
                plan_day,
                meals=tuple(
                    meal for meal in plan_day.meals if meal.meal_type != meal_type
                ),
            )
            if plan_day.day == day
            else plan_day
            for plan_day in days
        )
        _logger.info(
            "Removing meal: user_id=%s day=%s meal_type=%s", user_id, day, meal_type
        )
        return self._commit(record, updated_days)

    def update_plan(
        self,
        user_id: str,
        days: tuple[MealPlanDay, ...],
        *,
        preferences: MealPlanPreferences | None = None,
        nutrition_summary: NutritionSummary | None = None,
        notes: str | None = None,
    ) -> MealPlanRecord:
        """Replace the whole day structure supplied by the client."""
        record = self.store.require(user_id)
        changes: dict[str, object] = {}
        if preferences is not None:
            changes["preferences"] = preferences
        if nutrition_summary is not None:
            changes["nutrition_summary"] = nutrition_summary
        if notes is not None:
            changes["notes"] = notes
        return self._commit(record, days, **changes)

    def _commit(
        self,
        record: MealPlanRecord,
        days: tuple[MealPlanDay, ...],
        **changes: object,
    ) -> MealPlanRecord:
        """Re-validate, re-synthesize the full plan and persist it."""
        violations = find_structure_violations(
            days, min_meals=EDITED_MIN_MEALS_PER_DAY
        )
        if violations:
            raise ValidationError(
                "Meal plan structure is invalid: " + "; ".join(violations),
                details={"field": "days", "violations": violations},
            )
        days = order_days(days)
        shopping_list, _ = rebuild_shopping_list(days, self.resolver)
        plan = replace(
            record.plan,
            days=days,
            shopping_list=shopping_list,
            total_weekly_cost=shopping_list.total_cost,
            updated_at=datetime.now(tz=UTC),
            **changes,
        )
        return self.store.update(record, plan)


def meal_from_recipe(recipe: Recipe, meal_type: str) -> Meal:
    """Build the meal placed in a slot for a catalog recipe."""
    return Meal(
        meal_type=meal_type,
        name=recipe.name,
        description=recipe.description or "",
        recipe_id=recipe.recipe_id,
        estimated_calories=0.0,
        estimated_cost=recipe.total_cost,
    )


def _require_day(record: MealPlanRecord, day: str) -> tuple[MealPlanDay, ...]:
    if not any(plan_day.day == day for plan_day in record.plan.days):
        raise NotFoundError(f"Day {day} not found in meal plan")
    return record.plan.days


def _with_meal(plan_day: MealPlanDay, meal: Meal) -> MealPlanDay:
    if plan_day.find_meal(meal.meal_type) is not None:
        meals = tuple(
            meal if existing.meal_type == meal.meal_type else existing
            for existing in plan_day.meals
        )
    else:
        meals = (*plan_day.meals, meal)
    return replace(plan_day, meals=meals)
