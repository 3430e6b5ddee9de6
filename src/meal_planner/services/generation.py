"""Meal plan generation driven by a generative text provider."""

import asyncio
import logging
import textwrap
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import NoReturn, Protocol

from pydantic import ValidationError as PydanticValidationError

from meal_planner.domain.drafts import DraftMealPlan
from meal_planner.domain.meal_plans import (
    DAYS_OF_WEEK,
    MEAL_TYPES,
    Meal,
    MealPlan,
    MealPlanDay,
    MealPlanPreferences,
    MealPlanRecord,
    NutritionSummary,
)
from meal_planner.domain.recipes import Recipe
from meal_planner.errors import InternalError, ServiceUnavailableError
from meal_planner.services.plan_store import MealPlanStore
from meal_planner.services.plan_structure import (
    MAX_MEALS_PER_DAY,
    MIN_MEALS_PER_DAY,
    find_structure_violations,
    order_days,
    parse_preferences,
)
from meal_planner.services.recipes import RecipeResolver
from meal_planner.services.shopping_list import rebuild_shopping_list

_logger = logging.getLogger(__name__)

_NULLABLE_STRING = {"anyOf": [{"type": "string"}, {"type": "null"}]}

MEAL_PLAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "days": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "day": {"type": "string", "enum": list(DAYS_OF_WEEK)},
                    "meals": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "mealType": {
                                    "type": "string",
                                    "enum": list(MEAL_TYPES),
                                },
                                "name": {"type": "string"},
                                "description": {"type": "string"},
                                "recipeId": _NULLABLE_STRING,
                                "estimatedCalories": {"type": "number"},
                                "estimatedCost": {"type": "number"},
                            },
                            "required": [
                                "mealType",
                                "name",
                                "description",
                                "recipeId",
                                "estimatedCalories",
                                "estimatedCost",
                            ],
                            "additionalProperties": False,
                        },
                    },
                },
                "required": ["day", "meals"],
                "additionalProperties": False,
            },
        },
        "totalWeeklyCost": {"type": "number"},
        "nutritionSummary": {
            "type": "object",
            "properties": {
                "averageDailyCalories": {"type": "number"},
                "proteinGrams": {"type": "number"},
                "carbsGrams": {"type": "number"},
                "fatGrams": {"type": "number"},
            },
            "required": [
                "averageDailyCalories",
                "proteinGrams",
                "carbsGrams",
                "fatGrams",
            ],
            "additionalProperties": False,
        },
        "notes": {"type": "string"},
    },
    "required": ["days", "totalWeeklyCost", "nutritionSummary", "notes"],
    "additionalProperties": False,
}

SYSTEM_PROMPT = textwrap.dedent(
    f"""
    You are a budget-conscious meal planner for Australian households.

    - Plan exactly {len(DAYS_OF_WEEK)} days: {", ".join(DAYS_OF_WEEK)}, each once.
    - Give every day {MIN_MEALS_PER_DAY} or {MAX_MEALS_PER_DAY} meals, using each
      meal type ({", ".join(MEAL_TYPES)}) at most once per day.
    - Prefer recipes from the catalog and copy their recipeId exactly.
      Use recipeId null only for simple custom meals.
    - Never include ingredients the user is allergic to.
    - Respond with a single JSON object and nothing else.
    """
).strip()


class MealPlanProvider(Protocol):
    """Interface for the generative text provider."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        system_prompt: str,
        user_prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return the provider's structured meal plan output."""


@dataclass
class MealPlanOrchestrator:
    """Generates, validates, prices and persists a user's meal plan."""

    provider: MealPlanProvider
    resolver: RecipeResolver
    store: MealPlanStore
    model: str
    reasoning_effort: str | None = None
    store_responses: bool = False
    timeout_seconds: float = 30.0

    async def generate(
        self, user_id: str, preferences: dict[str, object]
    ) -> MealPlanRecord:
        """Generate a plan and persist it only once it is fully validated."""
        parsed = parse_preferences(preferences)
        existing = self.store.get(user_id)
        catalog = self.resolver.catalog()

        raw = await self._call_provider(build_user_prompt(parsed, catalog))
        draft = parse_draft(raw)
        days = _days_from_draft(draft)
        shopping_list, resolution = rebuild_shopping_list(days, self.resolver)
        if resolution.missing:
            _logger.info(
                "Generated plan references unknown recipes: user_id=%s ids=%s",
                user_id,
                resolution.missing,
            )

        now = datetime.now(tz=UTC)
        summary = draft.nutrition_summary
        plan = MealPlan(
            preferences=parsed,
            days=days,
            total_weekly_cost=shopping_list.total_cost,
            nutrition_summary=NutritionSummary(
                average_daily_calories=summary.average_daily_calories,
                protein_grams=summary.protein_grams,
                carbs_grams=summary.carbs_grams,
                fat_grams=summary.fat_grams,
            ),
            shopping_list=shopping_list,
            notes=draft.notes,
            created_at=existing.plan.created_at if existing else now,
            updated_at=now,
        )
        if existing is not None:
            return self.store.update(existing, plan)
        return self.store.create(user_id, plan)

    async def _call_provider(self, user_prompt: str) -> dict[str, object]:
        """Race the provider call against the configured timeout."""
        try:
            return await asyncio.wait_for(
                self.provider.generate(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store_responses,
                    system_prompt=SYSTEM_PROMPT,
                    user_prompt=user_prompt,
                    schema=MEAL_PLAN_SCHEMA,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            _logger.warning(
                "Meal plan generation timed out after %ss", self.timeout_seconds
            )
            raise ServiceUnavailableError(
                "Meal plan generation timed out, please retry"
            ) from exc


def build_user_prompt(preferences: MealPlanPreferences, catalog: list[Recipe]) -> str:
    """Embed the preferences and a catalog summary in the user instruction."""
    allergies = ", ".join(preferences.allergies) or "none"
    catalog_lines = [
        f"- {recipe.recipe_id} | {recipe.name} | "
        f"tags: {', '.join(recipe.dietary_tags) or 'none'} | "
        f"cost: ${recipe.total_cost:.2f} | serves {recipe.servings}"
        for recipe in catalog
    ]
    return "\n".join(
        [
            "USER PREFERENCES:",
            f"Allergies: {allergies}",
            f"Daily calorie goal: {preferences.calorie_goal}",
            f"Cultural preference: {preferences.cultural_preference or 'any'}",
            f"Diet type: {preferences.diet_type or 'any'}",
            f"Notes: {preferences.notes or 'none'}",
            "",
            "AVAILABLE RECIPES (id | name | tags | cost | servings):",
            *(catalog_lines or ["(catalog is empty, use custom meals)"]),
        ]
    )


def parse_draft(raw: object) -> DraftMealPlan:
    """Validate provider output, listing every violated invariant on failure."""
    if not isinstance(raw, dict):
        _raise_structural(["response is not a JSON object"])
    try:
        draft = DraftMealPlan.model_validate(raw)
    except PydanticValidationError as exc:
        _raise_structural(
            [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            ]
        )
    violations = find_structure_violations(draft.days)
    if draft.nutrition_summary is None:
        violations.append("nutritionSummary is missing")
    if violations:
        _raise_structural(violations)
    return draft


def _raise_structural(violations: list[str]) -> NoReturn:
    _logger.warning("Generated meal plan rejected: %s", violations)
    raise InternalError(
        "Generated meal plan failed structural validation: " + "; ".join(violations),
        violations=violations,
        retryable=True,
    )


def _days_from_draft(draft: DraftMealPlan) -> tuple[MealPlanDay, ...]:
    return order_days(
        MealPlanDay(
            day=draft_day.day,
            meals=tuple(
                Meal(
                    meal_type=meal.meal_type,
                    name=meal.name,
                    description=meal.description,
                    recipe_id=meal.recipe_id,
                    estimated_calories=meal.estimated_calories,
                    estimated_cost=meal.estimated_cost,
                )
                for meal in draft_day.meals
            ),
        )
        for draft_day in draft.days
    )
