"""Meal plan API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, status

from meal_planner.api.models import (
    AddMealRequest,
    GenerateMealPlanRequest,
    UpdateMealPlanRequest,
)
from meal_planner.domain.payloads import (
    days_from_payload,
    meal_plan_to_payload,
    nutrition_from_payload,
)
from meal_planner.services.plan_structure import parse_preferences

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(prefix="/api/meal-plan", tags=["meal-plan"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/generate", status_code=status.HTTP_201_CREATED)
async def generate_meal_plan(
    body: GenerateMealPlanRequest, request: Request
) -> dict[str, object]:
    """Generate a seven-day plan from dietary preferences."""
    record = await _container(request).orchestrator.generate(
        body.user_id, body.preferences.model_dump(by_alias=True)
    )
    return {
        "message": "Meal plan generated successfully",
        "planId": record.plan_id,
        "mealPlan": meal_plan_to_payload(record.plan),
    }


@router.get("/{user_id}")
async def get_meal_plan(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's meal plan, or null when none exists."""
    record = _container(request).mutator.get_plan(user_id)
    return {"mealPlan": meal_plan_to_payload(record.plan) if record else None}


@router.put("/{user_id}")
async def update_meal_plan(
    user_id: str, body: UpdateMealPlanRequest, request: Request
) -> dict[str, object]:
    """Replace the plan's days and optional metadata."""
    payload = body.meal_plan.model_dump(by_alias=True)
    record = _container(request).mutator.update_plan(
        user_id,
        days_from_payload(payload["days"]),
        preferences=(
            parse_preferences(payload["preferences"])
            if payload["preferences"] is not None
            else None
        ),
        nutrition_summary=(
            nutrition_from_payload(payload["nutritionSummary"])
            if payload["nutritionSummary"] is not None
            else None
        ),
        notes=body.meal_plan.notes,
    )
    return {
        "message": "Meal plan updated successfully",
        "mealPlan": meal_plan_to_payload(record.plan),
    }


@router.post("/{user_id}/meal")
async def add_meal(
    user_id: str, body: AddMealRequest, request: Request
) -> dict[str, object]:
    """Place a recipe into a day and meal type slot."""
    record = _container(request).mutator.add_meal(
        user_id, body.day, body.meal_type, body.recipe_id
    )
    return {
        "message": "Meal added successfully",
        "mealPlan": meal_plan_to_payload(record.plan),
    }


@router.delete("/{user_id}/meal")
async def remove_meal(
    user_id: str,
    request: Request,
    day: str = Query(),
    meal_type: str = Query(alias="mealType"),
) -> dict[str, object]:
    """Remove the meal occupying a day and meal type slot."""
    record = _container(request).mutator.remove_meal(user_id, day, meal_type)
    return {
        "message": "Meal removed successfully",
        "mealPlan": meal_plan_to_payload(record.plan),
    }
