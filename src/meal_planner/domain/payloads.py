"""Conversions between meal plan models and camelCase JSON payloads."""

from datetime import datetime

from meal_planner.domain.meal_plans import (
    Meal,
    MealPlan,
    MealPlanDay,
    MealPlanPreferences,
    NutritionSummary,
    ShoppingList,
    ShoppingListItem,
    ShoppingListStore,
)


def meal_plan_to_payload(plan: MealPlan) -> dict[str, object]:
    """Serialize a meal plan to its wire shape."""
    return {
        "preferences": preferences_to_payload(plan.preferences),
        "days": days_to_payload(plan.days),
        "totalWeeklyCost": plan.total_weekly_cost,
        "nutritionSummary": nutrition_to_payload(plan.nutrition_summary),
        "shoppingList": shopping_list_to_payload(plan.shopping_list),
        "notes": plan.notes,
        "createdAt": plan.created_at.isoformat(),
        "updatedAt": plan.updated_at.isoformat(),
    }


def meal_plan_from_payload(payload: dict[str, object]) -> MealPlan:
    """Parse a stored meal plan payload."""
    return MealPlan(
        preferences=preferences_from_payload(_mapping(payload.get("preferences"))),
        days=days_from_payload(_sequence(payload.get("days"))),
        total_weekly_cost=float(payload.get("totalWeeklyCost", 0.0)),
        nutrition_summary=nutrition_from_payload(
            _mapping(payload.get("nutritionSummary"))
        ),
        shopping_list=shopping_list_from_payload(
            _mapping(payload.get("shoppingList"))
        ),
        notes=str(payload.get("notes") or ""),
        created_at=datetime.fromisoformat(str(payload["createdAt"])),
        updated_at=datetime.fromisoformat(str(payload["updatedAt"])),
    )


def preferences_to_payload(preferences: MealPlanPreferences) -> dict[str, object]:
    return {
        "allergies": list(preferences.allergies),
        "calorieGoal": preferences.calorie_goal,
        "culturalPreference": preferences.cultural_preference,
        "dietType": preferences.diet_type,
        "notes": preferences.notes,
    }


def preferences_from_payload(payload: dict[str, object]) -> MealPlanPreferences:
    allergies = payload.get("allergies") or []
    return MealPlanPreferences(
        allergies=tuple(dict.fromkeys(str(item) for item in _sequence(allergies))),
        calorie_goal=int(payload.get("calorieGoal", 0)),
        cultural_preference=str(payload.get("culturalPreference") or ""),
        diet_type=str(payload.get("dietType") or ""),
        notes=str(payload.get("notes") or ""),
    )


def days_to_payload(days: tuple[MealPlanDay, ...]) -> list[dict[str, object]]:
    return [
        {"day": day.day, "meals": [_meal_to_payload(meal) for meal in day.meals]}
        for day in days
    ]


def days_from_payload(payload: list[object]) -> tuple[MealPlanDay, ...]:
    days: list[MealPlanDay] = []
    for raw_day in payload:
        day = _mapping(raw_day)
        days.append(
            MealPlanDay(
                day=str(day.get("day", "")),
                meals=tuple(
                    _meal_from_payload(_mapping(meal))
                    for meal in _sequence(day.get("meals"))
                ),
            )
        )
    return tuple(days)


def nutrition_to_payload(summary: NutritionSummary) -> dict[str, object]:
    return {
        "averageDailyCalories": summary.average_daily_calories,
        "proteinGrams": summary.protein_grams,
        "carbsGrams": summary.carbs_grams,
        "fatGrams": summary.fat_grams,
    }


def nutrition_from_payload(payload: dict[str, object]) -> NutritionSummary:
    return NutritionSummary(
        average_daily_calories=float(payload.get("averageDailyCalories", 0.0)),
        protein_grams=float(payload.get("proteinGrams", 0.0)),
        carbs_grams=float(payload.get("carbsGrams", 0.0)),
        fat_grams=float(payload.get("fatGrams", 0.0)),
    )


def shopping_list_to_payload(shopping_list: ShoppingList) -> dict[str, object]:
    return {
        "stores": [
            {
                "storeName": store.store_name,
                "items": [
                    {
                        "name": item.name,
                        "quantity": item.quantity,
                        "unit": item.unit,
                        "price": item.price,
                        "recipeIds": list(item.recipe_ids),
                    }
                    for item in store.items
                ],
                "subtotal": store.subtotal,
            }
            for store in shopping_list.stores
        ],
        "totalCost": shopping_list.total_cost,
    }


def shopping_list_from_payload(payload: dict[str, object]) -> ShoppingList:
    stores: list[ShoppingListStore] = []
    for raw_store in _sequence(payload.get("stores")):
        store = _mapping(raw_store)
        items = tuple(
            ShoppingListItem(
                name=str(item.get("name", "")),
                quantity=float(item.get("quantity", 0.0)),
                unit=str(item.get("unit", "")),
                price=float(item.get("price", 0.0)),
                recipe_ids=tuple(
                    str(recipe_id) for recipe_id in _sequence(item.get("recipeIds"))
                ),
            )
            for item in (_mapping(raw) for raw in _sequence(store.get("items")))
        )
        stores.append(
            ShoppingListStore(
                store_name=str(store.get("storeName", "")),
                items=items,
                subtotal=float(store.get("subtotal", 0.0)),
            )
        )
    return ShoppingList(
        stores=tuple(stores), total_cost=float(payload.get("totalCost", 0.0))
    )


def _meal_to_payload(meal: Meal) -> dict[str, object]:
    return {
        "mealType": meal.meal_type,
        "name": meal.name,
        "description": meal.description,
        "recipeId": meal.recipe_id,
        "estimatedCalories": meal.estimated_calories,
        "estimatedCost": meal.estimated_cost,
    }


def _meal_from_payload(payload: dict[str, object]) -> Meal:
    recipe_id = payload.get("recipeId")
    return Meal(
        meal_type=str(payload.get("mealType", "")),
        name=str(payload.get("name", "")),
        description=str(payload.get("description") or ""),
        recipe_id=str(recipe_id) if recipe_id else None,
        estimated_calories=float(payload.get("estimatedCalories", 0.0)),
        estimated_cost=float(payload.get("estimatedCost", 0.0)),
    )


def _mapping(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}


def _sequence(value: object) -> list[object]:
    return list(value) if isinstance(value, list | tuple) else []
