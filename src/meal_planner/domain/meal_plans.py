"""Domain models for weekly meal plans."""

from dataclasses import dataclass
from datetime import datetime

DAYS_OF_WEEK: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MEAL_TYPES: tuple[str, ...] = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class MealPlanPreferences:
    """Dietary preferences a plan was generated from."""

    allergies: tuple[str, ...]
    calorie_goal: int
    cultural_preference: str = ""
    diet_type: str = ""
    notes: str = ""


@dataclass(frozen=True)
class Meal:
    """A meal occupying one (day, meal type) slot."""

    meal_type: str
    name: str
    description: str
    recipe_id: str | None
    estimated_calories: float
    estimated_cost: float

    @property
    def is_custom(self) -> bool:
        return self.recipe_id is None


@dataclass(frozen=True)
class MealPlanDay:
    """Meals planned for a single weekday."""

    day: str
    meals: tuple[Meal, ...]

    def find_meal(self, meal_type: str) -> Meal | None:
        """Return the meal in the given slot, if any."""
        for meal in self.meals:
            if meal.meal_type == meal_type:
                return meal
        return None


@dataclass(frozen=True)
class NutritionSummary:
    """Average daily macros reported for a plan."""

    average_daily_calories: float
    protein_grams: float
    carbs_grams: float
    fat_grams: float


@dataclass(frozen=True)
class ShoppingListItem:
    """Aggregated ingredient line for one store."""

    name: str
    quantity: float
    unit: str
    price: float
    recipe_ids: tuple[str, ...]


@dataclass(frozen=True)
class ShoppingListStore:
    """Shopping list items bought at one store."""

    store_name: str
    items: tuple[ShoppingListItem, ...]
    subtotal: float


@dataclass(frozen=True)
class ShoppingList:
    """Store-grouped shopping list derived from a plan."""

    stores: tuple[ShoppingListStore, ...]
    total_cost: float


@dataclass(frozen=True)
class MealPlan:
    """A full seven-day meal plan."""

    preferences: MealPlanPreferences
    days: tuple[MealPlanDay, ...]
    total_weekly_cost: float
    nutrition_summary: NutritionSummary
    shopping_list: ShoppingList
    notes: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MealPlanRecord:
    """Persisted meal plan with its identity and version."""

    plan_id: str
    user_id: str
    plan: MealPlan
    version: int
