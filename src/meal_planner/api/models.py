"""Request models for the meal plan API."""

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Base model accepting camelCase aliases or field names."""

    model_config = ConfigDict(populate_by_name=True)


class PreferencesPayload(ApiModel):
    allergies: list[str] = Field(default_factory=list)
    calorie_goal: int = Field(alias="calorieGoal", gt=0)
    cultural_preference: str | None = Field(default=None, alias="culturalPreference")
    diet_type: str | None = Field(default=None, alias="dietType")
    notes: str | None = None


class MealPayload(ApiModel):
    meal_type: str = Field(alias="mealType")
    name: str
    description: str = ""
    recipe_id: str | None = Field(default=None, alias="recipeId")
    estimated_calories: float = Field(default=0.0, ge=0.0, alias="estimatedCalories")
    estimated_cost: float = Field(default=0.0, ge=0.0, alias="estimatedCost")


class DayPayload(ApiModel):
    day: str
    meals: list[MealPayload] = Field(default_factory=list)


class NutritionSummaryPayload(ApiModel):
    average_daily_calories: float = Field(alias="averageDailyCalories")
    protein_grams: float = Field(alias="proteinGrams")
    carbs_grams: float = Field(alias="carbsGrams")
    fat_grams: float = Field(alias="fatGrams")


class MealPlanUpdatePayload(ApiModel):
    days: list[DayPayload]
    preferences: PreferencesPayload | None = None
    nutrition_summary: NutritionSummaryPayload | None = Field(
        default=None, alias="nutritionSummary"
    )
    notes: str | None = None


class GenerateMealPlanRequest(ApiModel):
    """Body of a meal plan generation request."""

    user_id: str = Field(alias="userId", min_length=1)
    preferences: PreferencesPayload


class UpdateMealPlanRequest(ApiModel):
    """Body of a bulk meal plan update."""

    meal_plan: MealPlanUpdatePayload = Field(alias="mealPlan")


class AddMealRequest(ApiModel):
    """Body of a request placing a recipe into a slot."""

    day: str
    meal_type: str = Field(alias="mealType")
    recipe_id: str = Field(alias="recipeId", min_length=1)
