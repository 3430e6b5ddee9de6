"""Models for meal plans returned by the generative provider."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _DraftModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DraftMeal(_DraftModel):
    """Single meal proposed by the provider."""

    meal_type: str = Field(alias="mealType")
    name: str
    description: str = ""
    recipe_id: str | None = Field(default=None, alias="recipeId")
    estimated_calories: float = Field(default=0.0, ge=0.0, alias="estimatedCalories")
    estimated_cost: float = Field(default=0.0, ge=0.0, alias="estimatedCost")

    @field_validator("recipe_id", mode="before")
    @classmethod
    def _blank_recipe_is_custom(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DraftDay(_DraftModel):
    """One day of proposed meals."""

    day: str
    meals: list[DraftMeal]


class DraftNutritionSummary(_DraftModel):
    """Nutrition summary proposed by the provider."""

    average_daily_calories: float = Field(alias="averageDailyCalories")
    protein_grams: float = Field(alias="proteinGrams")
    carbs_grams: float = Field(alias="carbsGrams")
    fat_grams: float = Field(alias="fatGrams")


class DraftMealPlan(_DraftModel):
    """Structured output for meal plan generation."""

    days: list[DraftDay]
    nutrition_summary: DraftNutritionSummary | None = Field(
        default=None, alias="nutritionSummary"
    )
    notes: str = ""
    total_weekly_cost: float | None = Field(default=None, alias="totalWeeklyCost")
