"""Supabase implementation of the recipe catalog."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.recipes import Ingredient, Recipe
from meal_planner.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed read-only recipe repository."""

    client: Client
    table_name: str = "recipes"

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("recipe_id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe in the catalog."""
        response = (
            self.client.table(self.table_name).select("*").order("recipe_id").execute()
        )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row into a domain model."""
    ingredients = tuple(
        Ingredient(
            name=str(item.get("name", "")),
            quantity=float(item.get("quantity", 0.0)),
            unit=str(item.get("unit", "")),
            price=float(item.get("price", 0.0)),
            source=str(item.get("source", "")),
        )
        for item in row.get("ingredients") or []
        if isinstance(item, dict)
    )
    return Recipe(
        recipe_id=str(row["recipe_id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        ingredients=ingredients,
        total_cost=float(row.get("total_cost", 0.0)),
        dietary_tags=tuple(str(tag) for tag in row.get("dietary_tags") or []),
        servings=int(row.get("servings") or 1),
        prep_time=int(row.get("prep_time") or 0),
    )
