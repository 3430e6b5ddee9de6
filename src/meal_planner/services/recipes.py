"""Recipe catalog access and resolution."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.recipes import Recipe, RecipeLookup, RecipeResolution

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Read-only persistence interface for the recipe catalog."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe in the catalog."""


@dataclass
class RecipeResolver:
    """Resolves recipe ids referenced by a meal plan."""

    repository: RecipeRepository

    def resolve(self, recipe_ids: Iterable[str]) -> RecipeResolution:
        """Look up each id independently, tolerating missing records."""
        lookups: list[RecipeLookup] = []
        for recipe_id in sorted(set(recipe_ids)):
            recipe = self.repository.get_recipe(recipe_id)
            if recipe is None:
                _logger.warning("Recipe not found: recipe_id=%s", recipe_id)
            lookups.append(RecipeLookup(recipe_id=recipe_id, recipe=recipe))
        return RecipeResolution(lookups=tuple(lookups))

    def get(self, recipe_id: str) -> Recipe | None:
        """Return a single recipe, if present."""
        return self.repository.get_recipe(recipe_id)

    def catalog(self) -> list[Recipe]:
        """Return the full catalog ordered by id."""
        return sorted(self.repository.list_recipes(), key=lambda item: item.recipe_id)
