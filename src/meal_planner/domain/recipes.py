"""Domain models for catalog recipes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ingredient:
    """Single priced ingredient line of a recipe."""

    name: str
    quantity: float
    unit: str
    price: float
    source: str


@dataclass(frozen=True)
class Recipe:
    """Read-only recipe record from the catalog."""

    recipe_id: str
    name: str
    description: str
    ingredients: tuple[Ingredient, ...]
    total_cost: float
    dietary_tags: tuple[str, ...] = ()
    servings: int = 1
    prep_time: int = 0


@dataclass(frozen=True)
class RecipeLookup:
    """Outcome of resolving one recipe id."""

    recipe_id: str
    recipe: Recipe | None

    @property
    def found(self) -> bool:
        return self.recipe is not None


@dataclass(frozen=True)
class RecipeResolution:
    """Per-id results of a batch recipe resolution."""

    lookups: tuple[RecipeLookup, ...]

    @property
    def recipes(self) -> list[Recipe]:
        """Return the recipes that were found."""
        return [lookup.recipe for lookup in self.lookups if lookup.recipe is not None]

    @property
    def missing(self) -> list[str]:
        """Return the ids that could not be resolved."""
        return [lookup.recipe_id for lookup in self.lookups if lookup.recipe is None]
