"""Shopping list synthesis from meal plan days and resolved recipes."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from meal_planner.domain.meal_plans import (
    MealPlanDay,
    ShoppingList,
    ShoppingListItem,
    ShoppingListStore,
)
from meal_planner.domain.recipes import Recipe, RecipeResolution
from meal_planner.services.recipes import RecipeResolver

_STORE_NAMES = {
    "coles": "Coles",
    "woolworths": "Woolworths",
    "aldi": "Aldi",
}
_OTHER_STORE = "Other"


@dataclass
class _ItemTotals:
    name: str
    unit: str
    quantity: float = 0.0
    price: float = 0.0
    recipe_ids: set[str] = field(default_factory=set)


def synthesize_shopping_list(
    days: Iterable[MealPlanDay], recipes: Iterable[Recipe]
) -> ShoppingList:
    """Aggregate ingredients for every meal slot into a store-grouped list.

    Each meal occurrence contributes its recipe's ingredients once, so a recipe
    used in two slots is bought twice. Meals without a resolvable recipe add
    their flat estimated cost to the total and never appear as line items.
    """
    recipe_map = {recipe.recipe_id: recipe for recipe in recipes}
    by_store: dict[str, dict[tuple[str, str], _ItemTotals]] = {}
    flat_cost = 0.0

    for day in days:
        for meal in day.meals:
            recipe = recipe_map.get(meal.recipe_id) if meal.recipe_id else None
            if recipe is None:
                flat_cost += meal.estimated_cost
                continue
            for ingredient in recipe.ingredients:
                store_items = by_store.setdefault(
                    normalize_store_name(ingredient.source), {}
                )
                key = (
                    normalize_ingredient_name(ingredient.name),
                    normalize_unit(ingredient.unit),
                )
                totals = store_items.get(key)
                if totals is None:
                    totals = _ItemTotals(
                        name=" ".join(ingredient.name.split()), unit=key[1]
                    )
                    store_items[key] = totals
                totals.quantity += ingredient.quantity
                totals.price += ingredient.price
                totals.recipe_ids.add(recipe.recipe_id)

    stores: list[ShoppingListStore] = []
    for store_name in sorted(by_store):
        items = tuple(
            ShoppingListItem(
                name=totals.name,
                quantity=round(totals.quantity, 3),
                unit=totals.unit,
                price=_money(totals.price),
                recipe_ids=tuple(sorted(totals.recipe_ids)),
            )
            for _, totals in sorted(
                by_store[store_name].items(), key=lambda entry: entry[0]
            )
        )
        subtotal = _money(sum(item.price for item in items))
        stores.append(
            ShoppingListStore(store_name=store_name, items=items, subtotal=subtotal)
        )

    total_cost = _money(sum(store.subtotal for store in stores) + flat_cost)
    return ShoppingList(stores=tuple(stores), total_cost=total_cost)


def rebuild_shopping_list(
    days: tuple[MealPlanDay, ...], resolver: RecipeResolver
) -> tuple[ShoppingList, RecipeResolution]:
    """Resolve every recipe referenced by the days and synthesize from scratch."""
    recipe_ids = {
        meal.recipe_id for day in days for meal in day.meals if meal.recipe_id
    }
    resolution = resolver.resolve(recipe_ids)
    return synthesize_shopping_list(days, resolution.recipes), resolution


def normalize_store_name(source: str) -> str:
    """Map an ingredient source to a display store name."""
    return _STORE_NAMES.get(source.strip().lower(), _OTHER_STORE)


def normalize_ingredient_name(name: str) -> str:
    """Canonical form used to deduplicate ingredient names."""
    return " ".join(name.split()).casefold()


def normalize_unit(unit: str) -> str:
    return unit.strip().lower()


def _money(value: float) -> float:
    return round(value, 2)
