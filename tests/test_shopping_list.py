"""Tests for shopping list synthesis."""

from meal_planner.domain.meal_plans import MealPlanDay
from meal_planner.domain.payloads import days_from_payload
from meal_planner.services.recipes import RecipeResolver
from meal_planner.services.shopping_list import (
    normalize_ingredient_name,
    normalize_store_name,
    rebuild_shopping_list,
    synthesize_shopping_list,
)
from tests.fakes import (
    custom_meal,
    generated_payload,
    make_recipe,
    recipe_meal,
    sample_recipes,
)


def _store(shopping_list, name):  # type: ignore[no-untyped-def]
    return next(store for store in shopping_list.stores if store.store_name == name)


def test_generated_week_totals_by_store() -> None:
    days = days_from_payload(generated_payload()["days"])

    shopping_list = synthesize_shopping_list(days, sample_recipes())

    assert [store.store_name for store in shopping_list.stores] == [
        "Aldi",
        "Coles",
        "Other",
        "Woolworths",
    ]
    assert [store.subtotal for store in shopping_list.stores] == [
        21.0,
        51.1,
        8.4,
        101.5,
    ]
    # 182.00 of recipe ingredients plus three flat-priced custom snacks
    assert shopping_list.total_cost == 185.0


def test_recipe_used_in_several_slots_is_bought_each_time() -> None:
    days = days_from_payload(generated_payload()["days"])

    shopping_list = synthesize_shopping_list(days, sample_recipes())

    coles = _store(shopping_list, "Coles")
    assert [item.name for item in coles.items] == ["Milk", "Rolled Oats", "Tomatoes"]
    oats = coles.items[1]
    assert oats.quantity == 3500
    assert oats.unit == "g"
    assert oats.price == 17.5
    assert oats.recipe_ids == ("r-oats",)


def test_ingredients_merge_across_recipes_after_normalization() -> None:
    days = (
        MealPlanDay(
            day="Monday",
            meals=(
                recipe_meal("breakfast", "r-oats"),
                recipe_meal("snack", "r-yoghurt"),
            ),
        ),
    )

    shopping_list = synthesize_shopping_list(days, sample_recipes())

    coles = _store(shopping_list, "Coles")
    milk = next(item for item in coles.items if item.name == "Milk")
    assert milk.quantity == 1.5
    assert milk.unit == "l"
    assert milk.price == 2.7
    assert milk.recipe_ids == ("r-oats", "r-yoghurt")
    assert [item.name for item in coles.items].count("Milk") == 1


def test_same_ingredient_in_different_units_stays_separate() -> None:
    recipes = [
        make_recipe("r-tea", "Chai", [("Milk", 250, "ml", 0.5, "coles")]),
        make_recipe("r-oats", "Oats", [("Milk", 1, "L", 1.8, "coles")]),
    ]
    days = (
        MealPlanDay(
            day="Monday",
            meals=(recipe_meal("breakfast", "r-oats"), recipe_meal("snack", "r-tea")),
        ),
    )

    shopping_list = synthesize_shopping_list(days, recipes)

    coles = _store(shopping_list, "Coles")
    assert [(item.name, item.unit) for item in coles.items] == [
        ("Milk", "l"),
        ("Milk", "ml"),
    ]


def test_unresolved_and_custom_meals_add_flat_cost_only() -> None:
    days = (
        MealPlanDay(
            day="Monday",
            meals=(
                recipe_meal("lunch", "r-missing", cost=5.25),
                custom_meal("dinner", cost=4.0),
            ),
        ),
    )

    shopping_list = synthesize_shopping_list(days, sample_recipes())

    assert shopping_list.stores == ()
    assert shopping_list.total_cost == 9.25


def test_empty_plan_has_empty_list() -> None:
    shopping_list = synthesize_shopping_list((), sample_recipes())

    assert shopping_list.stores == ()
    assert shopping_list.total_cost == 0.0


def test_total_is_sum_of_subtotals_plus_flat_costs() -> None:
    days = days_from_payload(generated_payload()["days"])

    shopping_list = synthesize_shopping_list(days, sample_recipes())

    for store in shopping_list.stores:
        assert store.subtotal == round(sum(item.price for item in store.items), 2)
    subtotal_sum = sum(store.subtotal for store in shopping_list.stores)
    assert shopping_list.total_cost == round(subtotal_sum + 3.0, 2)


def test_rebuild_reports_missing_recipes(recipe_repository) -> None:
    days = (
        MealPlanDay(
            day="Monday",
            meals=(
                recipe_meal("breakfast", "r-oats"),
                recipe_meal("lunch", "r-ghost", cost=6.0),
            ),
        ),
    )

    shopping_list, resolution = rebuild_shopping_list(
        days, RecipeResolver(recipe_repository)
    )

    assert resolution.missing == ["r-ghost"]
    assert shopping_list.total_cost == 10.3


def test_normalize_store_name() -> None:
    assert normalize_store_name(" WOOLWORTHS ") == "Woolworths"
    assert normalize_store_name("coles") == "Coles"
    assert normalize_store_name("Aldi") == "Aldi"
    assert normalize_store_name("mock") == "Other"
    assert normalize_store_name("") == "Other"


def test_normalize_ingredient_name() -> None:
    assert normalize_ingredient_name("  Greek   Yoghurt ") == "greek yoghurt"


def test_synthesis_is_idempotent() -> None:
    days = days_from_payload(generated_payload()["days"])

    first = synthesize_shopping_list(days, sample_recipes())
    second = synthesize_shopping_list(days, sample_recipes())
    reordered = synthesize_shopping_list(days, list(reversed(sample_recipes())))

    assert first == second
    assert first == reordered
