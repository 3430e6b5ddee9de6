"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

from meal_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_planner.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from meal_planner.adapters.supabase_user_repository import SupabaseUserRepository
from meal_planner.domain.payloads import meal_plan_to_payload
from meal_planner.services.recipes import RecipeResolver
from tests.fakes import InMemoryRecipeRepository, build_plan, week


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = column
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _recipe_row() -> dict[str, object]:
    return {
        "recipe_id": "r-oats",
        "name": "Overnight Oats",
        "description": None,
        "ingredients": [
            {
                "name": "Rolled Oats",
                "quantity": 500,
                "unit": "g",
                "price": 2.5,
                "source": "coles",
            },
            "not-an-ingredient",
        ],
        "total_cost": 4.3,
        "dietary_tags": ["vegetarian"],
        "servings": 2,
        "prep_time": None,
    }


def _sample_plan():  # type: ignore[no-untyped-def]
    return build_plan(week(), RecipeResolver(InMemoryRecipeRepository.seeded()))


def test_supabase_recipe_repository() -> None:
    client = FakeSupabaseClient()
    recipes_table = client.table("recipes")
    recipes_table.queue("select", [_recipe_row()])
    recipes_table.queue("select", [])
    recipes_table.queue("select", [_recipe_row()])

    repository = SupabaseRecipeRepository(client)
    recipe = repository.get_recipe("r-oats")
    missing = repository.get_recipe("r-ghost")
    catalog = repository.list_recipes()

    assert recipe is not None
    assert recipe.description == ""
    assert recipe.ingredients[0].quantity == 500.0
    assert len(recipe.ingredients) == 1
    assert recipe.dietary_tags == ("vegetarian",)
    assert recipe.prep_time == 0
    assert missing is None
    assert [item.recipe_id for item in catalog] == ["r-oats"]
    assert recipes_table.last_order == "recipe_id"
    assert ("recipe_id", "r-ghost") in recipes_table.last_filters


def test_supabase_user_repository() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    users_table.queue("select", [{"user_id": "user-1", "meal_plan_id": None}])

    repository = SupabaseUserRepository(client)
    user = repository.get_user("user-1")
    repository.set_meal_plan_id("user-1", "plan_abc")

    assert user is not None
    assert user.meal_plan_id is None
    assert users_table.last_payload["meal_plan_id"] == "plan_abc"
    assert ("user_id", "user-1") in users_table.last_filters
    assert repository.get_user("ghost") is None


def test_supabase_meal_plan_repository_create_and_get() -> None:
    client = FakeSupabaseClient()
    plans_table = client.table("plans")
    plan = _sample_plan()
    row = {
        "plan_id": "plan_1",
        "user_id": "user-1",
        "plan_type": "meal",
        "version": 1,
        "plan": meal_plan_to_payload(plan),
    }
    plans_table.queue("insert", [row])
    plans_table.queue("select", [row])

    repository = SupabaseMealPlanRepository(client)
    created = repository.create_plan("plan_1", "user-1", plan)
    fetched = repository.get_plan("plan_1")

    assert plans_table.last_payload is not None
    assert created.version == 1
    assert created.plan == plan
    assert fetched == created
    assert repository.get_plan("plan_missing") is None


def test_supabase_meal_plan_repository_insert_payload() -> None:
    client = FakeSupabaseClient()
    plans_table = client.table("plans")
    plan = _sample_plan()
    plans_table.queue(
        "insert",
        [{"plan_id": "plan_1", "user_id": "user-1", "plan": meal_plan_to_payload(plan)}],
    )

    SupabaseMealPlanRepository(client).create_plan("plan_1", "user-1", plan)

    payload = plans_table.last_payload
    assert payload["plan_type"] == "meal"
    assert payload["version"] == 1
    assert payload["plan"]["shoppingList"]["totalCost"] == 142.1


def test_supabase_meal_plan_repository_update_checks_version() -> None:
    client = FakeSupabaseClient()
    plans_table = client.table("plans")
    plan = _sample_plan()
    plans_table.queue(
        "update",
        [
            {
                "plan_id": "plan_1",
                "user_id": "user-1",
                "version": 4,
                "plan": meal_plan_to_payload(plan),
            }
        ],
    )

    repository = SupabaseMealPlanRepository(client)
    updated = repository.update_plan("plan_1", plan, expected_version=3)
    stale = repository.update_plan("plan_1", plan, expected_version=3)

    assert updated is not None
    assert updated.version == 4
    assert plans_table.last_payload["version"] == 4
    assert ("version", 3) in plans_table.last_filters
    assert stale is None


def test_supabase_meal_plan_repository_delete() -> None:
    client = FakeSupabaseClient()
    plans_table = client.table("plans")

    SupabaseMealPlanRepository(client).delete_plan("plan_1")

    assert plans_table._action == "delete"
    assert plans_table.last_filters == [("plan_id", "plan_1")]
