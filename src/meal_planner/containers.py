"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.openai_meal_plan_client import OpenAIMealPlanClient
from meal_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_planner.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from meal_planner.adapters.supabase_user_repository import SupabaseUserRepository
from meal_planner.config import Settings
from meal_planner.services.generation import MealPlanOrchestrator
from meal_planner.services.mutations import MealPlanMutator
from meal_planner.services.plan_store import MealPlanStore
from meal_planner.services.recipes import RecipeResolver


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recipe_resolver: RecipeResolver
    meal_plan_store: MealPlanStore
    orchestrator: MealPlanOrchestrator
    mutator: MealPlanMutator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_repository = SupabaseRecipeRepository(
        supabase_client, table_name=resolved_settings.recipes_table
    )
    user_repository = SupabaseUserRepository(
        supabase_client, table_name=resolved_settings.users_table
    )
    plan_repository = SupabaseMealPlanRepository(
        supabase_client, table_name=resolved_settings.plans_table
    )
    recipe_resolver = RecipeResolver(recipe_repository)
    meal_plan_store = MealPlanStore(
        user_repository=user_repository,
        plan_repository=plan_repository,
    )
    provider = OpenAIMealPlanClient.create(
        api_key=resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    orchestrator = MealPlanOrchestrator(
        provider=provider,
        resolver=recipe_resolver,
        store=meal_plan_store,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store_responses=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    mutator = MealPlanMutator(store=meal_plan_store, resolver=recipe_resolver)

    async def close_resources() -> None:
        await provider.client.close()

    return AppContainer(
        settings=resolved_settings,
        recipe_resolver=recipe_resolver,
        meal_plan_store=meal_plan_store,
        orchestrator=orchestrator,
        mutator=mutator,
        close_resources=close_resources,
    )
