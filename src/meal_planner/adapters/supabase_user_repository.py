"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_planner.domain.models import UserRecord
from meal_planner.services.plan_store import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for the user's meal plan reference."""

    client: Client
    table_name: str = "users"

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user, if present."""
        response = (
            self.client.table(self.table_name)
            .select("user_id, meal_plan_id")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            row = response.data[0]
            return UserRecord(
                user_id=str(row["user_id"]),
                meal_plan_id=row.get("meal_plan_id"),
            )
        return None

    def set_meal_plan_id(self, user_id: str, plan_id: str) -> None:
        """Store the plan reference on the user record."""
        self.client.table(self.table_name).update(
            {
                "meal_plan_id": plan_id,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("user_id", user_id).execute()
