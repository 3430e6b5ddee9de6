"""Supabase implementation for meal plan records."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.meal_plans import MealPlan, MealPlanRecord
from meal_planner.domain.payloads import meal_plan_from_payload, meal_plan_to_payload
from meal_planner.services.plan_store import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase-backed repository storing each plan as a JSON document."""

    client: Client
    table_name: str = "plans"

    def create_plan(self, plan_id: str, user_id: str, plan: MealPlan) -> MealPlanRecord:
        """Insert a plan row at version 1."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "plan_id": plan_id,
                    "user_id": user_id,
                    "plan_type": "meal",
                    "version": 1,
                    "plan": meal_plan_to_payload(plan),
                    "created_at": plan.created_at.isoformat(),
                    "updated_at": plan.updated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return _parse_record(response.data[0])

    def get_plan(self, plan_id: str) -> MealPlanRecord | None:
        """Return a plan by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("plan_id", plan_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def update_plan(
        self, plan_id: str, plan: MealPlan, expected_version: int
    ) -> MealPlanRecord | None:
        """Replace the plan only when the stored version still matches."""
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    "plan": meal_plan_to_payload(plan),
                    "version": expected_version + 1,
                    "updated_at": plan.updated_at.isoformat(),
                }
            )
            .eq("plan_id", plan_id)
            .eq("version", expected_version)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def delete_plan(self, plan_id: str) -> None:
        """Remove a plan row."""
        self.client.table(self.table_name).delete().eq("plan_id", plan_id).execute()


def _parse_record(row: dict[str, object]) -> MealPlanRecord:
    """Parse a plan row into a domain record."""
    payload = row.get("plan")
    return MealPlanRecord(
        plan_id=str(row["plan_id"]),
        user_id=str(row["user_id"]),
        plan=meal_plan_from_payload(payload if isinstance(payload, dict) else {}),
        version=int(row.get("version", 1)),
    )
