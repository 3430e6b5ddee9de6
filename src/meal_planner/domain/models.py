"""Domain models for the meal planner."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    user_id: str
    meal_plan_id: str | None
