"""Meal plan persistence keyed by user and plan reference."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from meal_planner.domain.meal_plans import MealPlan, MealPlanRecord
from meal_planner.domain.models import UserRecord
from meal_planner.errors import ConflictError, NotFoundError

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for the user fields this service touches."""

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user, if present."""

    def set_meal_plan_id(self, user_id: str, plan_id: str) -> None:
        """Store the plan reference on the user record."""


class MealPlanRepository(Protocol):
    """Persistence interface for meal plan records."""

    def create_plan(self, plan_id: str, user_id: str, plan: MealPlan) -> MealPlanRecord:
        """Insert a plan; fails if the id is already taken."""

    def get_plan(self, plan_id: str) -> MealPlanRecord | None:
        """Return a plan by id, if present."""

    def update_plan(
        self, plan_id: str, plan: MealPlan, expected_version: int
    ) -> MealPlanRecord | None:
        """Replace a plan if its version matches; return None on mismatch."""

    def delete_plan(self, plan_id: str) -> None:
        """Remove a plan row."""


@dataclass
class MealPlanStore:
    """Creates, fetches and updates the single meal plan owned by a user."""

    user_repository: UserRepository
    plan_repository: MealPlanRepository

    def require_user(self, user_id: str) -> UserRecord:
        """Return the user or raise when it does not exist."""
        user = self.user_repository.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get(self, user_id: str) -> MealPlanRecord | None:
        """Return the user's plan, or None when no plan has been generated."""
        user = self.require_user(user_id)
        if not user.meal_plan_id:
            return None
        record = self.plan_repository.get_plan(user.meal_plan_id)
        if record is None:
            _logger.warning(
                "Dangling meal plan reference: user_id=%s plan_id=%s",
                user_id,
                user.meal_plan_id,
            )
        return record

    def require(self, user_id: str) -> MealPlanRecord:
        """Return the user's plan or raise when none exists."""
        record = self.get(user_id)
        if record is None:
            raise NotFoundError(f"No meal plan found for user {user_id}")
        return record

    def create(self, user_id: str, plan: MealPlan) -> MealPlanRecord:
        """Persist a first plan for the user and link it to the user record."""
        user = self.require_user(user_id)
        if user.meal_plan_id and self.plan_repository.get_plan(user.meal_plan_id):
            raise ConflictError(f"User {user_id} already has a meal plan")
        plan_id = f"plan_{uuid4().hex}"
        record = self.plan_repository.create_plan(plan_id, user_id, plan)
        try:
            self.user_repository.set_meal_plan_id(user_id, plan_id)
        except Exception:
            _logger.warning(
                "Linking meal plan failed, removing it: user_id=%s plan_id=%s",
                user_id,
                plan_id,
            )
            self.plan_repository.delete_plan(plan_id)
            raise
        _logger.info("Meal plan created: user_id=%s plan_id=%s", user_id, plan_id)
        return record

    def update(self, record: MealPlanRecord, plan: MealPlan) -> MealPlanRecord:
        """Replace the stored plan, rejecting writes based on a stale read."""
        updated = self.plan_repository.update_plan(
            record.plan_id, plan, expected_version=record.version
        )
        if updated is None:
            raise ConflictError(
                "Meal plan was modified by another request; reload and retry",
                details={"planId": record.plan_id, "expectedVersion": record.version},
            )
        _logger.info(
            "Meal plan updated: user_id=%s plan_id=%s version=%s",
            record.user_id,
            record.plan_id,
            updated.version,
        )
        return updated
