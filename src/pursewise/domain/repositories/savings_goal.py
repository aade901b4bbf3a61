"""Savings goal repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.savings_goal import SavingsGoal
from ..patches import SavingsGoalPatch


class SavingsGoalRepository(Protocol):
    """Repository for managing savings goals."""

    def get_by_id(self, goal_id: int) -> Optional[SavingsGoal]:
        ...

    def list_for_user(self, user_id: int) -> list[SavingsGoal]:
        ...

    def create(self, goal: SavingsGoal) -> SavingsGoal:
        ...

    def update(self, goal_id: int, patch: SavingsGoalPatch) -> Optional[SavingsGoal]:
        ...

    def delete(self, goal_id: int) -> bool:
        ...
