"""SQLModel implementation of SavingsGoal repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...domain.patches import SavingsGoalPatch
from ...models.savings_goal import SavingsGoal
from ..database import SessionFactory


class SQLModelSavingsGoalRepository:
    """SQLModel-based savings goal repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, goal_id: int) -> Optional[SavingsGoal]:
        with self.session_factory() as session:
            obj = session.get(SavingsGoal, goal_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_for_user(self, user_id: int) -> list[SavingsGoal]:
        """List a user's goals in creation order."""
        with self.session_factory() as session:
            statement = (
                select(SavingsGoal)
                .where(SavingsGoal.user_id == user_id)
                .order_by(SavingsGoal.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, goal: SavingsGoal) -> SavingsGoal:
        with self.session_factory() as session:
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def update(self, goal_id: int, patch: SavingsGoalPatch) -> Optional[SavingsGoal]:
        with self.session_factory() as session:
            goal = session.get(SavingsGoal, goal_id)
            if goal is None:
                return None
            patch.apply_to(goal)
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def delete(self, goal_id: int) -> bool:
        with self.session_factory() as session:
            goal = session.get(SavingsGoal, goal_id)
            if goal is None:
                return False
            session.delete(goal)
            session.commit()
            return True
