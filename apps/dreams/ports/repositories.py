# apps/dreams/ports/repositories.py
from abc import ABC, abstractmethod
from typing import List, Optional
from apps.dreams.domain.entities import ExpenseEntity, GoalEntity, TaskEntity


class IDreamRepository(ABC):
    @abstractmethod
    def fetch_goal(self, goal_id: int) -> Optional[GoalEntity]:
        """Zwraca marzenie z kamieniami milowymi i etapami (bez zadań i wydatków)."""
        pass

    @abstractmethod
    def fetch_tasks(self, milestone_id: int) -> List[TaskEntity]:
        pass

    @abstractmethod
    def fetch_expenses(self, goal_id: int) -> List[ExpenseEntity]:
        pass

    @abstractmethod
    def list_goal_ids(self, user_id: int) -> List[int]:
        """Zwraca ID aktywnych marzeń użytkownika (kolejność jak na dashboardzie)."""
        pass

    def owns_goal(self, user_id: int, goal_id: int) -> bool:
        return goal_id in self.list_goal_ids(user_id)
