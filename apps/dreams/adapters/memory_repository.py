# apps/dreams/adapters/memory_repository.py
from dataclasses import replace
from typing import Dict, List, Optional
from apps.dreams.domain.entities import ExpenseEntity, GoalEntity, TaskEntity
from apps.dreams.ports.repositories import IDreamRepository


class InMemoryDreamRepository(IDreamRepository):
    """Repozytorium w pamięci - do testów i dem, bez bazy danych."""

    def __init__(self):
        self._goals: Dict[int, GoalEntity] = {}
        self._owners: Dict[int, int] = {}
        self._tasks: Dict[int, List[TaskEntity]] = {}
        self._expenses: Dict[int, List[ExpenseEntity]] = {}

    def add_goal(self, goal: GoalEntity, user_id: int) -> GoalEntity:
        """
        Rejestruje pełną migawkę. Zadania i wydatki są rozdzielane tak,
        jak trzymałaby je baza (osobno od marzenia).
        """
        self._owners[goal.id] = user_id
        self._expenses[goal.id] = list(goal.expenses)
        for milestone in goal.milestones:
            self._tasks[milestone.id] = list(milestone.tasks)

        self._goals[goal.id] = replace(
            goal,
            expenses=[],
            milestones=[replace(m, tasks=[]) for m in goal.milestones],
        )
        return goal

    def fetch_goal(self, goal_id: int) -> Optional[GoalEntity]:
        goal = self._goals.get(goal_id)
        if goal is None:
            return None
        return replace(goal, milestones=[replace(m) for m in goal.milestones])

    def fetch_tasks(self, milestone_id: int) -> List[TaskEntity]:
        return list(self._tasks.get(milestone_id, []))

    def fetch_expenses(self, goal_id: int) -> List[ExpenseEntity]:
        return list(self._expenses.get(goal_id, []))

    def list_goal_ids(self, user_id: int) -> List[int]:
        return [goal_id for goal_id, owner in self._owners.items() if owner == user_id]
