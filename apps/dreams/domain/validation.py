# apps/dreams/domain/validation.py
from apps.dreams.domain.entities import GoalEntity


class InvalidSnapshotError(ValueError):
    """Naruszenie kontraktu danych - błąd programisty, nie sytuacja do wygładzenia."""


def validate_snapshot(goal: GoalEntity) -> GoalEntity:
    if goal.budget_amount is not None and goal.budget_amount < 0:
        raise InvalidSnapshotError(f"Dream {goal.id}: budget cannot be negative")

    for expense in goal.expenses:
        if expense.amount < 0:
            raise InvalidSnapshotError(f"Expense {expense.id}: amount cannot be negative")

    for milestone in goal.milestones:
        if milestone.budget_amount is not None and milestone.budget_amount < 0:
            raise InvalidSnapshotError(f"Milestone {milestone.id}: budget cannot be negative")

        indexes = [phase.index for phase in milestone.phases]
        if len(indexes) != len(set(indexes)):
            raise InvalidSnapshotError(f"Milestone {milestone.id}: duplicate phase index")

        for task in milestone.tasks:
            if task.phase_index is not None and task.phase_index < 0:
                raise InvalidSnapshotError(f"Task {task.id}: phase index cannot be negative")

    return goal
