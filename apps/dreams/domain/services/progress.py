# apps/dreams/domain/services/progress.py
from dataclasses import dataclass
from typing import Iterable, List

from apps.dreams.domain.entities import GoalEntity, MilestoneEntity, PhaseEntity, TaskEntity
from apps.dreams.domain.values import round_half_up


@dataclass
class ProgressResult:
    percentage: int  # 0-100
    phases_completed: int = 0
    phases_total: int = 0
    tasks_completed: int = 0
    tasks_total: int = 0


def _percent(done: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(done / total * 100)


class ProgressAggregator:
    """
    Liczy postęp (0-100) z hierarchii etapów i zadań.
    Kolejność reguł: ukończony -> etapy -> zadania -> 0.
    """

    MIN_KEYWORD_LENGTH = 3  # brane są tylko słowa dłuższe niż 3 znaki

    def __init__(self, keyword_fallback: bool = True):
        self.keyword_fallback = keyword_fallback

    # --- Dopasowanie zadania do etapu ---

    def task_matches_phase(self, task: TaskEntity, phase: PhaseEntity) -> bool:
        if task.phase_index is not None:
            return task.phase_index == phase.index

        # Zadania sprzed wprowadzenia phase_index (legacy).
        # Heurystyka - po zmianie nazwy etapu wynik może się zmienić.
        if not self.keyword_fallback:
            return False
        return self._matches_by_keyword(task, phase)

    def _matches_by_keyword(self, task: TaskEntity, phase: PhaseEntity) -> bool:
        keywords = [
            word for word in (phase.title or "").lower().split()
            if len(word) > self.MIN_KEYWORD_LENGTH
        ]
        text = task.text
        return any(word in text for word in keywords)

    def is_phase_done(self, phase: PhaseEntity, tasks: Iterable[TaskEntity]) -> bool:
        if phase.completed:
            return True
        matched = [t for t in tasks if self.task_matches_phase(t, phase)]
        return len(matched) > 0 and all(t.completed for t in matched)

    # --- Pojedynczy kamień milowy ---

    def milestone_progress(self, milestone: MilestoneEntity) -> ProgressResult:
        return self._aggregate([milestone], completed=milestone.completed)

    # --- Całe marzenie ---

    def goal_progress(self, goal: GoalEntity) -> ProgressResult:
        all_milestones_done = (
            len(goal.milestones) > 0 and all(m.completed for m in goal.milestones)
        )
        return self._aggregate(goal.milestones, completed=goal.completed or all_milestones_done)

    def _aggregate(self, milestones: List[MilestoneEntity], completed: bool) -> ProgressResult:
        phases_total = 0
        phases_done = 0
        tasks_total = 0
        tasks_done = 0

        for milestone in milestones:
            tasks_total += len(milestone.tasks)
            tasks_done += sum(1 for t in milestone.tasks if t.completed or milestone.completed)

            phases_total += len(milestone.phases)
            for phase in milestone.phases:
                if milestone.completed or self.is_phase_done(phase, milestone.tasks):
                    phases_done += 1

        result = ProgressResult(
            percentage=0,
            phases_completed=phases_done,
            phases_total=phases_total,
            tasks_completed=tasks_done,
            tasks_total=tasks_total,
        )

        if completed:
            result.percentage = 100
        elif phases_total > 0:
            result.percentage = _percent(phases_done, phases_total)
        elif tasks_total > 0:
            result.percentage = _percent(tasks_done, tasks_total)

        return result
