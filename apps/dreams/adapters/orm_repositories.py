# apps/dreams/adapters/orm_repositories.py
import logging
from typing import List, Optional
from apps.dreams.domain.entities import (
    ExpenseEntity, GoalEntity, MilestoneEntity, PhaseEntity, TaskEntity,
)
from apps.dreams.ports.repositories import IDreamRepository
from apps.dreams.models import Dream, Expense, Milestone, Task

logger = logging.getLogger(__name__)


class DjangoDreamRepository(IDreamRepository):
    def phases_to_entities(self, raw_phases) -> List[PhaseEntity]:
        """JSON roadmap_phases -> etapy. Indeks = pozycja na liście."""
        phases = []
        for index, raw in enumerate(raw_phases or []):
            if isinstance(raw, dict):
                title = raw.get('title') or raw.get('name') or ''
                completed = bool(raw.get('completed', False))
            else:
                # Starsze rekordy trzymały same nazwy etapów
                title, completed = str(raw), False
            phases.append(PhaseEntity(index=index, title=title, completed=completed))
        return phases

    def milestone_to_entity(self, model: Milestone) -> MilestoneEntity:
        return MilestoneEntity(
            id=model.id,
            title=model.title,
            target_date=model.target_date,
            budget_amount=model.budget_amount,
            completed=model.completed,
            phases=self.phases_to_entities(model.roadmap_phases),
        )

    def task_to_entity(self, model: Task) -> TaskEntity:
        return TaskEntity(
            id=model.id,
            title=model.title,
            description=model.description,
            completed=model.completed,
            completed_at=model.completed_at,
            created_at=model.created_at,
            due_date=model.due_date,
            assigned_to=model.assigned_to or None,
            phase_index=model.roadmap_phase_index,
            milestone_id=model.milestone_id,
        )

    def expense_to_entity(self, model: Expense) -> ExpenseEntity:
        return ExpenseEntity(
            id=model.id,
            amount=model.amount,
            status=model.status,
            due_date=model.due_date,
            paid_by=model.paid_by or None,
            milestone_id=model.milestone_id,
        )

    def to_entity(self, model: Dream) -> GoalEntity:
        """Konwertuje Model Django -> Czystą Encję (bez zadań i wydatków)."""
        return GoalEntity(
            id=model.id,
            title=model.title,
            created_at=model.created_at,
            target_date=model.target_date,
            budget_amount=model.budget_amount,
            completed=model.completed,
            milestones=[self.milestone_to_entity(m) for m in model.milestones.all()],
            partner_ids=[str(p) for p in (model.partners or [])],
        )

    def fetch_goal(self, goal_id: int) -> Optional[GoalEntity]:
        try:
            # prefetch_related - jedno dodatkowe zapytanie na wszystkie kamienie milowe
            dream = Dream.objects.prefetch_related('milestones').get(id=goal_id)
        except Dream.DoesNotExist:
            logger.info("Dream %s not found", goal_id)
            return None
        return self.to_entity(dream)

    def fetch_tasks(self, milestone_id: int) -> List[TaskEntity]:
        qs = Task.objects.filter(milestone_id=milestone_id)
        return [self.task_to_entity(t) for t in qs]

    def fetch_expenses(self, goal_id: int) -> List[ExpenseEntity]:
        qs = Expense.objects.filter(milestone__dream_id=goal_id).order_by('created_at', 'id')
        return [self.expense_to_entity(e) for e in qs]

    def list_goal_ids(self, user_id: int) -> List[int]:
        return list(Dream.objects.filter(user_id=user_id).values_list('id', flat=True))

    def owns_goal(self, user_id: int, goal_id: int) -> bool:
        return Dream.objects.filter(user_id=user_id, id=goal_id).exists()
