# apps/dreams/domain/services/alerts.py
from datetime import datetime, timedelta
from typing import List

from apps.dreams.domain.entities import (
    Alert, AlertSeverity, AlertType, GoalEntity, MetricsSnapshot,
)
from apps.dreams.domain.formatting import format_currency, pluralize
from apps.dreams.domain.values import round_half_up


class AlertGenerator:
    """
    Skanuje stan marzenia i zwraca listę alertów w kolejności:
    budżet -> termin -> zadania -> postęp.
    Nie obcina listy - to robi warstwa prezentacji.
    """

    def __init__(self, currency: str = '€', due_soon_days: int = 3, under_budget_min_expenses: int = 5):
        self.currency = currency
        self.due_soon = timedelta(days=due_soon_days)
        self.due_soon_days = due_soon_days
        self.under_budget_min_expenses = under_budget_min_expenses

    def generate(self, goal: GoalEntity, metrics: MetricsSnapshot, now: datetime) -> List[Alert]:
        alerts = []
        alerts.extend(self.budget_alerts(goal))
        alerts.extend(self.deadline_alerts(goal, metrics))
        alerts.extend(self.task_alerts(goal, now))
        alerts.extend(self.progress_alerts(metrics))
        return alerts

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency)

    # --- Budżet ---

    def budget_alerts(self, goal: GoalEntity) -> List[Alert]:
        if not goal.has_budget():
            return []

        spent = goal.total_expenses
        used = spent / goal.budget_amount * 100
        remaining = goal.budget_amount - spent

        if used > 100:
            return [Alert(
                AlertType.BUDGET, AlertSeverity.CRITICAL,
                f"Over budget by {self._money(abs(remaining))}",
                'Review budget allocation',
            )]
        if used > 90:
            return [Alert(
                AlertType.BUDGET, AlertSeverity.WARNING,
                f"{round_half_up(used)}% of budget used ({self._money(remaining)} left)",
                'Monitor remaining expenses closely',
            )]
        # Pozytywny alert - dopiero przy sensownej liczbie wydatków
        if used < 50 and len(goal.expenses) > self.under_budget_min_expenses:
            return [Alert(
                AlertType.BUDGET, AlertSeverity.INFO,
                f"Great! You're {self._money(remaining)} under budget",
                'Consider allocating surplus wisely',
            )]
        return []

    # --- Termin ---

    def deadline_alerts(self, goal: GoalEntity, metrics: MetricsSnapshot) -> List[Alert]:
        if goal.target_date is None or metrics.days_remaining is None:
            return []

        days = metrics.days_remaining
        if days < 0:
            return [Alert(
                AlertType.DEADLINE, AlertSeverity.CRITICAL,
                f"{abs(days)} days overdue",
                'Update target date or accelerate progress',
            )]
        if days == 0:
            return [Alert(
                AlertType.DEADLINE, AlertSeverity.CRITICAL,
                'Due today!',
                'Final push to complete remaining tasks',
            )]
        if days <= 7:
            return [Alert(
                AlertType.DEADLINE, AlertSeverity.WARNING,
                f"Only {pluralize(days, 'day')} remaining",
                'Prioritize critical tasks',
            )]
        if days <= 30:
            return [Alert(
                AlertType.DEADLINE, AlertSeverity.INFO,
                f"{days} days until target date",
                'Stay on track',
            )]
        return []

    # --- Zadania ---

    def task_alerts(self, goal: GoalEntity, now: datetime) -> List[Alert]:
        open_tasks = [t for t in goal.tasks if t.is_open()]
        if not open_tasks:
            return []

        alerts = []
        horizon = now + self.due_soon

        overdue = [t for t in open_tasks if t.due_date is not None and t.due_date < now]
        if overdue:
            alerts.append(Alert(
                AlertType.TASK, AlertSeverity.WARNING,
                f"{pluralize(len(overdue), 'task')} overdue",
                'Complete or reschedule overdue tasks',
            ))

        due_soon = [t for t in open_tasks if t.due_date is not None and now <= t.due_date <= horizon]
        if due_soon:
            alerts.append(Alert(
                AlertType.TASK, AlertSeverity.INFO,
                f"{pluralize(len(due_soon), 'task')} due in next {self.due_soon_days} days",
                'Complete upcoming tasks',
            ))

        unassigned = [t for t in open_tasks if not t.assigned_to]
        if unassigned:
            alerts.append(Alert(
                AlertType.TASK, AlertSeverity.INFO,
                f"{pluralize(len(unassigned), 'task')} not assigned",
                'Assign tasks to partners',
            ))

        return alerts

    # --- Postęp (z wyniku zdrowia) ---

    def progress_alerts(self, metrics: MetricsSnapshot) -> List[Alert]:
        if metrics.health_score is None:
            return []
        if metrics.health_score < 50:
            return [Alert(
                AlertType.PROGRESS, AlertSeverity.CRITICAL,
                'Goal health is poor - review and adjust plan',
                'Review roadmap and adjust timeline or budget',
            )]
        if metrics.health_score < 70:
            return [Alert(
                AlertType.PROGRESS, AlertSeverity.WARNING,
                'Goal progress needs attention',
                'Focus on high-priority tasks',
            )]
        return []
