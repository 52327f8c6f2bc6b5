# apps/dreams/domain/services/metrics.py
from datetime import datetime
from typing import List, Optional

from apps.dreams.domain.entities import Alert, GoalEntity, MetricsSnapshot, VelocityInput
from apps.dreams.domain.services.alerts import AlertGenerator
from apps.dreams.domain.services.health import HealthScoreCalculator, assignee_balance
from apps.dreams.domain.services.progress import ProgressAggregator
from apps.dreams.domain.values import to_datetime


def compute_metrics(
        goal: GoalEntity,
        now: datetime,
        aggregator: Optional[ProgressAggregator] = None,
        calculator: Optional[HealthScoreCalculator] = None
) -> MetricsSnapshot:
    """
    Migawka metryk jednego marzenia.
    `now` podajemy jawnie - ten sam snapshot i ten sam `now` dają identyczny wynik.
    """
    now = to_datetime(now)
    aggregator = aggregator or ProgressAggregator()
    calculator = calculator or HealthScoreCalculator()

    progress = aggregator.goal_progress(goal)
    tasks = list(goal.tasks)
    spent = goal.total_expenses

    health = calculator.calculate(
        progress=progress.percentage,
        created_at=goal.created_at,
        target_date=goal.target_date,
        budget_amount=goal.budget_amount,
        total_expenses=spent,
        tasks=tasks,
        now=now,
    )

    return MetricsSnapshot(
        progress=progress.percentage,
        health_score=health.score,
        breakdown=health.breakdown,
        budget_used_pct=health.budget_used_pct,
        days_remaining=health.days_remaining,
        time_elapsed_pct=health.time_elapsed_pct,
        on_track=health.on_track,
        computed_at=now,
        tasks_completed=progress.tasks_completed,
        tasks_total=progress.tasks_total,
        phases_completed=progress.phases_completed,
        phases_total=progress.phases_total,
        total_expenses=spent,
        budget_remaining=goal.budget_amount - spent if goal.has_budget() else None,
        assignee_balance=assignee_balance(tasks, goal.partner_ids),
    )


def compute_alerts(
        goal: GoalEntity,
        metrics: MetricsSnapshot,
        now: datetime,
        generator: Optional[AlertGenerator] = None
) -> List[Alert]:
    generator = generator or AlertGenerator()
    return generator.generate(goal, metrics, to_datetime(now))


def velocity_input(goal: GoalEntity, metrics: MetricsSnapshot) -> VelocityInput:
    return VelocityInput(
        progress_pct=metrics.progress,
        budget_pct=metrics.budget_used_pct,
        time_elapsed_pct=metrics.time_elapsed_pct,
        has_target_date=goal.target_date is not None,
        phases_total=metrics.phases_total,
        phases_completed=metrics.phases_completed,
    )
