# apps/dreams/application/use_cases.py
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional
from apps.dreams.conf import DEFAULTS
from apps.dreams.domain.entities import (
    Alert, GoalEntity, GoalVelocity, HealthStatus, MetricsSnapshot, PortfolioSummary,
)
from apps.dreams.domain.formatting import format_days_remaining
from apps.dreams.domain.services.alerts import AlertGenerator
from apps.dreams.domain.services.health import HealthScoreCalculator, get_health_status
from apps.dreams.domain.services.metrics import compute_alerts, compute_metrics, velocity_input
from apps.dreams.domain.services.progress import ProgressAggregator
from apps.dreams.domain.services.velocity import VelocityClassifier
from apps.dreams.domain.validation import InvalidSnapshotError, validate_snapshot
from apps.dreams.ports.repositories import IDreamRepository

logger = logging.getLogger(__name__)


@dataclass
class GoalReport:
    goal_id: int
    title: str
    metrics: MetricsSnapshot
    alerts: List[Alert]
    status: HealthStatus
    velocity: GoalVelocity

    def to_dict(self, alert_limit: Optional[int] = None) -> dict:
        alerts = self.alerts if alert_limit is None else self.alerts[:alert_limit]
        return {
            'id': self.goal_id,
            'title': self.title,
            'metrics': self.metrics.to_dict(),
            'days_remaining_display': format_days_remaining(self.metrics.days_remaining),
            'status': self.status.to_dict(),
            'velocity': self.velocity.to_dict(),
            'alerts': [a.to_dict() for a in alerts],
            'alerts_total': len(self.alerts),
        }


@dataclass
class DashboardReport:
    goals: List[GoalReport] = field(default_factory=list)
    portfolio: Optional[PortfolioSummary] = None
    skipped: List[int] = field(default_factory=list)


class LoadSnapshotUseCase:
    """Składa pełną migawkę marzenia z trzech wywołań repozytorium i ją waliduje."""

    def __init__(self, repository: IDreamRepository):
        self.repository = repository

    def execute(self, goal_id: int) -> Optional[GoalEntity]:
        goal = self.repository.fetch_goal(goal_id)
        if goal is None:
            return None

        milestones = [
            replace(m, tasks=self.repository.fetch_tasks(m.id))
            for m in goal.milestones
        ]
        snapshot = replace(
            goal,
            milestones=milestones,
            expenses=self.repository.fetch_expenses(goal_id),
        )

        # InvalidSnapshotError leci dalej - to błąd danych, nie stan do ukrycia
        return validate_snapshot(snapshot)


class GoalHealthUseCase:
    def __init__(self, repository: IDreamRepository, config: dict = None):
        self.repository = repository
        self.config = {**DEFAULTS, **(config or {})}

        self.aggregator = ProgressAggregator(keyword_fallback=self.config['PHASE_KEYWORD_FALLBACK'])
        self.calculator = HealthScoreCalculator(
            weights=self.config['HEALTH_WEIGHTS'],
            activity_window_days=self.config['ACTIVITY_WINDOW_DAYS'],
        )
        self.generator = AlertGenerator(
            currency=self.config['CURRENCY_SYMBOL'],
            due_soon_days=self.config['DUE_SOON_DAYS'],
            under_budget_min_expenses=self.config['UNDER_BUDGET_MIN_EXPENSES'],
        )
        self.classifier = VelocityClassifier()
        self.loader = LoadSnapshotUseCase(repository)

    def report(self, goal: GoalEntity, now: datetime) -> GoalReport:
        metrics = compute_metrics(goal, now, aggregator=self.aggregator, calculator=self.calculator)
        alerts = compute_alerts(goal, metrics, now, generator=self.generator)

        return GoalReport(
            goal_id=goal.id,
            title=goal.title,
            metrics=metrics,
            alerts=alerts,
            status=get_health_status(metrics.health_score),
            velocity=self.classifier.goal_velocity(velocity_input(goal, metrics)),
        )

    def execute(self, goal_id: int, now: datetime) -> Optional[GoalReport]:
        goal = self.loader.execute(goal_id)
        if goal is None:
            return None

        report = self.report(goal, now)
        logger.debug(
            "Dream %s: progress=%s health=%s alerts=%s",
            goal_id, report.metrics.progress, report.metrics.health_score, len(report.alerts)
        )
        return report


class DashboardUseCase:
    def __init__(self, repository: IDreamRepository, config: dict = None):
        self.repository = repository
        self.goal_health = GoalHealthUseCase(repository, config)
        self.classifier = self.goal_health.classifier

    def execute(self, user_id: int, now: datetime) -> DashboardReport:
        reports = []
        inputs = []
        skipped = []

        for goal_id in self.repository.list_goal_ids(user_id):
            try:
                goal = self.goal_health.loader.execute(goal_id)
            except InvalidSnapshotError as e:
                # Jedno uszkodzone marzenie nie ukrywa pozostałych
                logger.warning("Dream %s skipped on dashboard: %s", goal_id, e)
                skipped.append(goal_id)
                continue
            if goal is None:
                # Usunięte między listowaniem a pobraniem
                continue
            report = self.goal_health.report(goal, now)
            reports.append(report)
            inputs.append(velocity_input(goal, report.metrics))

        portfolio = self.classifier.summarize(inputs)
        logger.info(
            "Dashboard for user %s: %s dreams, velocity=%s",
            user_id, portfolio.active_dreams, portfolio.overall_velocity
        )
        return DashboardReport(goals=reports, portfolio=portfolio, skipped=skipped)
