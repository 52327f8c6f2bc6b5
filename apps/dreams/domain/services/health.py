# apps/dreams/domain/services/health.py
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from apps.dreams.domain.entities import AssigneeBalance, HealthBreakdown, HealthStatus, TaskEntity
from apps.dreams.domain.values import clamp, round_half_up

DAY = timedelta(days=1)
ON_TRACK_THRESHOLD = 70

# Maksymalna liczba punktów na składnik
DEFAULT_WEIGHTS = {
    'progress': 50,
    'timeline': 30,
    'budget': 15,
    'activity': 5,
}


@dataclass
class HealthResult:
    score: int
    breakdown: HealthBreakdown
    on_track: bool
    time_elapsed_pct: int
    budget_used_pct: int
    days_remaining: Optional[int]


# --- Wartości wstępne ---

def time_elapsed_pct(created_at: Optional[datetime], target_date: Optional[datetime], now: datetime) -> int:
    if target_date is None or created_at is None:
        return 0
    duration = (target_date - created_at).total_seconds()
    if duration <= 0:
        return 0
    elapsed = (now - created_at).total_seconds()
    return clamp(round_half_up(elapsed / duration * 100), 0, 100)


def budget_used_pct(budget_amount: Optional[float], total_expenses: float) -> int:
    """Bez górnego limitu - >100 oznacza przekroczenie budżetu."""
    if not budget_amount or budget_amount <= 0:
        return 0
    return max(0, round_half_up(total_expenses / budget_amount * 100))


def days_remaining(target_date: Optional[datetime], now: datetime) -> Optional[int]:
    if target_date is None:
        return None
    return math.ceil((target_date - now) / DAY)


def assignee_balance(tasks: Iterable[TaskEntity], partner_ids: Optional[List[str]] = None) -> AssigneeBalance:
    """
    Balans podziału zadań między partnerami: 100 - (max - min) * 10.
    Partnerzy bez zadań liczą się jako 0.
    """
    counts: Dict[str, int] = {pid: 0 for pid in (partner_ids or [])}
    for task in tasks:
        if task.assigned_to:
            counts[task.assigned_to] = counts.get(task.assigned_to, 0) + 1

    if sum(counts.values()) == 0:
        return AssigneeBalance(counts=counts, score=100)

    spread = max(counts.values()) - min(counts.values())
    return AssigneeBalance(counts=counts, score=clamp(100 - spread * 10, 0, 100))


class HealthScoreCalculator:
    """
    Ważony wynik zdrowia 0-100: postęp (50) + harmonogram (30) + budżet (15) + aktywność (5).
    Brak sygnału (budżetu, terminu, zadań) = wartość neutralna, a nie kara.
    """

    def __init__(self, weights: dict = None, activity_window_days: int = 7):
        self.weights = {**DEFAULT_WEIGHTS, **(weights or {})}
        self.activity_window = timedelta(days=activity_window_days)

    def _scaled(self, component: str, points: float, max_points: float) -> float:
        """Przeskalowanie progów, gdy wagi w konfiguracji różnią się od domyślnych."""
        return points * self.weights[component] / max_points

    # --- Składniki ---

    def progress_score(self, progress: float) -> float:
        return progress * self.weights['progress'] / 100

    def timeline_score(self, progress: float, elapsed_pct: int, remaining: Optional[int]) -> float:
        if remaining is None:
            points = 15  # neutralnie
        elif remaining < 0:
            points = 0
        else:
            gap = progress - elapsed_pct
            if gap >= 10:
                points = 30
            elif gap >= 0:
                points = 25
            elif gap >= -15:
                points = 15
            elif gap >= -30:
                points = 8
            else:
                points = 3
        return self._scaled('timeline', points, 30)

    def budget_score(self, progress: float, used_pct: int, has_budget: bool) -> float:
        if not has_budget:
            points = 8  # neutralnie
        elif used_pct > 100:
            points = 0
        else:
            efficiency = progress - used_pct
            if efficiency >= 10:
                points = 15
            elif efficiency >= 0:
                points = 12
            elif efficiency >= -15:
                points = 8
            elif efficiency >= -30:
                points = 4
            else:
                points = 1
        return self._scaled('budget', points, 15)

    def activity_score(self, tasks: List[TaskEntity], now: datetime) -> float:
        if not tasks:
            points = 3  # neutralnie
        else:
            cutoff = now - self.activity_window
            recent = any(
                (t.completed_at is not None and t.completed_at >= cutoff) or
                (t.created_at is not None and t.created_at >= cutoff)
                for t in tasks
            )
            points = 5 if recent else 0
        return self._scaled('activity', points, 5)

    # --- Wynik ---

    def calculate(
            self,
            progress: int,
            created_at: Optional[datetime],
            target_date: Optional[datetime],
            budget_amount: Optional[float],
            total_expenses: float,
            tasks: List[TaskEntity],
            now: datetime
    ) -> HealthResult:

        elapsed = time_elapsed_pct(created_at, target_date, now)
        used = budget_used_pct(budget_amount, total_expenses)
        remaining = days_remaining(target_date, now)
        has_budget = bool(budget_amount) and budget_amount > 0

        breakdown = HealthBreakdown(
            progress=self.progress_score(progress),
            timeline=round_half_up(self.timeline_score(progress, elapsed, remaining)),
            budget=round_half_up(self.budget_score(progress, used, has_budget)),
            activity=round_half_up(self.activity_score(tasks, now)),
        )

        total = breakdown.progress + breakdown.timeline + breakdown.budget + breakdown.activity
        score = clamp(round_half_up(total), 0, 100)

        return HealthResult(
            score=score,
            breakdown=breakdown,
            on_track=score >= ON_TRACK_THRESHOLD,
            time_elapsed_pct=elapsed,
            budget_used_pct=used,
            days_remaining=remaining,
        )


def get_health_status(score: Optional[int]) -> HealthStatus:
    """Etykieta jakościowa dla wyniku zdrowia (None = brak danych)."""
    if score is None:
        return HealthStatus('Getting Started', 'gray', 'Add tasks to start tracking')
    if score >= 80:
        return HealthStatus('Excellent', 'green', 'Everything is on track!')
    if score >= 70:
        return HealthStatus('Good', 'blue', 'Progressing well')
    if score >= 50:
        return HealthStatus('Fair', 'yellow', 'Needs attention')
    return HealthStatus('At Risk', 'red', 'Requires immediate action')
