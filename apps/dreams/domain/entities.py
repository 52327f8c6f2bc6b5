# apps/dreams/domain/entities.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterator, List, Optional

from apps.dreams.domain.values import to_amount, to_datetime


class ExpenseStatus(str, Enum):
    PENDING = 'pending'
    PAID = 'paid'
    CANCELLED = 'cancelled'


class AlertType(str, Enum):
    BUDGET = 'budget'
    DEADLINE = 'deadline'
    TASK = 'task'
    PROGRESS = 'progress'


class AlertSeverity(str, Enum):
    CRITICAL = 'critical'
    WARNING = 'warning'
    INFO = 'info'


# ----------------------------------------------------
# Wejście: migawka marzenia (Dream -> Milestone -> Phase/Task, Expense)
# ----------------------------------------------------

@dataclass
class PhaseEntity:
    """Etap roadmapy. `index` to pozycja na liście etapów kamienia milowego."""
    index: int
    title: str
    completed: bool = False  # użytkownik może odhaczyć ręcznie


@dataclass
class TaskEntity:
    id: Optional[int]
    title: str
    description: str = ""
    completed: bool = False

    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    due_date: Optional[datetime] = None

    assigned_to: Optional[str] = None
    phase_index: Optional[int] = None  # None = stare zadanie, bez powiązania z etapem
    milestone_id: Optional[int] = None

    def __post_init__(self):
        self.completed = bool(self.completed)
        self.completed_at = to_datetime(self.completed_at)
        self.created_at = to_datetime(self.created_at)
        self.due_date = to_datetime(self.due_date)

    @property
    def text(self) -> str:
        """Tekst do dopasowania słów kluczowych etapu (małe litery)."""
        return f"{self.title or ''} {self.description or ''}".lower()

    def is_open(self) -> bool:
        return not self.completed


@dataclass
class ExpenseEntity:
    id: Optional[int]
    amount: float = 0.0
    status: ExpenseStatus = ExpenseStatus.PENDING
    due_date: Optional[datetime] = None
    paid_by: Optional[str] = None
    milestone_id: Optional[int] = None

    def __post_init__(self):
        self.amount = to_amount(self.amount)
        self.status = ExpenseStatus(self.status or ExpenseStatus.PENDING)
        self.due_date = to_datetime(self.due_date)


@dataclass
class MilestoneEntity:
    id: Optional[int]
    title: str
    target_date: Optional[datetime] = None
    budget_amount: Optional[float] = None
    completed: bool = False
    phases: List[PhaseEntity] = field(default_factory=list)
    tasks: List[TaskEntity] = field(default_factory=list)

    def __post_init__(self):
        self.completed = bool(self.completed)
        self.target_date = to_datetime(self.target_date)
        if self.budget_amount is not None:
            self.budget_amount = to_amount(self.budget_amount)
        self.phases = list(self.phases or [])
        self.tasks = list(self.tasks or [])

    def has_phases(self) -> bool:
        return len(self.phases) > 0


@dataclass
class GoalEntity:
    """Marzenie (Dream) - cel nadrzędny pary."""
    id: Optional[int]
    title: str
    created_at: Optional[datetime] = None
    target_date: Optional[datetime] = None
    budget_amount: Optional[float] = None
    completed: bool = False
    milestones: List[MilestoneEntity] = field(default_factory=list)
    expenses: List[ExpenseEntity] = field(default_factory=list)

    # Partnerzy - potrzebni do liczenia balansu przydziału zadań
    partner_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.completed = bool(self.completed)
        self.created_at = to_datetime(self.created_at)
        self.target_date = to_datetime(self.target_date)
        if self.budget_amount is not None:
            self.budget_amount = to_amount(self.budget_amount)
        self.milestones = list(self.milestones or [])
        self.expenses = list(self.expenses or [])
        self.partner_ids = list(self.partner_ids or [])

    @property
    def tasks(self) -> Iterator[TaskEntity]:
        for milestone in self.milestones:
            yield from milestone.tasks

    @property
    def phases(self) -> Iterator[PhaseEntity]:
        for milestone in self.milestones:
            yield from milestone.phases

    @property
    def total_expenses(self) -> float:
        return sum(e.amount for e in self.expenses)

    def has_budget(self) -> bool:
        return self.budget_amount is not None and self.budget_amount > 0


# ----------------------------------------------------
# Wyjście: metryki i alerty (efemeryczne, nigdy nie zapisywane)
# ----------------------------------------------------

@dataclass
class HealthBreakdown:
    progress: float
    timeline: int
    budget: int
    activity: int

    def to_dict(self) -> dict:
        return {
            'progress': self.progress,
            'timeline': self.timeline,
            'budget': self.budget,
            'activity': self.activity,
        }


@dataclass
class AssigneeBalance:
    counts: Dict[str, int]
    score: int  # 0-100, 100 = idealny podział

    def to_dict(self) -> dict:
        return {'counts': dict(self.counts), 'score': self.score}


@dataclass
class MetricsSnapshot:
    progress: int
    health_score: int
    breakdown: HealthBreakdown
    budget_used_pct: int  # może przekroczyć 100 (przekroczony budżet)
    days_remaining: Optional[int]
    time_elapsed_pct: int
    on_track: bool
    computed_at: datetime

    tasks_completed: int = 0
    tasks_total: int = 0
    phases_completed: int = 0
    phases_total: int = 0
    total_expenses: float = 0.0
    budget_remaining: Optional[float] = None
    assignee_balance: Optional[AssigneeBalance] = None

    def to_dict(self) -> dict:
        return {
            'progress': self.progress,
            'health_score': self.health_score,
            'breakdown': self.breakdown.to_dict(),
            'budget_used_pct': self.budget_used_pct,
            'days_remaining': self.days_remaining,
            'time_elapsed_pct': self.time_elapsed_pct,
            'on_track': self.on_track,
            'computed_at': self.computed_at.isoformat(),
            'tasks_completed': self.tasks_completed,
            'tasks_total': self.tasks_total,
            'phases_completed': self.phases_completed,
            'phases_total': self.phases_total,
            'total_expenses': self.total_expenses,
            'budget_remaining': self.budget_remaining,
            'assignee_balance': self.assignee_balance.to_dict() if self.assignee_balance else None,
        }


@dataclass
class Alert:
    type: AlertType
    severity: AlertSeverity
    message: str
    action: str

    def to_dict(self) -> dict:
        return {
            'type': self.type.value,
            'severity': self.severity.value,
            'message': self.message,
            'action': self.action,
        }


@dataclass
class HealthStatus:
    label: str
    color: str
    message: str

    def to_dict(self) -> dict:
        return {'label': self.label, 'color': self.color, 'message': self.message}


@dataclass
class VelocityInput:
    progress_pct: float
    budget_pct: float
    time_elapsed_pct: float
    has_target_date: bool

    # Tylko do podsumowania portfela (liczba etapów roadmapy)
    phases_total: int = 0
    phases_completed: int = 0


@dataclass
class GoalVelocity:
    score: float
    label: str
    progress_delta: int
    budget_alignment: int

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'label': self.label,
            'progress_delta': self.progress_delta,
            'budget_alignment': self.budget_alignment,
        }


@dataclass
class PortfolioSummary:
    total_roadmaps: int
    completed_roadmaps: int
    open_roadmaps: int
    active_dreams: int
    velocity_score: float
    overall_velocity: str
    budget_health: int

    def to_dict(self) -> dict:
        return {
            'total_roadmaps': self.total_roadmaps,
            'completed_roadmaps': self.completed_roadmaps,
            'open_roadmaps': self.open_roadmaps,
            'active_dreams': self.active_dreams,
            'velocity_score': self.velocity_score,
            'overall_velocity': self.overall_velocity,
            'budget_health': self.budget_health,
        }
