import pytest

from apps.dreams.adapters.memory_repository import InMemoryDreamRepository
from apps.dreams.application.use_cases import (
    DashboardUseCase, GoalHealthUseCase, LoadSnapshotUseCase,
)
from apps.dreams.domain.validation import InvalidSnapshotError
from tests.factories import NOW, days, expense, goal, milestone, phase, task


@pytest.fixture
def repository():
    repo = InMemoryDreamRepository()
    repo.add_goal(goal(
        id=1,
        title="Wedding",
        budget_amount=1000,
        target_date=NOW + days(5),
        expenses=[expense(1100, milestone_id=10)],
        milestones=[milestone(
            id=10,
            phases=[phase(0, "Book venue"), phase(1, "Send invitations")],
            tasks=[task("Sign contract", phase_index=0, completed=True, created_at=NOW - days(1))],
        )],
    ), user_id=7)
    repo.add_goal(goal(
        id=2,
        title="Trip",
        milestones=[milestone(id=20, tasks=[task("Pack", completed=True)])],
    ), user_id=7)
    repo.add_goal(goal(id=3, title="Someone else's"), user_id=8)
    return repo


def test_load_snapshot_assembles_tasks_and_expenses(repository):
    snapshot = LoadSnapshotUseCase(repository).execute(1)

    assert [t.title for t in snapshot.tasks] == ["Sign contract"]
    assert snapshot.total_expenses == 1100
    # Repozytorium trzyma marzenie bez zadań - nie mutujemy jego kopii
    assert repository.fetch_goal(1).milestones[0].tasks == []


def test_load_snapshot_missing_goal(repository):
    assert LoadSnapshotUseCase(repository).execute(404) is None


def test_load_snapshot_rejects_duplicate_phase_index():
    repo = InMemoryDreamRepository()
    repo.add_goal(goal(id=1, milestones=[milestone(phases=[phase(0, "a"), phase(0, "b")])]), user_id=1)

    with pytest.raises(InvalidSnapshotError):
        LoadSnapshotUseCase(repo).execute(1)


def test_load_snapshot_rejects_negative_expense():
    repo = InMemoryDreamRepository()
    repo.add_goal(goal(id=1, expenses=[expense(-5)]), user_id=1)

    with pytest.raises(InvalidSnapshotError, match="negative"):
        LoadSnapshotUseCase(repo).execute(1)


def test_goal_health_report(repository):
    report = GoalHealthUseCase(repository).execute(1, NOW)

    assert report.metrics.progress == 50
    assert report.alerts[0].message == "Over budget by €100"
    assert report.status.label == "At Risk"
    assert report.velocity.label in {'Excellent', 'On Track', 'Needs Attention', 'At Risk'}


def test_goal_health_report_respects_config(repository):
    report = GoalHealthUseCase(repository, {'CURRENCY_SYMBOL': '$'}).execute(1, NOW)
    assert report.alerts[0].message == "Over budget by $100"


def test_goal_report_truncates_alerts_only_for_display(repository):
    report = GoalHealthUseCase(repository).execute(1, NOW)
    data = report.to_dict(alert_limit=1)

    assert len(data['alerts']) == 1
    assert data['alerts_total'] == len(report.alerts) > 1
    assert data['days_remaining_display'] == "5 days"


def test_dashboard_covers_only_users_dreams(repository):
    report = DashboardUseCase(repository).execute(7, NOW)

    assert [g.goal_id for g in report.goals] == [1, 2]
    assert report.portfolio.active_dreams == 2
    assert report.portfolio.total_roadmaps == 2
    assert report.portfolio.completed_roadmaps == 1


def test_dashboard_for_user_without_dreams(repository):
    report = DashboardUseCase(repository).execute(999, NOW)

    assert report.goals == []
    assert report.portfolio.overall_velocity == 'On Track'


def test_dashboard_skips_invalid_dream(repository):
    repository.add_goal(goal(id=4, title="Broken", expenses=[expense(-5)]), user_id=7)

    report = DashboardUseCase(repository).execute(7, NOW)

    assert [g.goal_id for g in report.goals] == [1, 2]
    assert report.skipped == [4]
    assert report.portfolio.active_dreams == 2
