import copy
from datetime import date

from apps.dreams.domain.services.metrics import compute_metrics, velocity_input
from tests.factories import NOW, days, expense, goal, milestone, phase, task


def test_scenario_all_tasks_done_without_target_or_budget():
    g = goal(milestones=[milestone(tasks=[
        task(str(i), completed=True, completed_at=NOW - days(2)) for i in range(4)
    ])])
    m = compute_metrics(g, NOW)

    assert m.progress == 100
    assert m.breakdown.timeline == 15
    assert m.breakdown.budget == 8
    assert m.breakdown.activity == 5
    assert m.health_score == 50 + 15 + 8 + 5
    assert m.on_track is True


def test_scenario_all_tasks_done_long_ago():
    g = goal(milestones=[milestone(tasks=[
        task(str(i), completed=True, completed_at=NOW - days(40), created_at=NOW - days(60))
        for i in range(4)
    ])])
    m = compute_metrics(g, NOW)

    assert m.breakdown.activity == 0
    assert m.health_score == 73


def test_empty_goal_uses_neutral_defaults():
    m = compute_metrics(goal(), NOW)

    assert m.progress == 0
    assert m.breakdown.activity == 3
    assert m.days_remaining is None
    assert m.time_elapsed_pct == 0
    assert m.budget_remaining is None
    assert m.health_score == 26


def test_phase_scenario_progress():
    g = goal(milestones=[milestone(
        phases=[phase(0, "Book venue"), phase(1, "Send invitations"), phase(2, "Plan honeymoon")],
        tasks=[
            task("a", phase_index=0, completed=True), task("b", phase_index=0, completed=True),
            task("c", phase_index=1), task("d", phase_index=1),
        ],
    )])
    m = compute_metrics(g, NOW)

    assert m.progress == 33
    assert (m.phases_completed, m.phases_total) == (1, 3)
    assert (m.tasks_completed, m.tasks_total) == (2, 4)


def test_overspend_snapshot():
    g = goal(budget_amount=1000, expenses=[expense(1100)], target_date=NOW + days(30))
    m = compute_metrics(g, NOW)

    assert m.budget_used_pct == 110
    assert m.breakdown.budget == 0
    assert m.total_expenses == 1100
    assert m.budget_remaining == -100


def test_compute_metrics_is_idempotent_and_pure():
    g = goal(
        budget_amount=500,
        expenses=[expense(120, paid_by='p1')],
        target_date=NOW + days(20),
        partner_ids=['p1', 'p2'],
        milestones=[milestone(tasks=[task("a", assigned_to='p1', created_at=NOW - days(1))])],
    )
    before = copy.deepcopy(g)

    first = compute_metrics(g, NOW)
    second = compute_metrics(g, NOW)

    assert first == second
    assert g == before


def test_naive_now_is_treated_as_utc():
    g = goal(target_date=NOW + days(10))
    aware = compute_metrics(g, NOW)
    naive = compute_metrics(g, NOW.replace(tzinfo=None))

    assert naive == aware


def test_tolerant_input_values():
    g = goal(
        created_at="2024-05-01T12:00:00Z",
        target_date=date(2024, 7, 1),
        budget_amount=None,
        expenses=[expense(None), expense(30)],
    )
    m = compute_metrics(g, NOW)

    assert m.total_expenses == 30
    assert m.budget_used_pct == 0
    assert m.days_remaining == 30
    assert 0 < m.time_elapsed_pct < 100


def test_snapshot_serializes_to_plain_dict():
    data = compute_metrics(goal(target_date=NOW + days(3)), NOW).to_dict()

    assert data['computed_at'] == NOW.isoformat()
    assert data['breakdown'] == {'progress': 0, 'timeline': 3, 'budget': 8, 'activity': 3}
    assert data['assignee_balance'] == {'counts': {}, 'score': 100}


def test_velocity_input_from_snapshot():
    g = goal(target_date=NOW + days(30), created_at=NOW - days(30))
    item = velocity_input(g, compute_metrics(g, NOW))

    assert item.has_target_date is True
    assert item.time_elapsed_pct == 50
    assert item.progress_pct == 0
