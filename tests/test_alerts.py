import pytest

from apps.dreams.domain.entities import AlertSeverity, AlertType
from apps.dreams.domain.services.alerts import AlertGenerator
from apps.dreams.domain.services.metrics import compute_alerts, compute_metrics
from tests.factories import NOW, days, expense, goal, metrics, milestone, task


def alerts_for(g, now=NOW):
    return compute_alerts(g, compute_metrics(g, now), now)


def of_type(alerts, alert_type):
    return [a for a in alerts if a.type == alert_type]


class TestBudgetAlerts:
    def test_over_budget_is_critical(self):
        g = goal(budget_amount=1000, expenses=[expense(600), expense(500)])
        budget = of_type(alerts_for(g), AlertType.BUDGET)

        assert len(budget) == 1
        assert budget[0].severity == AlertSeverity.CRITICAL
        assert budget[0].message == "Over budget by €100"
        assert budget[0].action == "Review budget allocation"

    def test_nearly_spent_is_warning(self):
        g = goal(budget_amount=1000, expenses=[expense(950)])
        [alert] = AlertGenerator().budget_alerts(g)

        assert alert.severity == AlertSeverity.WARNING
        assert alert.message == "95% of budget used (€50 left)"

    def test_under_budget_needs_enough_expenses(self):
        g = goal(budget_amount=1000, expenses=[expense(50) for _ in range(6)])
        [alert] = AlertGenerator().budget_alerts(g)

        assert alert.severity == AlertSeverity.INFO
        assert alert.message == "Great! You're €700 under budget"

        g = goal(budget_amount=1000, expenses=[expense(50) for _ in range(5)])
        assert AlertGenerator().budget_alerts(g) == []

    def test_no_budget_no_alert(self):
        assert AlertGenerator().budget_alerts(goal(expenses=[expense(5000)])) == []
        assert AlertGenerator().budget_alerts(goal(budget_amount=0, expenses=[expense(5)])) == []

    def test_currency_symbol_is_configurable(self):
        g = goal(budget_amount=1000, expenses=[expense(2234.5)])
        [alert] = AlertGenerator(currency='$').budget_alerts(g)
        assert alert.message == "Over budget by $1,234.5"


class TestDeadlineAlerts:
    @pytest.mark.parametrize("offset, severity, message", [
        (-3, AlertSeverity.CRITICAL, "3 days overdue"),
        (0, AlertSeverity.CRITICAL, "Due today!"),
        (1, AlertSeverity.WARNING, "Only 1 day remaining"),
        (5, AlertSeverity.WARNING, "Only 5 days remaining"),
        (7, AlertSeverity.WARNING, "Only 7 days remaining"),
        (12, AlertSeverity.INFO, "12 days until target date"),
        (30, AlertSeverity.INFO, "30 days until target date"),
    ])
    def test_deadline_bands(self, offset, severity, message):
        g = goal(target_date=NOW + days(offset))
        deadline = of_type(alerts_for(g), AlertType.DEADLINE)

        assert len(deadline) == 1
        assert deadline[0].severity == severity
        assert deadline[0].message == message

    def test_far_deadline_no_alert(self):
        assert of_type(alerts_for(goal(target_date=NOW + days(31))), AlertType.DEADLINE) == []

    def test_no_target_no_alert(self):
        assert of_type(alerts_for(goal()), AlertType.DEADLINE) == []


class TestTaskAlerts:
    def test_overdue_due_soon_and_unassigned(self):
        g = goal(milestones=[milestone(tasks=[
            task("late", due_date=NOW - days(1), assigned_to='p1'),
            task("soon", due_date=NOW + days(2), assigned_to='p2'),
            task("edge", due_date=NOW + days(3)),
            task("far", due_date=NOW + days(10)),
            task("done late", due_date=NOW - days(5), completed=True),
        ])])
        alerts = AlertGenerator().task_alerts(g, NOW)

        assert [(a.severity, a.message) for a in alerts] == [
            (AlertSeverity.WARNING, "1 task overdue"),
            (AlertSeverity.INFO, "2 tasks due in next 3 days"),
            (AlertSeverity.INFO, "2 tasks not assigned"),
        ]

    def test_completed_tasks_never_alert(self):
        g = goal(milestones=[milestone(tasks=[task(completed=True, due_date=NOW - days(1))])])
        assert AlertGenerator().task_alerts(g, NOW) == []


class TestProgressAlerts:
    @pytest.mark.parametrize("score, severity", [
        (0, AlertSeverity.CRITICAL),
        (49, AlertSeverity.CRITICAL),
        (50, AlertSeverity.WARNING),
        (69, AlertSeverity.WARNING),
    ])
    def test_low_health(self, score, severity):
        [alert] = AlertGenerator().progress_alerts(metrics(health_score=score))
        assert alert.type == AlertType.PROGRESS
        assert alert.severity == severity

    def test_healthy_goal_has_no_progress_alert(self):
        assert AlertGenerator().progress_alerts(metrics(health_score=70)) == []


def test_alert_order_is_budget_deadline_task_progress():
    g = goal(
        budget_amount=100,
        expenses=[expense(200)],
        target_date=NOW + days(2),
        milestones=[milestone(tasks=[task("open", created_at=NOW - days(20))])],
    )
    types = [a.type for a in alerts_for(g)]

    assert types == [AlertType.BUDGET, AlertType.DEADLINE, AlertType.TASK, AlertType.PROGRESS]


def test_quiet_healthy_goal_has_no_alerts():
    g = goal(completed=True)
    m = compute_metrics(g, NOW)

    assert m.health_score >= 70
    assert compute_alerts(g, m, NOW) == []


def test_scenario_single_deadline_warning():
    g = goal(created_at=NOW - days(5), target_date=NOW + days(5))
    deadline = of_type(alerts_for(g), AlertType.DEADLINE)

    assert len(deadline) == 1
    assert deadline[0].severity == AlertSeverity.WARNING
    assert deadline[0].message == "Only 5 days remaining"
