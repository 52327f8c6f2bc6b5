# apps/dreams/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone
from apps.dreams.domain.entities import ExpenseStatus


class Dream(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='dreams')
    title = models.CharField(max_length=200)

    # default zamiast auto_now_add - importy i testy mogą podać własną datę
    created_at = models.DateTimeField(default=timezone.now)
    target_date = models.DateField(null=True, blank=True)
    budget_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    completed = models.BooleanField(default=False)

    # Identyfikatory partnerów, np. ['partner1', 'partner2']
    partners = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.title


class Milestone(models.Model):
    dream = models.ForeignKey(Dream, on_delete=models.CASCADE, related_name='milestones')
    title = models.CharField(max_length=200)
    position = models.PositiveIntegerField(default=0)

    target_date = models.DateField(null=True, blank=True)
    budget_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    completed = models.BooleanField(default=False)

    # Etapy roadmapy: lista {"title": "...", "completed": false}
    # Indeks na liście = roadmap_phase_index w zadaniach
    roadmap_phases = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.dream.title}: {self.title}"


class Task(models.Model):
    milestone = models.ForeignKey(Milestone, on_delete=models.CASCADE, related_name='tasks')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    due_date = models.DateTimeField(null=True, blank=True)

    assigned_to = models.CharField(max_length=100, blank=True)
    roadmap_phase_index = models.IntegerField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.title


class Expense(models.Model):
    class StatusChoices(models.TextChoices):
        PENDING = ExpenseStatus.PENDING.value, 'Pending'
        PAID = ExpenseStatus.PAID.value, 'Paid'
        CANCELLED = ExpenseStatus.CANCELLED.value, 'Cancelled'

    milestone = models.ForeignKey(Milestone, on_delete=models.CASCADE, related_name='expenses')
    title = models.CharField(max_length=200, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING
    )
    due_date = models.DateField(null=True, blank=True)
    paid_by = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.title or 'Expense'} ({self.amount})"
