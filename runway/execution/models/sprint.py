# ============================================
# execution/models/sprint.py
# ============================================
from django.db import models

from .choices import FundingCategory


class Sprint(models.Model):
    class SprintState(models.TextChoices):
        OPEN = 'open', 'Open'
        LOCKED = 'locked', 'Locked'
        CLOSED = 'closed', 'Closed'

    workspace = models.ForeignKey(
        'Workspace',
        on_delete=models.CASCADE,
        related_name='sprints'
    )
    week_start_date = models.DateField()
    week_end_date = models.DateField()
    goals = models.JSONField(default=list)  # [{"id": ..., "text": ...}]
    task_ids = models.JSONField(default=list)  # committed scope, in insertion order
    locked = models.BooleanField(default=False)
    completed = models.BooleanField(default=False)
    # Written once by close; never touched again
    completion_stats = models.JSONField(null=True, blank=True)
    funding_category = models.CharField(
        max_length=20,
        choices=FundingCategory.choices,
        null=True,
        blank=True
    )
    estimated_spend_range = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    created_by = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sprints'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['workspace', '-created_at']),
        ]

    def __str__(self):
        return f"Sprint {self.label} ({self.state})"

    @property
    def state(self) -> str:
        if self.completed:
            return self.SprintState.CLOSED
        if self.locked:
            return self.SprintState.LOCKED
        return self.SprintState.OPEN

    @property
    def label(self) -> str:
        return f"{self.week_start_date} → {self.week_end_date}"
