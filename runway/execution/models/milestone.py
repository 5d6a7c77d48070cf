# ============================================
# execution/models/milestone.py
# ============================================
from django.db import models

from .choices import FundingCategory


class Milestone(models.Model):
    class MilestoneStatus(models.TextChoices):
        PLANNED = 'planned', 'Planned'
        ACTIVE = 'active', 'Active'
        COMPLETED = 'completed', 'Completed'

    workspace = models.ForeignKey(
        'Workspace',
        on_delete=models.CASCADE,
        related_name='milestones'
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=MilestoneStatus.choices,
        default=MilestoneStatus.PLANNED
    )
    progress_percentage = models.IntegerField(default=0)
    order = models.IntegerField(default=0)
    funding_category = models.CharField(
        max_length=20,
        choices=FundingCategory.choices,
        null=True,
        blank=True
    )
    estimated_spend_range_min = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    estimated_spend_range_max = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'milestones'
        ordering = ['order', 'created_at']
        indexes = [
            models.Index(fields=['workspace', 'order']),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"
