# ============================================
# execution/models/validation.py
# ============================================
from django.db import models


class ValidationEntry(models.Model):
    class ValidationType(models.TextChoices):
        INTERVIEW = 'interview', 'Interview'
        SURVEY = 'survey', 'Survey'
        EXPERIMENT = 'experiment', 'Experiment'

    class Origin(models.TextChoices):
        INTERNAL = 'internal', 'Internal'
        EXTERNAL_LINK = 'external_link', 'External link'

    class SourceType(models.TextChoices):
        CUSTOMER = 'customer', 'Customer'
        POTENTIAL_CUSTOMER = 'potential_customer', 'Potential customer'
        INVESTOR = 'investor', 'Investor'
        TEAM_MEMBER = 'team_member', 'Team member'
        OTHER = 'other', 'Other'

    workspace = models.ForeignKey(
        'Workspace',
        on_delete=models.CASCADE,
        related_name='validations'
    )
    sprint = models.ForeignKey(
        'Sprint',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='validations'
    )
    milestone = models.ForeignKey(
        'Milestone',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='validations'
    )
    validation_type = models.CharField(max_length=12, choices=ValidationType.choices)
    summary = models.TextField()
    qualitative_notes = models.TextField(blank=True, default='')
    created_by = models.CharField(max_length=128, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    origin = models.CharField(
        max_length=16,
        choices=Origin.choices,
        default=Origin.INTERNAL
    )
    source_type = models.CharField(max_length=20, choices=SourceType.choices, null=True, blank=True)
    feedback_text = models.TextField(null=True, blank=True)
    confidence_score = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        db_table = 'validations'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['workspace', '-created_at']),
        ]

    def __str__(self):
        return f"{self.validation_type}: {self.summary[:40]}"
