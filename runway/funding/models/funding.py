# ============================================
# funding/models/funding.py
# ============================================
from django.db import models

from execution.models import FundingCategory


class FundingRound(models.Model):
    class Source(models.TextChoices):
        ANGEL = 'Angel', 'Angel'
        VC = 'VC', 'VC'
        GRANT = 'Grant', 'Grant'
        ACCELERATOR = 'Accelerator', 'Accelerator'
        BOOTSTRAPPED = 'Bootstrapped', 'Bootstrapped'

    workspace = models.ForeignKey(
        'execution.Workspace',
        on_delete=models.CASCADE,
        related_name='funding_rounds'
    )
    name = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=16, decimal_places=2)
    currency = models.CharField(max_length=3, default='INR')
    source = models.CharField(max_length=20, choices=Source.choices)
    date = models.DateField()
    notes = models.TextField(null=True, blank=True)
    created_by = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'funding_rounds'
        ordering = ['-date', '-id']

    def __str__(self):
        return f"{self.name} {self.amount} {self.currency}"


class FundingAllocation(models.Model):
    workspace = models.ForeignKey(
        'execution.Workspace',
        on_delete=models.CASCADE,
        related_name='funding_allocations'
    )
    funding_round = models.ForeignKey(
        'FundingRound',
        on_delete=models.CASCADE,
        related_name='allocations'
    )
    category = models.CharField(max_length=20, choices=FundingCategory.choices)
    allocated_amount = models.DecimalField(max_digits=16, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'funding_allocations'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.category}: {self.allocated_amount}"


class SpendLog(models.Model):
    workspace = models.ForeignKey(
        'execution.Workspace',
        on_delete=models.CASCADE,
        related_name='spend_logs'
    )
    funding_round = models.ForeignKey(
        'FundingRound',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='spend_logs'
    )
    category = models.CharField(max_length=20, choices=FundingCategory.choices)
    amount = models.DecimalField(max_digits=16, decimal_places=2)
    date = models.DateField()
    linked_sprint = models.ForeignKey(
        'execution.Sprint',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='spend_logs'
    )
    linked_milestone = models.ForeignKey(
        'execution.Milestone',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='spend_logs'
    )
    note = models.TextField(blank=True, default='')
    created_by = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'spend_logs'
        ordering = ['-date', '-id']

    def __str__(self):
        return f"{self.category} {self.amount} on {self.date}"
