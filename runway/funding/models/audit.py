# ============================================
# funding/models/audit.py
# ============================================
from django.db import models


class ExecutionAuditLog(models.Model):
    """Append-only trail of funding and funded-execution events"""

    class EventType(models.TextChoices):
        FUNDING_CREATED = 'FUNDING_CREATED', 'Funding created'
        ALLOCATION_UPDATED = 'ALLOCATION_UPDATED', 'Allocation updated'
        SPEND_LOGGED = 'SPEND_LOGGED', 'Spend logged'
        FUNDED_SPRINT_COMPLETED = 'FUNDED_SPRINT_COMPLETED', 'Funded sprint completed'

    workspace = models.ForeignKey(
        'execution.Workspace',
        on_delete=models.CASCADE,
        related_name='audit_log'
    )
    event_type = models.CharField(max_length=32, choices=EventType.choices)
    entity_id = models.CharField(max_length=64)
    summary = models.CharField(max_length=500)
    created_by = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'execution_audit_log'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.event_type}: {self.summary[:40]}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Audit log entries are append-only")
        super().save(*args, **kwargs)
