# ============================================
# execution/models/ledger.py
# ============================================
from django.db import models
from django.utils import timezone


class LedgerEntry(models.Model):
    """
    Hash-tagged record of a sprint commitment or completion.

    Rows are append-only: ``save`` refuses updates and ``delete`` is disabled.
    The sprint is kept as a bare id so the entry survives sprint deletion.
    """

    class EntryType(models.TextChoices):
        COMMITMENT = 'commitment', 'Commitment'
        COMPLETION = 'completion', 'Completion'

    workspace = models.ForeignKey(
        'Workspace',
        on_delete=models.CASCADE,
        related_name='ledger_entries'
    )
    sprint_id = models.BigIntegerField(db_index=True)
    entry_type = models.CharField(max_length=12, choices=EntryType.choices)
    hash = models.CharField(max_length=64)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    payload_summary = models.CharField(max_length=255)

    class Meta:
        db_table = 'ledger_entries'
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['workspace', '-timestamp']),
        ]

    def __str__(self):
        return f"{self.entry_type} sprint#{self.sprint_id} {self.hash[:12]}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Ledger entries are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Ledger entries are append-only")
