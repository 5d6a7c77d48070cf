# ============================================
# integrations/models/integration.py
# ============================================
import uuid

from django.db import models


class WorkspaceIntegration(models.Model):
    class IntegrationType(models.TextChoices):
        SLACK = 'slack', 'Slack'

    workspace = models.ForeignKey(
        'execution.Workspace',
        on_delete=models.CASCADE,
        related_name='integrations'
    )
    integration_type = models.CharField(
        max_length=16,
        choices=IntegrationType.choices,
        default=IntegrationType.SLACK
    )
    slack_team_id = models.CharField(max_length=32)
    channel_id = models.CharField(max_length=32)
    channel_name = models.CharField(max_length=255)
    # Never serialised back to clients
    bot_token = models.CharField(max_length=255)
    created_by = models.CharField(max_length=128)
    connected_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'workspace_integrations'
        ordering = ['-connected_at']

    def __str__(self):
        return f"{self.integration_type} #{self.channel_name} ({self.workspace_id})"


class SlackSetup(models.Model):
    """Token + channel list held between the OAuth callback and the channel picker"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    workspace = models.ForeignKey(
        'execution.Workspace',
        on_delete=models.CASCADE,
        related_name='slack_setups'
    )
    bot_token = models.CharField(max_length=255)
    slack_team_id = models.CharField(max_length=32)
    team_name = models.CharField(max_length=255, blank=True, default='')
    channels = models.JSONField(default=list)  # [{"id": ..., "name": ...}]
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'slack_setups'

    def __str__(self):
        return f"Slack setup {self.id} for {self.workspace_id}"


class DeliveryLog(models.Model):
    """One row per notification attempt, delivered or not"""
    workspace_id = models.BigIntegerField(db_index=True)
    event_type = models.CharField(max_length=32)
    text = models.TextField(blank=True, default='')
    payload = models.JSONField(null=True, blank=True)
    channel_id = models.CharField(max_length=32, blank=True, default='')

    delivered = models.BooleanField(default=False, db_index=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    provider_status_code = models.CharField(max_length=32, blank=True, default='')
    provider_response = models.JSONField(null=True, blank=True)
    last_error = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'delivery_logs'
        ordering = ['-created_at', '-id']

    def __str__(self):
        state = 'sent' if self.delivered else 'failed'
        return f"{self.event_type} -> {self.channel_id or '-'} ({state})"
