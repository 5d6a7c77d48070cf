from django.contrib import admin
from .models import WorkspaceIntegration, DeliveryLog


@admin.register(WorkspaceIntegration)
class WorkspaceIntegrationAdmin(admin.ModelAdmin):
    list_display = ("workspace", "integration_type", "channel_name", "slack_team_id", "connected_at")
    exclude = ("bot_token",)


@admin.register(DeliveryLog)
class DeliveryLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "workspace_id", "event_type", "channel_id", "delivered", "provider_status_code")
    list_filter = ("event_type", "delivered")
