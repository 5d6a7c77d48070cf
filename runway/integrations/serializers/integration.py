# ============================================
# integrations/serializers/integration.py
# ============================================
from rest_framework import serializers
from integrations.models import WorkspaceIntegration
from integrations.services.notify import EVENT_TYPES


class SlackCompleteSerializer(serializers.Serializer):
    setup_id = serializers.UUIDField()
    channel_id = serializers.CharField(max_length=32)
    channel_name = serializers.CharField(max_length=255, allow_blank=True)


class NotifySerializer(serializers.Serializer):
    workspace_id = serializers.IntegerField()
    event_type = serializers.ChoiceField(choices=EVENT_TYPES)
    metadata = serializers.DictField()


class SlackChannelSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()


class SlackSetupOutputSerializer(serializers.Serializer):
    team_name = serializers.CharField()
    channels = SlackChannelSerializer(many=True)


class IntegrationOutputSerializer(serializers.ModelSerializer):
    """Safe view of an integration: the bot token is never included"""
    type = serializers.CharField(source='integration_type', read_only=True)

    class Meta:
        model = WorkspaceIntegration
        fields = [
            'id', 'workspace_id', 'type', 'slack_team_id',
            'channel_id', 'channel_name', 'created_by', 'connected_at'
        ]
