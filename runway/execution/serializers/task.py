# ============================================
# execution/serializers/task.py
# ============================================
from rest_framework import serializers
from execution.models import Task


class TaskCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    milestone_id = serializers.IntegerField(required=False, allow_null=True)
    sprint_id = serializers.IntegerField(required=False, allow_null=True)
    owner_id = serializers.CharField(max_length=128, required=False, allow_null=True, allow_blank=True)
    status = serializers.ChoiceField(choices=Task.TaskStatus.choices, default=Task.TaskStatus.TODO)


class TaskUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    status = serializers.ChoiceField(choices=Task.TaskStatus.choices, required=False)
    owner_id = serializers.CharField(max_length=128, required=False, allow_null=True, allow_blank=True)
    milestone_id = serializers.IntegerField(required=False, allow_null=True)
    # null moves the task back to the backlog
    sprint_id = serializers.IntegerField(required=False, allow_null=True)


class TaskOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = [
            'id', 'workspace_id', 'milestone_id', 'sprint_id', 'title',
            'owner_id', 'status', 'created_at', 'updated_at'
        ]
