# ============================================
# execution/serializers/sprint.py
# ============================================
from rest_framework import serializers
from execution.models import FundingCategory, Sprint


class SprintGoalSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    text = serializers.CharField(max_length=500)


class SprintCreateSerializer(serializers.Serializer):
    week_start_date = serializers.DateField()
    week_end_date = serializers.DateField()
    task_ids = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=True
    )
    goals = SprintGoalSerializer(many=True, required=False)
    funding_category = serializers.ChoiceField(
        choices=FundingCategory.choices,
        required=False,
        allow_null=True
    )
    estimated_spend_range = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True, min_value=0
    )


class SprintOutputSerializer(serializers.ModelSerializer):
    state = serializers.CharField(read_only=True)
    label = serializers.CharField(read_only=True)

    class Meta:
        model = Sprint
        fields = [
            'id', 'workspace_id', 'week_start_date', 'week_end_date', 'label',
            'state', 'goals', 'task_ids', 'locked', 'completed', 'completion_stats',
            'funding_category', 'estimated_spend_range', 'created_by', 'created_at'
        ]
