# ============================================
# execution/serializers/milestone.py
# ============================================
from rest_framework import serializers
from execution.models import FundingCategory, Milestone


class MilestoneCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    order = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    status = serializers.ChoiceField(
        choices=Milestone.MilestoneStatus.choices,
        default=Milestone.MilestoneStatus.PLANNED
    )
    funding_category = serializers.ChoiceField(
        choices=FundingCategory.choices,
        required=False,
        allow_null=True
    )
    estimated_spend_range_min = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    estimated_spend_range_max = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True, min_value=0
    )


class MilestoneUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    order = serializers.IntegerField(required=False, min_value=0)
    status = serializers.ChoiceField(choices=Milestone.MilestoneStatus.choices, required=False)
    funding_category = serializers.ChoiceField(
        choices=FundingCategory.choices,
        required=False,
        allow_null=True
    )
    estimated_spend_range_min = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    estimated_spend_range_max = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True, min_value=0
    )


class MilestoneOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = Milestone
        fields = [
            'id', 'workspace_id', 'title', 'description', 'status',
            'progress_percentage', 'order', 'funding_category',
            'estimated_spend_range_min', 'estimated_spend_range_max',
            'created_at', 'updated_at'
        ]
