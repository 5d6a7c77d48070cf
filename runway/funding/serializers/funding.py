# ============================================
# funding/serializers/funding.py
# ============================================
from rest_framework import serializers
from execution.models import FundingCategory
from funding.models import ExecutionAuditLog, FundingAllocation, FundingRound, SpendLog


class FundingRoundCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    currency = serializers.CharField(max_length=3, default='INR')
    source = serializers.ChoiceField(choices=FundingRound.Source.choices)
    date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class FundingRoundNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(allow_blank=True, allow_null=True)


class AllocationCreateSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=FundingCategory.choices)
    allocated_amount = serializers.DecimalField(max_digits=16, decimal_places=2)


class SpendCreateSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=FundingCategory.choices)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    date = serializers.DateField()
    note = serializers.CharField(required=False, allow_blank=True, default='')
    funding_round_id = serializers.IntegerField(required=False, allow_null=True)
    linked_sprint_id = serializers.IntegerField(required=False, allow_null=True)
    linked_milestone_id = serializers.IntegerField(required=False, allow_null=True)


class SpendUpdateSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=FundingCategory.choices, required=False)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2, required=False)
    date = serializers.DateField(required=False)
    note = serializers.CharField(required=False, allow_blank=True)
    funding_round_id = serializers.IntegerField(required=False, allow_null=True)
    linked_sprint_id = serializers.IntegerField(required=False, allow_null=True)
    linked_milestone_id = serializers.IntegerField(required=False, allow_null=True)


class FundingRoundOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = FundingRound
        fields = ['id', 'workspace_id', 'name', 'amount', 'currency', 'source', 'date', 'notes', 'created_by', 'created_at']


class AllocationOutputSerializer(serializers.ModelSerializer):
    funding_round_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = FundingAllocation
        fields = ['id', 'workspace_id', 'funding_round_id', 'category', 'allocated_amount', 'created_at']


class SpendOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = SpendLog
        fields = [
            'id', 'workspace_id', 'funding_round_id', 'category', 'amount', 'date',
            'linked_sprint_id', 'linked_milestone_id', 'note', 'created_by', 'created_at'
        ]


class AuditLogOutputSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='event_type', read_only=True)

    class Meta:
        model = ExecutionAuditLog
        fields = ['id', 'workspace_id', 'type', 'entity_id', 'summary', 'created_by', 'created_at']
