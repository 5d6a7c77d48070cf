# ============================================
# execution/serializers/validation.py
# ============================================
from rest_framework import serializers
from execution.models import ValidationEntry


class ValidationCreateSerializer(serializers.Serializer):
    validation_type = serializers.ChoiceField(choices=ValidationEntry.ValidationType.choices)
    summary = serializers.CharField()
    qualitative_notes = serializers.CharField(required=False, allow_blank=True, default='')
    milestone_id = serializers.IntegerField(required=False, allow_null=True)
    sprint_id = serializers.IntegerField(required=False, allow_null=True)


class ExternalValidationSerializer(serializers.Serializer):
    """Public feedback form behind a shared link"""
    validation_type = serializers.ChoiceField(
        choices=ValidationEntry.ValidationType.choices,
        default=ValidationEntry.ValidationType.SURVEY
    )
    source_type = serializers.ChoiceField(choices=ValidationEntry.SourceType.choices)
    feedback_text = serializers.CharField()
    summary = serializers.CharField(required=False, allow_blank=True, default='')
    confidence_score = serializers.IntegerField(required=False, allow_null=True, min_value=1, max_value=5)
    milestone_id = serializers.IntegerField(required=False, allow_null=True)


class ValidationOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = ValidationEntry
        fields = [
            'id', 'workspace_id', 'sprint_id', 'milestone_id', 'validation_type',
            'summary', 'qualitative_notes', 'created_by', 'created_at', 'origin',
            'source_type', 'feedback_text', 'confidence_score'
        ]
