# ============================================
# onboarding/serializers/onboarding.py
# ============================================
from rest_framework import serializers


class SlideUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


class SlideSerializer(serializers.Serializer):
    slide_index = serializers.IntegerField(min_value=0)
    text = serializers.CharField(allow_blank=True)


class PitchExtractSerializer(serializers.Serializer):
    slides = SlideSerializer(many=True, allow_empty=False)


class PitchExtractionOutputSerializer(serializers.Serializer):
    startup_name = serializers.CharField(allow_null=True)
    problem_statement = serializers.CharField(allow_null=True)
    solution_description = serializers.CharField(allow_null=True)
    milestones = serializers.ListField(child=serializers.CharField())
    traction = serializers.CharField(allow_null=True)
    confidence_notes = serializers.CharField()


class DraftCreateSerializer(serializers.Serializer):
    """The draft the founder reviewed and edited"""
    startup_name = serializers.CharField(max_length=255)
    problem_statement = serializers.CharField(required=False, allow_blank=True)
    solution_description = serializers.CharField(required=False, allow_blank=True)
    traction = serializers.CharField(required=False, allow_blank=True)
    milestones = serializers.ListField(
        child=serializers.CharField(max_length=255, allow_blank=True),
        required=False,
        default=list
    )
    sprint_week_start = serializers.DateField(required=False, allow_null=True)
    sprint_week_end = serializers.DateField(required=False, allow_null=True)
