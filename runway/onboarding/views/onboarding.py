# ============================================
# onboarding/views/onboarding.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework import status

from execution.serializers.workspace import WorkspaceOutputSerializer
from execution.selectors.workspace import WorkspaceSelector
from execution.views.utils import extend_schema, inline_serializer, responses_ok, std_errors, user_id_of
from onboarding.serializers.onboarding import (
    DraftCreateSerializer,
    PitchExtractSerializer,
    PitchExtractionOutputSerializer,
    SlideSerializer,
    SlideUploadSerializer,
)
from onboarding.services.draft import OnboardingService
from onboarding.services.pdf_extract import extract_slides
from onboarding.services.pitch_extract import extract_pitch


class ExtractSlidesAPIView(APIView):
    """
    POST: Upload a pitch deck PDF (multipart, field "file") and get its text per slide.
    The file is read in memory and not stored.
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        tags=["Onboarding"],
        request={"multipart/form-data": SlideUploadSerializer},
        responses={
            **responses_ok(inline_serializer(name="Slides", fields={"slides": SlideSerializer(many=True)})),
            **std_errors(),
        },
    )
    def post(self, request):
        slides = extract_slides(request.FILES.get('file'))
        return Response({'slides': slides})


class ExtractPitchAPIView(APIView):
    """
    POST: Structured extraction from slide text

    Request body:
    - slides: [{slide_index, text}] (required, non-empty)
    """

    @extend_schema(tags=["Onboarding"], request=PitchExtractSerializer,
                   responses={**responses_ok(PitchExtractionOutputSerializer), **std_errors()})
    def post(self, request):
        serializer = PitchExtractSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        extraction = extract_pitch(serializer.validated_data['slides'])
        return Response(PitchExtractionOutputSerializer(extraction).data)


class WorkspaceFromDraftAPIView(APIView):
    """
    POST: Create a workspace from the reviewed onboarding draft.
    With both sprint dates, an open first sprint is created as well.
    """

    @extend_schema(tags=["Onboarding"], request=DraftCreateSerializer,
                   responses={201: WorkspaceOutputSerializer, **std_errors()})
    def post(self, request):
        serializer = DraftCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        workspace = OnboardingService.create_workspace_from_draft(
            user_id=user_id_of(request),
            startup_name=data['startup_name'],
            milestones=data.get('milestones') or [],
            sprint_week_start=data.get('sprint_week_start'),
            sprint_week_end=data.get('sprint_week_end'),
            email=request.user.email or '',
            display_name=request.user.get_full_name(),
        )
        workspace = WorkspaceSelector.get_workspace_by_id(workspace.id)
        return Response(WorkspaceOutputSerializer(workspace).data, status=status.HTTP_201_CREATED)
