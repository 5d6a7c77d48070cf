# ============================================
# execution/views/validation.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework import status

from execution.serializers.validation import (
    ValidationCreateSerializer,
    ExternalValidationSerializer,
    ValidationOutputSerializer,
)
from execution.selectors.validation import ValidationSelector
from execution.services.membership import MembershipService
from execution.services.validation import ValidationService
from .utils import (
    extend_schema, path_int, q_int, q_str, responses_ok, std_errors,
    get_workspace_or_404, user_id_of, query_int,
)


class ValidationListCreateAPIView(APIView):
    """
    GET: Validation evidence, newest first (max 100)
    POST: Log an interview / survey / experiment (founder / team member)

    Query params (GET):
    - sprint_id: int (optional)
    - origin: string (optional: internal/external_link)
    """

    @extend_schema(
        tags=["Validation"],
        parameters=[
            path_int("workspace_id", "Workspace ID"),
            q_int("sprint_id", "Only entries linked to this sprint"),
            q_str("origin", "internal / external_link"),
        ],
        responses={**responses_ok(ValidationOutputSerializer, many=True), **std_errors()},
    )
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        entries = ValidationSelector.get_validations_for_workspace(
            workspace.id,
            sprint_id=query_int(request, 'sprint_id'),
            origin=request.query_params.get('origin'),
        )
        return Response(ValidationOutputSerializer(entries, many=True).data)

    @extend_schema(tags=["Validation"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=ValidationCreateSerializer, responses={201: ValidationOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = ValidationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry = ValidationService.log_validation(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(ValidationOutputSerializer(entry).data, status=status.HTTP_201_CREATED)


class ExternalValidationAPIView(APIView):
    """
    POST: Submit feedback through a shared link. No login required.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(tags=["Validation"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=ExternalValidationSerializer, responses={201: ValidationOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = ExternalValidationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry = ValidationService.submit_external_validation(
            workspace=workspace,
            **serializer.validated_data
        )
        return Response(ValidationOutputSerializer(entry).data, status=status.HTTP_201_CREATED)
