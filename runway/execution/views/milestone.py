# ============================================
# execution/views/milestone.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from execution.exceptions import NotFoundError
from execution.serializers.milestone import (
    MilestoneCreateSerializer,
    MilestoneUpdateSerializer,
    MilestoneOutputSerializer,
)
from execution.selectors.milestone import MilestoneSelector
from execution.services.membership import MembershipService
from execution.services.milestone import MilestoneService
from .utils import extend_schema, path_int, responses_ok, std_errors, get_workspace_or_404, user_id_of


def _get_milestone_or_404(milestone_id):
    milestone = MilestoneSelector.get_milestone_by_id(milestone_id)
    if not milestone:
        raise NotFoundError("Milestone not found")
    return milestone


class MilestoneListCreateAPIView(APIView):
    """
    GET: Milestones of a workspace, in roadmap order
    POST: Create a milestone (founder / team member)

    Request body (POST):
    - title: string (required)
    - description: string (optional)
    - order: int (optional, defaults to the end of the roadmap)
    - funding_category: string (optional)
    - estimated_spend_range_min / estimated_spend_range_max: decimal (optional)
    """

    @extend_schema(tags=["Milestones"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={**responses_ok(MilestoneOutputSerializer, many=True), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        milestones = MilestoneSelector.get_milestones_for_workspace(workspace.id)
        return Response(MilestoneOutputSerializer(milestones, many=True).data)

    @extend_schema(tags=["Milestones"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=MilestoneCreateSerializer, responses={201: MilestoneOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = MilestoneCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        milestone = MilestoneService.create_milestone(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(MilestoneOutputSerializer(milestone).data, status=status.HTTP_201_CREATED)


class MilestoneDetailAPIView(APIView):
    """
    GET: Retrieve a milestone
    PATCH: Update a milestone; moving it to 'completed' posts to Slack

    Path params:
    - milestone_id: int
    """

    @extend_schema(tags=["Milestones"], parameters=[path_int("milestone_id", "Milestone ID")],
                   responses={**responses_ok(MilestoneOutputSerializer), **std_errors()})
    def get(self, request, milestone_id):
        milestone = _get_milestone_or_404(milestone_id)
        MembershipService.check_member(milestone.workspace, user_id_of(request))
        return Response(MilestoneOutputSerializer(milestone).data)

    @extend_schema(tags=["Milestones"], parameters=[path_int("milestone_id", "Milestone ID")],
                   request=MilestoneUpdateSerializer,
                   responses={**responses_ok(MilestoneOutputSerializer), **std_errors()})
    def patch(self, request, milestone_id):
        milestone = _get_milestone_or_404(milestone_id)

        serializer = MilestoneUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        milestone = MilestoneService.update_milestone(
            milestone=milestone,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(MilestoneOutputSerializer(milestone).data)
