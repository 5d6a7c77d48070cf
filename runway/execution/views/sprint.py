# ============================================
# execution/views/sprint.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from execution.exceptions import NotFoundError
from execution.serializers.sprint import SprintCreateSerializer, SprintOutputSerializer
from execution.serializers.task import TaskOutputSerializer
from execution.selectors.sprint import SprintSelector
from execution.selectors.task import TaskSelector
from execution.services.membership import MembershipService
from execution.services.sprint import SprintService
from .utils import extend_schema, path_int, responses_ok, std_errors, unavailable, get_workspace_or_404, user_id_of


def _get_sprint_or_404(sprint_id):
    sprint = SprintSelector.get_sprint_by_id(sprint_id)
    if not sprint:
        raise NotFoundError("Sprint not found")
    return sprint


class SprintListCreateAPIView(APIView):
    """
    GET: Recent sprints of a workspace, newest first
    POST: Create an open sprint from backlog tasks (founder)

    Request body (POST):
    - week_start_date: date (required)
    - week_end_date: date (required, not before week_start_date)
    - task_ids: [int] (required, at least one, all in the backlog)
    - goals: [{id, text}] (optional)
    - funding_category: string (optional)
    - estimated_spend_range: decimal (optional)
    """

    @extend_schema(tags=["Sprints"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={**responses_ok(SprintOutputSerializer, many=True), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        sprints = SprintSelector.get_sprints_for_workspace(workspace.id)
        return Response(SprintOutputSerializer(sprints, many=True).data)

    @extend_schema(tags=["Sprints"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=SprintCreateSerializer, responses={201: SprintOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = SprintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sprint = SprintService.create_sprint(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(SprintOutputSerializer(sprint).data, status=status.HTTP_201_CREATED)


class SprintDetailAPIView(APIView):
    """
    GET: Retrieve a sprint
    DELETE: Delete an open or locked sprint; its tasks go back to the backlog (founder)

    Path params:
    - sprint_id: int
    """

    @extend_schema(tags=["Sprints"], parameters=[path_int("sprint_id", "Sprint ID")],
                   responses={**responses_ok(SprintOutputSerializer), **std_errors()})
    def get(self, request, sprint_id):
        sprint = _get_sprint_or_404(sprint_id)
        MembershipService.check_member(sprint.workspace, user_id_of(request))
        return Response(SprintOutputSerializer(sprint).data)

    @extend_schema(tags=["Sprints"], parameters=[path_int("sprint_id", "Sprint ID")],
                   responses={204: None, **std_errors()})
    def delete(self, request, sprint_id):
        sprint = _get_sprint_or_404(sprint_id)
        SprintService.delete_sprint(sprint=sprint, user_id=user_id_of(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class SprintTasksAPIView(APIView):
    """
    GET: Tasks currently in the sprint
    """

    @extend_schema(tags=["Sprints"], parameters=[path_int("sprint_id", "Sprint ID")],
                   responses={**responses_ok(TaskOutputSerializer, many=True), **std_errors()})
    def get(self, request, sprint_id):
        sprint = _get_sprint_or_404(sprint_id)
        MembershipService.check_member(sprint.workspace, user_id_of(request))

        tasks = TaskSelector.get_tasks_for_sprint(sprint.id)
        return Response(TaskOutputSerializer(tasks, many=True).data)


class SprintLockAPIView(APIView):
    """
    POST: Lock the sprint and record its commitment in the ledger (founder).
    Locking an already locked sprint returns it unchanged.
    """

    @extend_schema(tags=["Sprints"], parameters=[path_int("sprint_id", "Sprint ID")], request=None,
                   responses={**responses_ok(SprintOutputSerializer), **std_errors(unavailable())})
    def post(self, request, sprint_id):
        sprint = _get_sprint_or_404(sprint_id)
        sprint = SprintService.lock_sprint(sprint=sprint, user_id=user_id_of(request))
        return Response(SprintOutputSerializer(sprint).data)


class SprintCloseAPIView(APIView):
    """
    POST: Close a locked sprint, freezing its completion stats (founder)
    """

    @extend_schema(tags=["Sprints"], parameters=[path_int("sprint_id", "Sprint ID")], request=None,
                   responses={**responses_ok(SprintOutputSerializer), **std_errors(unavailable())})
    def post(self, request, sprint_id):
        sprint = _get_sprint_or_404(sprint_id)
        sprint = SprintService.close_sprint(sprint=sprint, user_id=user_id_of(request))
        return Response(SprintOutputSerializer(sprint).data)
