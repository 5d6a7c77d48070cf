# ============================================
# execution/views/task.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from execution.exceptions import NotFoundError
from execution.pagination import DefaultPagination
from execution.serializers.task import (
    TaskCreateSerializer,
    TaskUpdateSerializer,
    TaskOutputSerializer,
)
from execution.selectors.task import TaskSelector
from execution.services.membership import MembershipService
from execution.services.task import TaskService
from .utils import (
    extend_schema, path_int, q_int, q_str, q_bool, responses_ok, std_errors,
    get_workspace_or_404, user_id_of, query_int,
)


class TaskListCreateAPIView(APIView):
    """
    GET: Workspace tasks, most recently updated first
    POST: Create a task (founder / team member)

    Query params (GET):
    - status: string (optional: todo/in_progress/done)
    - milestone_id: int (optional)
    - backlog: bool (optional, only tasks outside any sprint)
    - page: int
    - page_size: int

    Request body (POST):
    - title: string (required)
    - milestone_id: int (optional)
    - sprint_id: int (optional, must be an open sprint)
    - owner_id: string (optional)
    """

    @extend_schema(
        tags=["Tasks"],
        parameters=[
            path_int("workspace_id", "Workspace ID"),
            q_str("status", "todo / in_progress / done"),
            q_int("milestone_id", "Only tasks under this milestone"),
            q_bool("backlog", "Only tasks outside any sprint"),
        ],
        responses={**responses_ok(TaskOutputSerializer, many=True), **std_errors()},
    )
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        tasks = TaskSelector.get_tasks_for_workspace(
            workspace.id,
            status=request.query_params.get('status'),
            milestone_id=query_int(request, 'milestone_id'),
            backlog=request.query_params.get('backlog', '').lower() in ('1', 'true', 'yes'),
        )

        paginator = DefaultPagination()
        page = paginator.paginate_queryset(tasks, request)
        serializer = TaskOutputSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(tags=["Tasks"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=TaskCreateSerializer, responses={201: TaskOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = TaskService.create_task(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(TaskOutputSerializer(task).data, status=status.HTTP_201_CREATED)


class TaskDetailAPIView(APIView):
    """
    GET: Retrieve a task
    PATCH: Update status / title / owner / milestone, or move between backlog and an open sprint

    Path params:
    - task_id: int
    """

    @staticmethod
    def _get_task(task_id):
        task = TaskSelector.get_task_by_id(task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    @extend_schema(tags=["Tasks"], parameters=[path_int("task_id", "Task ID")],
                   responses={**responses_ok(TaskOutputSerializer), **std_errors()})
    def get(self, request, task_id):
        task = self._get_task(task_id)
        MembershipService.check_member(task.workspace, user_id_of(request))
        return Response(TaskOutputSerializer(task).data)

    @extend_schema(tags=["Tasks"], parameters=[path_int("task_id", "Task ID")],
                   request=TaskUpdateSerializer, responses={**responses_ok(TaskOutputSerializer), **std_errors()})
    def patch(self, request, task_id):
        task = self._get_task(task_id)

        serializer = TaskUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = TaskService.update_task(
            task=task,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(TaskOutputSerializer(task).data)
