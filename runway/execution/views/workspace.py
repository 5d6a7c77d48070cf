# ============================================
# execution/views/workspace.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import serializers, status

from execution.pagination import DefaultPagination
from execution.serializers.workspace import (
    WorkspaceCreateSerializer,
    WorkspaceUpdateSerializer,
    WorkspaceOutputSerializer,
    WorkspaceListOutputSerializer,
    MemberAddSerializer,
    MemberOutputSerializer,
    InviteCreateSerializer,
    InviteAcceptSerializer,
    InviteOutputSerializer,
)
from execution.selectors.workspace import WorkspaceSelector
from execution.services.membership import MembershipService
from execution.services.workspace import WorkspaceService, InviteService
from .utils import (
    extend_schema, inline_serializer, path_int, responses_ok, std_errors,
    get_workspace_or_404, user_id_of,
)


class WorkspaceListCreateAPIView(APIView):
    """
    GET: Workspaces the current user belongs to, newest first
    POST: Create a workspace; the caller becomes its founder

    Request body (POST):
    - name: string (required)
    - stage: string (optional: Idea/MVP/Early Traction)
    """

    @extend_schema(tags=["Workspaces"], responses={**responses_ok(WorkspaceListOutputSerializer, many=True), **std_errors()})
    def get(self, request):
        workspaces = WorkspaceSelector.get_workspaces_for_user(user_id_of(request))

        paginator = DefaultPagination()
        page = paginator.paginate_queryset(workspaces, request)
        serializer = WorkspaceListOutputSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(tags=["Workspaces"], request=WorkspaceCreateSerializer,
                   responses={201: WorkspaceOutputSerializer, **std_errors()})
    def post(self, request):
        serializer = WorkspaceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        workspace = WorkspaceService.create_workspace(
            founder_id=user_id_of(request),
            founder_email=getattr(request.user, 'email', '') or '',
            founder_display_name=request.user.get_full_name(),
            **serializer.validated_data
        )
        workspace = WorkspaceSelector.get_workspace_by_id(workspace.id)
        return Response(WorkspaceOutputSerializer(workspace).data, status=status.HTTP_201_CREATED)


class WorkspaceDetailAPIView(APIView):
    """
    GET: Retrieve a workspace with its members (members only)
    PATCH: Update name / stage (founder)

    Path params:
    - workspace_id: int
    """

    @extend_schema(tags=["Workspaces"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={**responses_ok(WorkspaceOutputSerializer), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))
        return Response(WorkspaceOutputSerializer(workspace).data)

    @extend_schema(tags=["Workspaces"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=WorkspaceUpdateSerializer,
                   responses={**responses_ok(WorkspaceOutputSerializer), **std_errors()})
    def patch(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = WorkspaceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        workspace = WorkspaceService.update_workspace(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(WorkspaceOutputSerializer(workspace).data)


class WorkspaceRoleAPIView(APIView):
    """
    GET: The caller's role in the workspace (founder/team_member/investor/none)
    """

    @extend_schema(
        tags=["Workspaces"],
        parameters=[path_int("workspace_id", "Workspace ID")],
        responses=responses_ok(inline_serializer(name="Role", fields={"role": serializers.CharField()})),
    )
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        return Response({'role': MembershipService.get_role(workspace, user_id_of(request))})


class MemberAddAPIView(APIView):
    """
    POST: Add a team member by email (founder). The member stays pending until they join.

    Request body:
    - email: string (required)
    - role: string (required: founder/team_member/investor)
    """

    @extend_schema(tags=["Workspaces"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=MemberAddSerializer, responses={201: MemberOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = MemberAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = WorkspaceService.add_member(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(MemberOutputSerializer(member).data, status=status.HTTP_201_CREATED)


class MemberRemoveAPIView(APIView):
    """
    DELETE: Remove a member (founder). The workspace creator cannot be removed.
    """

    @extend_schema(tags=["Workspaces"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={204: None, **std_errors()})
    def delete(self, request, workspace_id, member_user_id):
        workspace = get_workspace_or_404(workspace_id)
        WorkspaceService.remove_member(
            workspace=workspace,
            user_id=user_id_of(request),
            member_user_id=member_user_id
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class InviteCreateAPIView(APIView):
    """
    POST: Create an invite link token (founder)

    Request body:
    - role: string (required)
    - expires_at: datetime (optional)
    """

    @extend_schema(tags=["Invites"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=InviteCreateSerializer, responses={201: InviteOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = InviteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invite = InviteService.create_invite(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(InviteOutputSerializer(invite).data, status=status.HTTP_201_CREATED)


class InviteAcceptAPIView(APIView):
    """
    POST: Join the workspace with an invite token

    Request body:
    - token: string (required)
    """

    @extend_schema(tags=["Invites"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=InviteAcceptSerializer, responses={**responses_ok(MemberOutputSerializer), **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = InviteAcceptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = InviteService.accept_invite(
            workspace=workspace,
            token=serializer.validated_data['token'],
            user_id=user_id_of(request),
            email=getattr(request.user, 'email', '') or '',
        )
        return Response(MemberOutputSerializer(member).data)
