# ============================================
# execution/selectors/workspace.py
# ============================================
from typing import Optional
from django.db.models import QuerySet, Prefetch
from execution.models import Workspace, WorkspaceMember, WorkspaceInvite


class WorkspaceSelector:

    @staticmethod
    def get_workspace_by_id(workspace_id: int) -> Optional[Workspace]:
        """Get single workspace with its members"""
        try:
            return Workspace.objects.prefetch_related(
                Prefetch('members', queryset=WorkspaceMember.objects.order_by('created_at'))
            ).get(id=workspace_id)
        except Workspace.DoesNotExist:
            return None

    @staticmethod
    def get_workspaces_for_user(user_id: str) -> QuerySet:
        """Workspaces where the user holds an active membership, newest first"""
        return Workspace.objects.filter(
            members__user_id=user_id,
            members__is_pending=False,
        ).distinct().order_by('-created_at')

    @staticmethod
    def get_member(workspace: Workspace, user_id: str) -> Optional[WorkspaceMember]:
        return WorkspaceMember.objects.filter(
            workspace=workspace,
            user_id=user_id,
            is_pending=False,
        ).first()

    @staticmethod
    def get_open_invite(workspace: Workspace, token: str) -> Optional[WorkspaceInvite]:
        """Unused invite matching the token (expiry is checked by the service)"""
        return WorkspaceInvite.objects.filter(
            workspace=workspace,
            token=token,
            used=False,
        ).first()
