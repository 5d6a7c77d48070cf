# ============================================
# execution/services/membership.py
# ============================================
from execution.exceptions import AuthorizationError
from execution.models import Workspace, WorkspaceMember
from execution.selectors.workspace import WorkspaceSelector

ROLE_NONE = 'none'

WRITER_ROLES = {
    WorkspaceMember.Role.FOUNDER,
    WorkspaceMember.Role.TEAM_MEMBER,
}


class MembershipService:

    @staticmethod
    def get_role(workspace: Workspace, user_id: str) -> str:
        """founder / team_member / investor, or 'none' for outsiders"""
        member = WorkspaceSelector.get_member(workspace, str(user_id))
        return member.role if member else ROLE_NONE

    @staticmethod
    def check_member(workspace: Workspace, user_id: str) -> str:
        role = MembershipService.get_role(workspace, user_id)
        if role == ROLE_NONE:
            raise AuthorizationError("User is not a member of this workspace")
        return role

    @staticmethod
    def check_writer(workspace: Workspace, user_id: str) -> str:
        role = MembershipService.check_member(workspace, user_id)
        if role not in WRITER_ROLES:
            raise AuthorizationError("Investors have read-only access")
        return role

    @staticmethod
    def check_founder(workspace: Workspace, user_id: str, action: str = 'perform this action') -> str:
        role = MembershipService.check_member(workspace, user_id)
        if role != WorkspaceMember.Role.FOUNDER:
            raise AuthorizationError(f"Only founders can {action}")
        return role
