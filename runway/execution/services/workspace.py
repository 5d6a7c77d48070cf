# ============================================
# execution/services/workspace.py
# ============================================
import logging
import string
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import timezone
from django.utils.crypto import get_random_string

from execution.exceptions import NotFoundError, ValidationError
from execution.models import Workspace, WorkspaceInvite, WorkspaceMember
from execution.services.membership import MembershipService

logger = logging.getLogger(__name__)

INVITE_TOKEN_LENGTH = 32
INVITE_TOKEN_CHARS = string.ascii_letters + string.digits


class WorkspaceService:

    @staticmethod
    @transaction.atomic
    def create_workspace(
        *,
        name: str,
        founder_id: str,
        stage: str = Workspace.Stage.IDEA,
        founder_email: str = '',
        founder_display_name: str = ''
    ) -> Workspace:
        """Create a workspace; the creator becomes its founder"""
        if not (name or '').strip():
            raise ValidationError("Workspace name is required")

        workspace = Workspace.objects.create(
            name=name.strip(),
            stage=stage,
            created_by=str(founder_id),
        )
        WorkspaceMember.objects.create(
            workspace=workspace,
            user_id=str(founder_id),
            role=WorkspaceMember.Role.FOUNDER,
            email=founder_email or '',
            display_name=founder_display_name or '',
        )
        logger.info("[workspace] created #%s by %s", workspace.id, founder_id)
        return workspace

    @staticmethod
    @transaction.atomic
    def update_workspace(
        *,
        workspace: Workspace,
        user_id: str,
        **data
    ) -> Workspace:
        MembershipService.check_founder(workspace, user_id, 'edit the workspace')

        if 'name' in data:
            if not (data['name'] or '').strip():
                raise ValidationError("Workspace name is required")
            workspace.name = data['name'].strip()

        if 'stage' in data:
            workspace.stage = data['stage']

        workspace.save()
        return workspace

    @staticmethod
    @transaction.atomic
    def add_member(
        *,
        workspace: Workspace,
        user_id: str,
        email: str,
        role: str
    ) -> WorkspaceMember:
        """Record a pending member by email; they become active when they join"""
        MembershipService.check_founder(workspace, user_id, 'add members')

        email = (email or '').strip().lower()
        if not email:
            raise ValidationError("Email is required")

        if WorkspaceMember.objects.filter(workspace=workspace, email=email).exists():
            raise ValidationError("This email is already on the team")

        return WorkspaceMember.objects.create(
            workspace=workspace,
            user_id=f"pending:{email}",
            role=role,
            email=email,
            is_pending=True,
        )

    @staticmethod
    @transaction.atomic
    def remove_member(
        *,
        workspace: Workspace,
        user_id: str,
        member_user_id: str
    ) -> None:
        MembershipService.check_founder(workspace, user_id, 'remove members')

        if member_user_id == workspace.created_by:
            raise ValidationError("The workspace creator cannot be removed")

        deleted, _ = WorkspaceMember.objects.filter(workspace=workspace, user_id=member_user_id).delete()
        if not deleted:
            raise NotFoundError("Member not found")

        logger.info("[workspace] removed %s from #%s", member_user_id, workspace.id)


class InviteService:

    @staticmethod
    def create_invite(
        *,
        workspace: Workspace,
        user_id: str,
        role: str,
        expires_at: Optional[datetime] = None
    ) -> WorkspaceInvite:
        MembershipService.check_founder(workspace, user_id, 'invite members')

        return WorkspaceInvite.objects.create(
            workspace=workspace,
            role=role,
            token=get_random_string(INVITE_TOKEN_LENGTH, allowed_chars=INVITE_TOKEN_CHARS),
            created_by=str(user_id),
            expires_at=expires_at,
        )

    @staticmethod
    @transaction.atomic
    def accept_invite(
        *,
        workspace: Workspace,
        token: str,
        user_id: str,
        email: str = '',
        display_name: str = ''
    ) -> WorkspaceMember:
        """
        Consume an invite link.

        The token must be unused and unexpired. A user who is already a member
        keeps their role; the invite is consumed either way.
        """
        invite = (
            WorkspaceInvite.objects
            .select_for_update()
            .filter(workspace=workspace, token=token, used=False)
            .first()
        )
        now = timezone.now()
        if invite is None or (invite.expires_at and invite.expires_at <= now):
            raise NotFoundError("This invite link is invalid or expired.")

        user_id = str(user_id)
        member = WorkspaceMember.objects.filter(workspace=workspace, user_id=user_id).first()
        if member is None:
            member = WorkspaceMember.objects.create(
                workspace=workspace,
                user_id=user_id,
                role=invite.role,
                email=email or '',
                display_name=display_name or '',
            )
            if email:
                WorkspaceMember.objects.filter(
                    workspace=workspace,
                    email=email.lower(),
                    is_pending=True,
                ).delete()

        invite.used = True
        invite.used_by = user_id
        invite.used_at = now
        invite.save(update_fields=['used', 'used_by', 'used_at'])

        logger.info("[invite] %s joined workspace #%s as %s", user_id, workspace.id, member.role)
        return member
