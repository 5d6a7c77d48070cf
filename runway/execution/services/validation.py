# ============================================
# execution/services/validation.py
# ============================================
import logging
from typing import Optional

from django.db import transaction

from execution.exceptions import ValidationError
from execution.models import Milestone, Sprint, ValidationEntry, Workspace
from execution.services.membership import MembershipService

logger = logging.getLogger(__name__)

SUMMARY_FROM_FEEDBACK_CHARS = 120


class ValidationService:

    @staticmethod
    def _resolve(workspace: Workspace, milestone_id: Optional[int], sprint_id: Optional[int]):
        milestone = sprint = None
        if milestone_id:
            milestone = Milestone.objects.filter(id=milestone_id, workspace=workspace).first()
            if milestone is None:
                raise ValidationError("Milestone does not belong to this workspace")
        if sprint_id:
            sprint = Sprint.objects.filter(id=sprint_id, workspace=workspace).first()
            if sprint is None:
                raise ValidationError("Sprint does not belong to this workspace")
        return milestone, sprint

    @staticmethod
    @transaction.atomic
    def log_validation(
        *,
        workspace: Workspace,
        user_id: str,
        validation_type: str,
        summary: str,
        milestone_id: Optional[int] = None,
        sprint_id: Optional[int] = None,
        qualitative_notes: str = ''
    ) -> ValidationEntry:
        """Internal evidence logged by a founder or team member"""
        MembershipService.check_writer(workspace, user_id)

        if not (summary or '').strip():
            raise ValidationError("Summary is required")

        milestone, sprint = ValidationService._resolve(workspace, milestone_id, sprint_id)

        entry = ValidationEntry.objects.create(
            workspace=workspace,
            milestone=milestone,
            sprint=sprint,
            validation_type=validation_type,
            summary=summary.strip(),
            qualitative_notes=qualitative_notes or '',
            created_by=str(user_id),
            origin=ValidationEntry.Origin.INTERNAL,
        )
        logger.info("[validation] %s logged in workspace %s", validation_type, workspace.id)
        return entry

    @staticmethod
    @transaction.atomic
    def submit_external_validation(
        *,
        workspace: Workspace,
        validation_type: str,
        source_type: str,
        feedback_text: str,
        summary: str = '',
        confidence_score: Optional[int] = None,
        milestone_id: Optional[int] = None
    ) -> ValidationEntry:
        """Feedback from a shared link; no login, so created_by stays empty"""
        feedback_text = (feedback_text or '').strip()
        if not feedback_text:
            raise ValidationError("Feedback is required")

        if confidence_score is not None and not 1 <= confidence_score <= 5:
            raise ValidationError("confidence_score must be between 1 and 5")

        milestone, _ = ValidationService._resolve(workspace, milestone_id, None)

        entry = ValidationEntry.objects.create(
            workspace=workspace,
            milestone=milestone,
            validation_type=validation_type,
            summary=(summary or '').strip() or feedback_text[:SUMMARY_FROM_FEEDBACK_CHARS],
            origin=ValidationEntry.Origin.EXTERNAL_LINK,
            source_type=source_type,
            feedback_text=feedback_text,
            confidence_score=confidence_score,
            created_by=None,
        )
        logger.info("[validation] external %s received for workspace %s", source_type, workspace.id)
        return entry
