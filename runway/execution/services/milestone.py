# ============================================
# execution/services/milestone.py
# ============================================
import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction

from execution.exceptions import ValidationError
from execution.models import Milestone, Task, Workspace
from execution.services.events import emit_after_commit
from execution.services.membership import MembershipService
from execution.services.sprint import completion_percentage

logger = logging.getLogger(__name__)


class MilestoneService:

    @staticmethod
    def _check_spend_range(spend_min: Optional[Decimal], spend_max: Optional[Decimal]) -> None:
        if spend_min is not None and spend_max is not None and spend_min > spend_max:
            raise ValidationError("estimated_spend_range_min must not exceed estimated_spend_range_max")

    @staticmethod
    @transaction.atomic
    def create_milestone(
        *,
        workspace: Workspace,
        user_id: str,
        title: str,
        description: str = '',
        order: Optional[int] = None,
        status: str = Milestone.MilestoneStatus.PLANNED,
        funding_category: Optional[str] = None,
        estimated_spend_range_min: Optional[Decimal] = None,
        estimated_spend_range_max: Optional[Decimal] = None
    ) -> Milestone:
        MembershipService.check_writer(workspace, user_id)

        if not (title or '').strip():
            raise ValidationError("Milestone title is required")
        MilestoneService._check_spend_range(estimated_spend_range_min, estimated_spend_range_max)

        if order is None:
            order = Milestone.objects.filter(workspace=workspace).count()

        milestone = Milestone.objects.create(
            workspace=workspace,
            title=title.strip(),
            description=description or '',
            status=status,
            order=order,
            funding_category=funding_category or None,
            estimated_spend_range_min=estimated_spend_range_min,
            estimated_spend_range_max=estimated_spend_range_max,
        )
        logger.info("[milestone] created #%s in workspace %s", milestone.id, workspace.id)
        return milestone

    @staticmethod
    @transaction.atomic
    def update_milestone(
        *,
        milestone: Milestone,
        user_id: str,
        **data
    ) -> Milestone:
        """Update editable fields; entering 'completed' emits milestone_completed"""
        MembershipService.check_writer(milestone.workspace, user_id)

        old_status = milestone.status

        for field in ('title', 'description', 'status', 'order', 'funding_category',
                      'estimated_spend_range_min', 'estimated_spend_range_max'):
            if field in data:
                setattr(milestone, field, data[field])

        if not (milestone.title or '').strip():
            raise ValidationError("Milestone title is required")
        MilestoneService._check_spend_range(
            milestone.estimated_spend_range_min,
            milestone.estimated_spend_range_max,
        )

        milestone.save()

        if old_status != milestone.status and milestone.status == Milestone.MilestoneStatus.COMPLETED:
            emit_after_commit(milestone.workspace_id, 'milestone_completed', {
                'milestone_title': milestone.title,
            })

        return milestone

    @staticmethod
    def recalculate_progress(milestone: Milestone) -> int:
        """Share of done tasks under the milestone, as a rounded percentage"""
        tasks = Task.objects.filter(milestone=milestone)
        total = tasks.count()
        done = tasks.filter(status=Task.TaskStatus.DONE).count()
        progress = completion_percentage(done, total)

        if progress != milestone.progress_percentage:
            Milestone.objects.filter(pk=milestone.pk).update(progress_percentage=progress)
            milestone.progress_percentage = progress
        return progress
