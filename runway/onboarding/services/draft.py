# ============================================
# onboarding/services/draft.py
# ============================================
import logging
from datetime import date
from typing import List, Optional

from django.db import transaction

from execution.exceptions import ValidationError
from execution.models import Milestone, Task, Workspace
from execution.services.sprint import SprintService
from execution.services.workspace import WorkspaceService

logger = logging.getLogger(__name__)


class OnboardingService:

    @staticmethod
    @transaction.atomic
    def create_workspace_from_draft(
        *,
        user_id: str,
        startup_name: str,
        milestones: List[str],
        sprint_week_start: Optional[date] = None,
        sprint_week_end: Optional[date] = None,
        email: str = '',
        display_name: str = ''
    ) -> Workspace:
        """
        Create the workspace a founder reviewed during onboarding.

        One milestone per draft item, in order. With sprint dates, each
        milestone also gets a starter task and the tasks form an open
        first sprint.
        """
        titles = [m.strip() for m in (milestones or []) if m and m.strip()]

        if (sprint_week_start is None) != (sprint_week_end is None):
            raise ValidationError("Give both sprint dates or neither")
        if sprint_week_start and not titles:
            raise ValidationError("A first sprint needs at least one milestone")

        workspace = WorkspaceService.create_workspace(
            name=startup_name,
            founder_id=user_id,
            stage=Workspace.Stage.IDEA,
            founder_email=email,
            founder_display_name=display_name,
        )

        created = [
            Milestone.objects.create(workspace=workspace, title=title, order=index)
            for index, title in enumerate(titles)
        ]

        if sprint_week_start:
            tasks = [
                Task.objects.create(workspace=workspace, milestone=milestone, title=milestone.title)
                for milestone in created
            ]
            SprintService.create_sprint(
                workspace=workspace,
                user_id=user_id,
                week_start_date=sprint_week_start,
                week_end_date=sprint_week_end,
                task_ids=[t.id for t in tasks],
            )

        logger.info("[onboarding] workspace #%s created with %s milestones", workspace.id, len(created))
        return workspace
