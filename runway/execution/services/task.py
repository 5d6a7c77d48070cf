# ============================================
# execution/services/task.py
# ============================================
import logging
from typing import Optional

from django.db import transaction

from execution.exceptions import ValidationError
from execution.models import Milestone, Sprint, Task, Workspace
from execution.services.membership import MembershipService
from execution.services.milestone import MilestoneService

logger = logging.getLogger(__name__)


class TaskService:

    @staticmethod
    def _get_milestone(workspace: Workspace, milestone_id: Optional[int]) -> Optional[Milestone]:
        if not milestone_id:
            return None
        try:
            return Milestone.objects.get(id=milestone_id, workspace=workspace)
        except Milestone.DoesNotExist:
            raise ValidationError("Milestone does not belong to this workspace")

    @staticmethod
    def _get_open_sprint(workspace: Workspace, sprint_id: int) -> Sprint:
        try:
            sprint = Sprint.objects.select_for_update().get(id=sprint_id, workspace=workspace)
        except Sprint.DoesNotExist:
            raise ValidationError("Sprint does not belong to this workspace")
        if sprint.locked:
            raise ValidationError("Tasks cannot be added to a locked sprint")
        return sprint

    @staticmethod
    def _move_to_sprint(task: Task, sprint_id: Optional[int]) -> None:
        """Move a task between the backlog and open sprints, keeping task_ids in step"""
        if task.sprint_id == sprint_id:
            return

        if task.sprint_id is not None:
            old = Sprint.objects.select_for_update().get(id=task.sprint_id)
            if old.locked:
                raise ValidationError("Tasks cannot leave a locked sprint")
            old.task_ids = [tid for tid in old.task_ids if tid != task.id]
            old.save(update_fields=['task_ids'])

        if sprint_id is None:
            task.sprint = None
            return

        new = TaskService._get_open_sprint(task.workspace, sprint_id)
        if task.id not in new.task_ids:
            new.task_ids = list(new.task_ids) + [task.id]
            new.save(update_fields=['task_ids'])
        task.sprint = new

    @staticmethod
    @transaction.atomic
    def create_task(
        *,
        workspace: Workspace,
        user_id: str,
        title: str,
        milestone_id: Optional[int] = None,
        sprint_id: Optional[int] = None,
        owner_id: Optional[str] = None,
        status: str = Task.TaskStatus.TODO
    ) -> Task:
        """Create a task in the backlog, or straight into an open sprint"""
        MembershipService.check_writer(workspace, user_id)

        if not (title or '').strip():
            raise ValidationError("Task title is required")

        milestone = TaskService._get_milestone(workspace, milestone_id)

        task = Task.objects.create(
            workspace=workspace,
            milestone=milestone,
            title=title.strip(),
            owner_id=owner_id or None,
            status=status,
        )

        if sprint_id:
            TaskService._move_to_sprint(task, sprint_id)
            task.save(update_fields=['sprint', 'updated_at'])

        if milestone:
            MilestoneService.recalculate_progress(milestone)

        logger.info("[task] created #%s in workspace %s", task.id, workspace.id)
        return task

    @staticmethod
    @transaction.atomic
    def update_task(
        *,
        task: Task,
        user_id: str,
        **data
    ) -> Task:
        """Update status/title/owner/milestone, or move the task between sprints"""
        MembershipService.check_writer(task.workspace, user_id)

        touched_milestones = set()
        old_status = task.status

        if 'title' in data:
            if not (data['title'] or '').strip():
                raise ValidationError("Task title is required")
            task.title = data['title'].strip()

        if 'owner_id' in data:
            task.owner_id = data['owner_id'] or None

        if 'status' in data:
            task.status = data['status']

        if 'milestone_id' in data and data['milestone_id'] != task.milestone_id:
            if task.milestone_id:
                touched_milestones.add(task.milestone_id)
            task.milestone = TaskService._get_milestone(task.workspace, data['milestone_id'])
            if task.milestone_id:
                touched_milestones.add(task.milestone_id)

        if 'sprint_id' in data:
            TaskService._move_to_sprint(task, data['sprint_id'])

        task.save()

        if old_status != task.status and task.milestone_id:
            touched_milestones.add(task.milestone_id)

        for milestone in Milestone.objects.filter(id__in=touched_milestones):
            MilestoneService.recalculate_progress(milestone)

        return task
