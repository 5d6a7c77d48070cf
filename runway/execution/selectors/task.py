# ============================================
# execution/selectors/task.py
# ============================================
from typing import Optional
from django.db.models import QuerySet
from execution.models import Task


class TaskSelector:

    @staticmethod
    def get_task_by_id(task_id: int) -> Optional[Task]:
        try:
            return Task.objects.select_related('workspace', 'sprint', 'milestone').get(id=task_id)
        except Task.DoesNotExist:
            return None

    @staticmethod
    def get_tasks_for_workspace(
        workspace_id: int,
        status: str = None,
        milestone_id: int = None,
        backlog: bool = False
    ) -> QuerySet:
        """Workspace tasks, most recently touched first"""
        queryset = Task.objects.filter(workspace_id=workspace_id)

        if status:
            queryset = queryset.filter(status=status)

        if milestone_id:
            queryset = queryset.filter(milestone_id=milestone_id)

        if backlog:
            queryset = queryset.filter(sprint__isnull=True)

        return queryset.order_by('-updated_at', '-id')

    @staticmethod
    def get_tasks_for_sprint(sprint_id: int) -> QuerySet:
        return Task.objects.filter(sprint_id=sprint_id).order_by('-updated_at', '-id')
