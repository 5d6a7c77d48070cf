# ============================================
# execution/selectors/sprint.py
# ============================================
from typing import Optional
from django.conf import settings
from django.db.models import QuerySet
from execution.models import Sprint


class SprintSelector:

    @staticmethod
    def get_sprint_by_id(sprint_id: int) -> Optional[Sprint]:
        try:
            return Sprint.objects.select_related('workspace').get(id=sprint_id)
        except Sprint.DoesNotExist:
            return None

    @staticmethod
    def get_sprints_for_workspace(workspace_id: int) -> QuerySet:
        """Most recent sprints first, capped"""
        limit = getattr(settings, 'SPRINT_LIST_LIMIT', 50)
        return Sprint.objects.filter(workspace_id=workspace_id).order_by('-created_at', '-id')[:limit]
