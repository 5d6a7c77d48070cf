# ============================================
# execution/selectors/milestone.py
# ============================================
from typing import Optional
from django.db.models import QuerySet
from execution.models import Milestone


class MilestoneSelector:

    @staticmethod
    def get_milestone_by_id(milestone_id: int) -> Optional[Milestone]:
        try:
            return Milestone.objects.select_related('workspace').get(id=milestone_id)
        except Milestone.DoesNotExist:
            return None

    @staticmethod
    def get_milestones_for_workspace(workspace_id: int) -> QuerySet:
        return Milestone.objects.filter(workspace_id=workspace_id).order_by('order', 'created_at')
