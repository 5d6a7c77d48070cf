# ============================================
# execution/selectors/validation.py
# ============================================
from django.conf import settings
from django.db.models import QuerySet
from execution.models import ValidationEntry


class ValidationSelector:

    @staticmethod
    def get_validations_for_workspace(
        workspace_id: int,
        sprint_id: int = None,
        origin: str = None
    ) -> QuerySet:
        limit = getattr(settings, 'VALIDATION_LIST_LIMIT', 100)
        queryset = ValidationEntry.objects.filter(workspace_id=workspace_id)

        if sprint_id:
            queryset = queryset.filter(sprint_id=sprint_id)

        if origin:
            queryset = queryset.filter(origin=origin)

        return queryset.order_by('-created_at', '-id')[:limit]
