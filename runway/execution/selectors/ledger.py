# ============================================
# execution/selectors/ledger.py
# ============================================
from django.conf import settings
from django.db.models import QuerySet
from execution.models import LedgerEntry


class LedgerSelector:

    @staticmethod
    def get_ledger_for_workspace(workspace_id: int, sprint_id: int = None) -> QuerySet:
        """Newest entries first, capped at LEDGER_READ_LIMIT"""
        limit = getattr(settings, 'LEDGER_READ_LIMIT', 50)
        queryset = LedgerEntry.objects.filter(workspace_id=workspace_id)

        if sprint_id:
            queryset = queryset.filter(sprint_id=sprint_id)

        return queryset.order_by('-timestamp', '-id')[:limit]
