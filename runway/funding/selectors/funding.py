# ============================================
# funding/selectors/funding.py
# ============================================
from decimal import Decimal
from typing import Optional

from django.db.models import QuerySet, Sum

from funding.models import ExecutionAuditLog, FundingAllocation, FundingRound, SpendLog

AUDIT_DEFAULT_LIMIT = 50


class FundingSelector:

    @staticmethod
    def get_round_by_id(round_id: int) -> Optional[FundingRound]:
        try:
            return FundingRound.objects.select_related('workspace').get(id=round_id)
        except FundingRound.DoesNotExist:
            return None

    @staticmethod
    def get_rounds_for_workspace(workspace_id: int) -> QuerySet:
        return FundingRound.objects.filter(workspace_id=workspace_id).order_by('-date', '-id')

    @staticmethod
    def get_allocation_by_id(allocation_id: int) -> Optional[FundingAllocation]:
        try:
            return FundingAllocation.objects.select_related('workspace', 'funding_round').get(id=allocation_id)
        except FundingAllocation.DoesNotExist:
            return None

    @staticmethod
    def get_allocations_for_workspace(workspace_id: int, round_id: int = None) -> QuerySet:
        queryset = FundingAllocation.objects.filter(workspace_id=workspace_id)
        if round_id:
            queryset = queryset.filter(funding_round_id=round_id)
        return queryset.order_by('created_at', 'id')

    @staticmethod
    def get_allocated_total(funding_round: FundingRound) -> Decimal:
        total = funding_round.allocations.aggregate(total=Sum('allocated_amount'))['total']
        return total or Decimal('0')

    @staticmethod
    def get_spend_by_id(spend_id: int) -> Optional[SpendLog]:
        try:
            return SpendLog.objects.select_related('workspace').get(id=spend_id)
        except SpendLog.DoesNotExist:
            return None

    @staticmethod
    def get_spend_for_workspace(workspace_id: int, category: str = None) -> QuerySet:
        queryset = SpendLog.objects.filter(workspace_id=workspace_id)
        if category:
            queryset = queryset.filter(category=category)
        return queryset.order_by('-date', '-id')

    @staticmethod
    def get_audit_log(workspace_id: int, limit: int = AUDIT_DEFAULT_LIMIT) -> QuerySet:
        """Newest first"""
        return ExecutionAuditLog.objects.filter(workspace_id=workspace_id).order_by('-created_at', '-id')[:limit]
