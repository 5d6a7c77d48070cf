# ============================================
# funding/services/funding.py
# ============================================
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import transaction

from execution.exceptions import ValidationError
from execution.models import Milestone, Sprint, Workspace
from execution.services.membership import MembershipService
from funding.models import ExecutionAuditLog, FundingAllocation, FundingRound, SpendLog
from funding.selectors.funding import FundingSelector
from funding.services.audit import ExecutionAuditService

logger = logging.getLogger(__name__)


def format_amount(amount: Decimal, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


class FundingRoundService:

    @staticmethod
    @transaction.atomic
    def create_round(
        *,
        workspace: Workspace,
        user_id: str,
        name: str,
        amount: Decimal,
        source: str,
        date: date,
        currency: str = 'INR',
        notes: Optional[str] = None
    ) -> FundingRound:
        MembershipService.check_founder(workspace, user_id, 'add funding rounds')

        if not (name or '').strip():
            raise ValidationError("Round name is required")
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        funding_round = FundingRound.objects.create(
            workspace=workspace,
            name=name.strip(),
            amount=amount,
            currency=(currency or 'INR').upper(),
            source=source,
            date=date,
            notes=(notes or '').strip() or None,
            created_by=str(user_id),
        )
        ExecutionAuditService.append(
            workspace_id=workspace.id,
            event_type=ExecutionAuditLog.EventType.FUNDING_CREATED,
            entity_id=funding_round.id,
            summary=f"Funding round added: {funding_round.name} ({format_amount(amount, funding_round.currency)})",
            created_by=user_id,
        )
        return funding_round

    @staticmethod
    def update_notes(*, funding_round: FundingRound, user_id: str, notes: Optional[str]) -> FundingRound:
        MembershipService.check_founder(funding_round.workspace, user_id, 'edit funding rounds')
        funding_round.notes = (notes or '').strip() or None
        funding_round.save(update_fields=['notes'])
        return funding_round


class AllocationService:

    @staticmethod
    @transaction.atomic
    def create_allocation(
        *,
        funding_round: FundingRound,
        user_id: str,
        category: str,
        allocated_amount: Decimal
    ) -> FundingAllocation:
        """Earmark part of a round; never more than what is still unallocated"""
        MembershipService.check_writer(funding_round.workspace, user_id)

        if allocated_amount is None or allocated_amount <= 0:
            raise ValidationError("Allocated amount must be greater than zero")

        # Serialise concurrent allocations against the same round
        funding_round = FundingRound.objects.select_for_update().get(pk=funding_round.pk)
        remaining = funding_round.amount - FundingSelector.get_allocated_total(funding_round)
        if allocated_amount > remaining:
            raise ValidationError(
                f"Only {format_amount(remaining, funding_round.currency)} of this round is unallocated"
            )

        allocation = FundingAllocation.objects.create(
            workspace_id=funding_round.workspace_id,
            funding_round=funding_round,
            category=category,
            allocated_amount=allocated_amount,
        )
        ExecutionAuditService.append(
            workspace_id=funding_round.workspace_id,
            event_type=ExecutionAuditLog.EventType.ALLOCATION_UPDATED,
            entity_id=allocation.id,
            summary=f"Allocation: {category} {format_amount(allocated_amount, funding_round.currency)}",
            created_by=user_id,
        )
        return allocation

    @staticmethod
    @transaction.atomic
    def delete_allocation(*, allocation: FundingAllocation, user_id: str) -> None:
        MembershipService.check_writer(allocation.workspace, user_id)
        ExecutionAuditService.append(
            workspace_id=allocation.workspace_id,
            event_type=ExecutionAuditLog.EventType.ALLOCATION_UPDATED,
            entity_id=allocation.id,
            summary=f"Allocation removed: {allocation.category} {allocation.allocated_amount:,.2f}",
            created_by=user_id,
        )
        allocation.delete()


class SpendService:

    @staticmethod
    def _resolve_links(workspace: Workspace, data: dict) -> dict:
        """Map *_id inputs to rows of the same workspace"""
        resolved = {}
        lookups = (
            ('funding_round_id', 'funding_round', FundingRound),
            ('linked_sprint_id', 'linked_sprint', Sprint),
            ('linked_milestone_id', 'linked_milestone', Milestone),
        )
        for key, field, model in lookups:
            if key not in data:
                continue
            if not data[key]:
                resolved[field] = None
                continue
            obj = model.objects.filter(id=data[key], workspace=workspace).first()
            if obj is None:
                raise ValidationError(f"{model.__name__} does not belong to this workspace")
            resolved[field] = obj
        return resolved

    @staticmethod
    @transaction.atomic
    def log_spend(
        *,
        workspace: Workspace,
        user_id: str,
        category: str,
        amount: Decimal,
        date: date,
        note: str = '',
        funding_round_id: Optional[int] = None,
        linked_sprint_id: Optional[int] = None,
        linked_milestone_id: Optional[int] = None
    ) -> SpendLog:
        MembershipService.check_writer(workspace, user_id)

        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        links = SpendService._resolve_links(workspace, {
            'funding_round_id': funding_round_id,
            'linked_sprint_id': linked_sprint_id,
            'linked_milestone_id': linked_milestone_id,
        })
        spend = SpendLog.objects.create(
            workspace=workspace,
            category=category,
            amount=amount,
            date=date,
            note=(note or '').strip(),
            created_by=str(user_id),
            **links
        )
        currency = spend.funding_round.currency if spend.funding_round else 'INR'
        ExecutionAuditService.append(
            workspace_id=workspace.id,
            event_type=ExecutionAuditLog.EventType.SPEND_LOGGED,
            entity_id=spend.id,
            summary=f"Spend logged: {category} {format_amount(amount, currency)}",
            created_by=user_id,
        )
        return spend

    @staticmethod
    @transaction.atomic
    def update_spend(*, spend: SpendLog, user_id: str, **data) -> SpendLog:
        MembershipService.check_writer(spend.workspace, user_id)

        if 'amount' in data:
            if data['amount'] is None or data['amount'] <= 0:
                raise ValidationError("Amount must be greater than zero")
            spend.amount = data['amount']

        for field in ('category', 'date'):
            if field in data:
                setattr(spend, field, data[field])

        if 'note' in data:
            spend.note = (data['note'] or '').strip()

        for field, value in SpendService._resolve_links(spend.workspace, data).items():
            setattr(spend, field, value)

        spend.save()
        return spend

    @staticmethod
    def delete_spend(*, spend: SpendLog, user_id: str) -> None:
        MembershipService.check_writer(spend.workspace, user_id)
        spend.delete()
        logger.info("[spend] deleted spend log in workspace %s", spend.workspace_id)
