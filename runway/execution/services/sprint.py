# ============================================
# execution/services/sprint.py
# ============================================
"""
Sprint lifecycle: Open -> Locked -> Closed.

Every transition is founder-only and runs in one transaction together with
its ledger append. The flag flips are conditional updates, so a sprint is
locked and closed exactly once even with concurrent founders.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from django.db import transaction
from django.utils import timezone

from execution.db import persistence_guard
from execution.exceptions import NotFoundError, ValidationError
from execution.models import LedgerEntry, Milestone, Sprint, Task, Workspace
from execution.services.events import emit_after_commit
from execution.services.ledger import (
    LedgerService,
    hash_sprint_commitment,
    hash_sprint_completion,
)
from execution.services.membership import MembershipService
from funding.services.audit import ExecutionAuditService

logger = logging.getLogger(__name__)


def completion_percentage(done: int, total: int) -> int:
    """round(100 * done / total), halves rounded up; 0 for an empty sprint"""
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


def compute_completion_stats(sprint: Sprint, tasks: Iterable[Task], closed_at=None) -> Dict:
    """
    Snapshot of a sprint's outcome.

    Tasks are ordered by their position in the committed scope so that
    ``blocked_task_ids`` (and the completion hash) are stable.
    """
    position = {tid: i for i, tid in enumerate(sprint.task_ids or [])}
    ordered = sorted(tasks, key=lambda t: (position.get(t.id, len(position)), t.id))

    total = len(ordered)
    done = sum(1 for t in ordered if t.status == Task.TaskStatus.DONE)
    closed_at = closed_at or timezone.now()

    return {
        'tasks_completed': done,
        'tasks_total': total,
        'completion_percentage': completion_percentage(done, total),
        'blocked_task_ids': [t.id for t in ordered if t.status != Task.TaskStatus.DONE],
        'missed_goal_ids': [],
        'closed_at': closed_at.isoformat(),
    }


def _lock_for_update(sprint_id: int) -> Sprint:
    try:
        return Sprint.objects.select_for_update().get(pk=sprint_id)
    except Sprint.DoesNotExist:
        raise NotFoundError("Sprint not found")


def _locked_metadata(sprint: Sprint) -> Dict:
    goals = [g.get('text', '') for g in (sprint.goals or []) if g.get('text')]
    if not goals:
        titles = dict(Task.objects.filter(id__in=sprint.task_ids).values_list('id', 'title'))
        goals = [titles[tid] for tid in sprint.task_ids if tid in titles]
    return {
        'sprint_label': sprint.label,
        'sprint_goals': goals,
    }


def _closed_metadata(sprint: Sprint, stats: Dict) -> Dict:
    milestones_delivered = (
        Task.objects
        .filter(sprint=sprint, milestone__status=Milestone.MilestoneStatus.COMPLETED)
        .values('milestone_id')
        .distinct()
        .count()
    )
    return {
        'sprint_label': sprint.label,
        'tasks_completed': stats['tasks_completed'],
        'tasks_total': stats['tasks_total'],
        'milestones_delivered': milestones_delivered,
        'validations_logged': sprint.validations.count(),
    }


class SprintService:

    @staticmethod
    def create_sprint(
        *,
        workspace: Workspace,
        user_id: str,
        week_start_date: date,
        week_end_date: date,
        task_ids: List[int],
        goals: Optional[List[Dict]] = None,
        funding_category: Optional[str] = None,
        estimated_spend_range: Optional[Decimal] = None
    ) -> Sprint:
        """Create an open sprint and point every listed task at it"""
        MembershipService.check_founder(workspace, user_id, 'create sprints')

        task_ids = list(task_ids or [])
        if not task_ids:
            raise ValidationError("A sprint needs at least one task")
        if len(set(task_ids)) != len(task_ids):
            raise ValidationError("Duplicate task ids")
        if week_end_date < week_start_date:
            raise ValidationError("week_end_date must not be before week_start_date")

        with persistence_guard('create sprint'), transaction.atomic():
            tasks = {
                t.id: t
                for t in Task.objects.select_for_update().filter(workspace=workspace, id__in=task_ids)
            }
            missing = [tid for tid in task_ids if tid not in tasks]
            if missing:
                raise ValidationError(f"Tasks not found in this workspace: {missing}")

            taken = [tid for tid in task_ids if tasks[tid].sprint_id is not None]
            if taken:
                raise ValidationError(f"Tasks already belong to another sprint: {taken}")

            sprint = Sprint.objects.create(
                workspace=workspace,
                week_start_date=week_start_date,
                week_end_date=week_end_date,
                goals=goals or [],
                task_ids=task_ids,
                funding_category=funding_category or None,
                estimated_spend_range=estimated_spend_range,
                created_by=str(user_id),
            )
            Task.objects.filter(id__in=task_ids).update(sprint=sprint, updated_at=timezone.now())

        logger.info("[sprint] created #%s (%s tasks) in workspace %s", sprint.id, len(task_ids), workspace.id)
        return sprint

    @staticmethod
    def lock_sprint(*, sprint: Sprint, user_id: str) -> Sprint:
        """
        Commit the sprint scope.

        Locking an already locked sprint returns it unchanged: no second
        ledger entry and no notification.
        """
        MembershipService.check_founder(sprint.workspace, user_id, 'lock sprints')

        with persistence_guard('lock sprint'), transaction.atomic():
            current = _lock_for_update(sprint.pk)
            if current.completed:
                raise ValidationError("Sprint is already closed")

            flipped = Sprint.objects.filter(pk=current.pk, locked=False).update(locked=True)
            if not flipped:
                logger.info("[sprint] #%s already locked", current.pk)
                return current

            current.locked = True
            commitment_hash = hash_sprint_commitment(current.pk, current.goals, current.task_ids)
            LedgerService.append_entry(
                workspace_id=current.workspace_id,
                sprint_id=current.pk,
                entry_type=LedgerEntry.EntryType.COMMITMENT,
                hash=commitment_hash,
                payload_summary=f"Sprint {current.week_start_date} goals committed",
            )
            emit_after_commit(current.workspace_id, 'sprint_locked', _locked_metadata(current))

        logger.info("[sprint] locked #%s", current.pk)
        return current

    @staticmethod
    def close_sprint(*, sprint: Sprint, user_id: str) -> Sprint:
        """Snapshot completion stats once and append the completion entry"""
        MembershipService.check_founder(sprint.workspace, user_id, 'close sprints')

        with persistence_guard('close sprint'), transaction.atomic():
            current = _lock_for_update(sprint.pk)
            if current.completed:
                raise ValidationError("Sprint is already closed")
            if not current.locked:
                raise ValidationError("Lock the sprint before closing it")

            stats = compute_completion_stats(current, Task.objects.filter(sprint=current))

            flipped = Sprint.objects.filter(pk=current.pk, completed=False).update(
                completed=True,
                completion_stats=stats,
            )
            if not flipped:
                raise ValidationError("Sprint is already closed")

            current.completed = True
            current.completion_stats = stats

            completion_hash = hash_sprint_completion(
                current.pk,
                stats['completion_percentage'],
                stats['tasks_completed'],
                stats['tasks_total'],
                stats['blocked_task_ids'],
                stats['missed_goal_ids'],
            )
            LedgerService.append_entry(
                workspace_id=current.workspace_id,
                sprint_id=current.pk,
                entry_type=LedgerEntry.EntryType.COMPLETION,
                hash=completion_hash,
                payload_summary=f"Sprint {current.week_start_date} closed: {stats['completion_percentage']}%",
            )

            if current.funding_category:
                ExecutionAuditService.append(
                    workspace_id=current.workspace_id,
                    event_type='FUNDED_SPRINT_COMPLETED',
                    entity_id=str(current.pk),
                    summary=(
                        f"Funded sprint ({current.funding_category}) closed at "
                        f"{stats['completion_percentage']}%"
                    ),
                    created_by=str(user_id),
                )

            emit_after_commit(current.workspace_id, 'sprint_closed', _closed_metadata(current, stats))

        logger.info(
            "[sprint] closed #%s at %s%% (%s/%s)",
            current.pk,
            stats['completion_percentage'],
            stats['tasks_completed'],
            stats['tasks_total'],
        )
        return current

    @staticmethod
    def delete_sprint(*, sprint: Sprint, user_id: str) -> None:
        """Return the sprint's tasks to the backlog and drop the sprint"""
        MembershipService.check_founder(sprint.workspace, user_id, 'delete sprints')

        with persistence_guard('delete sprint'), transaction.atomic():
            current = _lock_for_update(sprint.pk)
            if current.completed:
                raise ValidationError("Closed sprints cannot be deleted")

            detached = Task.objects.filter(sprint=current).update(sprint=None, updated_at=timezone.now())
            current.delete()

        logger.info("[sprint] deleted #%s, %s tasks back to backlog", sprint.pk, detached)
