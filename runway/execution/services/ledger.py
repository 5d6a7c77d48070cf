# ============================================
# execution/services/ledger.py
# ============================================
"""
Commitment / completion fingerprints for sprints.

Each hash is SHA-256 over a canonical JSON list of the fields, in a fixed
order, so identical inputs always give the identical digest. Entries are
independent fingerprints; they do not reference the previous entry.
"""
import hashlib
import json
import logging
from typing import Iterable, List

from execution.models import LedgerEntry

logger = logging.getLogger(__name__)


def _canonical(fields: list) -> bytes:
    return json.dumps(
        fields,
        separators=(',', ':'),
        sort_keys=True,
        ensure_ascii=False,
    ).encode('utf-8')


def _ids(values: Iterable) -> List[str]:
    return [str(v) for v in (values or [])]


def hash_sprint_commitment(sprint_id, goals: list, task_ids: Iterable) -> str:
    goal_payload = [
        {'id': str(g.get('id', '')), 'text': str(g.get('text', ''))}
        for g in (goals or [])
    ]
    payload = [
        LedgerEntry.EntryType.COMMITMENT.value,
        str(sprint_id),
        goal_payload,
        _ids(task_ids),
    ]
    return hashlib.sha256(_canonical(payload)).hexdigest()


def hash_sprint_completion(
    sprint_id,
    completion_percentage: int,
    tasks_completed: int,
    tasks_total: int,
    blocked_task_ids: Iterable,
    missed_goal_ids: Iterable
) -> str:
    payload = [
        LedgerEntry.EntryType.COMPLETION.value,
        str(sprint_id),
        int(completion_percentage),
        int(tasks_completed),
        int(tasks_total),
        _ids(blocked_task_ids),
        _ids(missed_goal_ids),
    ]
    return hashlib.sha256(_canonical(payload)).hexdigest()


class LedgerService:

    @staticmethod
    def append_entry(
        *,
        workspace_id: int,
        sprint_id: int,
        entry_type: str,
        hash: str,
        payload_summary: str
    ) -> LedgerEntry:
        """Append one ledger row. Callers run this inside the transition's transaction."""
        entry = LedgerEntry.objects.create(
            workspace_id=workspace_id,
            sprint_id=sprint_id,
            entry_type=entry_type,
            hash=hash,
            payload_summary=payload_summary[:255],
        )
        logger.info("[ledger] %s sprint=%s hash=%s", entry_type, sprint_id, hash[:12])
        return entry
