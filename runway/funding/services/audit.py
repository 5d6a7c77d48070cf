# ============================================
# funding/services/audit.py
# ============================================
import logging

from funding.models import ExecutionAuditLog

logger = logging.getLogger(__name__)


class ExecutionAuditService:

    @staticmethod
    def append(
        *,
        workspace_id: int,
        event_type: str,
        entity_id: str,
        summary: str,
        created_by: str
    ) -> ExecutionAuditLog:
        """Append one audit row; runs inside the caller's transaction"""
        entry = ExecutionAuditLog.objects.create(
            workspace_id=workspace_id,
            event_type=event_type,
            entity_id=str(entity_id),
            summary=summary[:500],
            created_by=str(created_by),
        )
        logger.info("[audit] %s %s in workspace %s", event_type, entity_id, workspace_id)
        return entry
