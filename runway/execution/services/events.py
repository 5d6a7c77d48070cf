# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Any, Dict

from django.db import transaction

from integrations.services.notify import notify_workspace_event

logger = logging.getLogger(__name__)


def _send(workspace_id: int, event_type: str, metadata: Dict[str, Any]) -> None:
    try:
        notify_workspace_event(
            workspace_id=workspace_id,
            event_type=event_type,
            metadata=metadata,
        )
    except Exception as ex:
        logger.warning("[events] %s for workspace %s not delivered: %s", event_type, workspace_id, ex)


def emit_after_commit(workspace_id: int, event_type: str, metadata: Dict[str, Any]) -> None:
    """Queue a Slack event once the surrounding transaction commits. Never raises."""
    transaction.on_commit(lambda: _send(workspace_id, event_type, metadata))
