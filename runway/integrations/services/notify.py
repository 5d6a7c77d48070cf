# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.utils import timezone

from execution.exceptions import ValidationError
from integrations.clients.slack_client import SlackClient
from integrations.models import DeliveryLog, WorkspaceIntegration

logger = logging.getLogger(__name__)

EVENT_TYPES = ('sprint_locked', 'sprint_closed', 'milestone_completed')


def build_message(event_type: str, metadata: Dict[str, Any]) -> str:
    """Fixed Slack text per event type"""
    metadata = metadata or {}

    if event_type == 'sprint_locked':
        label = metadata.get('sprint_label') or 'Sprint'
        goals = metadata.get('sprint_goals') or []
        goal_lines = '\n'.join(f"• {g}" for g in goals) if goals else '• (no goals set)'
        return f"🚀 Sprint locked: {label}\nGoals committed:\n{goal_lines}"

    if event_type == 'sprint_closed':
        label = metadata.get('sprint_label') or 'Sprint'
        tasks = f"{metadata.get('tasks_completed', 0)}/{metadata.get('tasks_total', 0)}"
        return (
            f"✅ Sprint closed: {label}\n"
            f"• Tasks completed: {tasks}\n"
            f"• Milestones delivered: {metadata.get('milestones_delivered', 0)}\n"
            f"• Validations logged: {metadata.get('validations_logged', 0)}"
        )

    if event_type == 'milestone_completed':
        title = metadata.get('milestone_title') or 'Milestone'
        sprint = metadata.get('sprint_label')
        return f"🎯 Milestone completed: {title}" + (f"\nSprint: {sprint}" if sprint else '')

    raise ValidationError(f"Unknown event type: {event_type}")


def _mask_token(token: Optional[str]) -> str:
    if not token:
        return ''
    if len(token) <= 14:
        return '***'
    return f"{token[:6]}...{token[-4:]}"


def _create_log(
    *,
    workspace_id: int,
    event_type: str,
    text: str,
    payload: Optional[Dict[str, Any]] = None,
    channel_id: str = '',
    delivered: bool,
    provider_status_code: str = '',
    provider_response: Optional[Dict[str, Any]] = None,
    last_error: str = '',
) -> DeliveryLog:
    return DeliveryLog.objects.create(
        workspace_id=workspace_id,
        event_type=event_type,
        text=text,
        payload=payload or None,
        channel_id=channel_id or '',
        delivered=delivered,
        delivered_at=timezone.now() if delivered else None,
        provider_status_code=str(provider_status_code or ''),
        provider_response=provider_response or None,
        last_error=last_error or '',
    )


def notify_workspace_event(
    *,
    workspace_id: int,
    event_type: str,
    metadata: Dict[str, Any],
) -> bool:
    """
    Post an execution event to the workspace's Slack channel.

    Best-effort: every attempt is written to DeliveryLog and the result is
    returned as True/False. Only an unknown event type raises.
    """
    text = build_message(event_type, metadata)

    integration = (
        WorkspaceIntegration.objects
        .filter(workspace_id=workspace_id, integration_type=WorkspaceIntegration.IntegrationType.SLACK)
        .order_by('-connected_at')
        .first()
    )
    if integration is None or not integration.bot_token or not integration.channel_id:
        logger.info("[notify.slack] workspace %s has no Slack channel; skip.", workspace_id)
        _create_log(
            workspace_id=workspace_id,
            event_type=event_type,
            text=text,
            payload={'metadata': metadata},
            delivered=False,
            last_error='Slack not connected',
        )
        return False

    ok, status_code, resp_json, error = SlackClient.post_message(
        integration.bot_token,
        integration.channel_id,
        text,
    )
    if not ok:
        logger.warning(
            "[notify.slack] chat.postMessage failed for workspace %s (%s): %s",
            workspace_id, status_code, error,
        )

    _create_log(
        workspace_id=workspace_id,
        event_type=event_type,
        text=text,
        payload={'metadata': metadata, 'token': _mask_token(integration.bot_token)},
        channel_id=integration.channel_id,
        delivered=ok,
        provider_status_code=status_code,
        provider_response=resp_json,
        last_error='' if ok else error,
    )
    return ok
