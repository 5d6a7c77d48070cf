# ============================================
# integrations/services/slack.py
# ============================================
import logging
from datetime import timedelta
from typing import Dict, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from execution.exceptions import NotFoundError, ValidationError
from execution.models import Workspace
from execution.services.membership import MembershipService
from integrations.clients.slack_client import SlackClient, SlackError
from integrations.models import SlackSetup, WorkspaceIntegration

logger = logging.getLogger(__name__)


def _setup_ttl() -> timedelta:
    return timedelta(seconds=getattr(settings, 'SLACK_SETUP_TTL_SECONDS', 15 * 60))


def _dashboard_url(path: str = '') -> str:
    base = getattr(settings, 'APP_BASE_URL', 'http://localhost:8000').rstrip('/')
    return f"{base}/dashboard{path}"


class SlackIntegrationService:

    @staticmethod
    def start_oauth(*, workspace: Workspace, user_id: str) -> str:
        """Authorize URL for the founder to visit; state carries the workspace id"""
        MembershipService.check_founder(workspace, user_id, 'connect Slack')
        try:
            return SlackClient.authorize_url(state=str(workspace.id))
        except SlackError as e:
            raise ValidationError(str(e))

    @staticmethod
    def handle_callback(*, code: Optional[str], state: Optional[str], error: Optional[str] = None) -> str:
        """
        Finish the OAuth round-trip and return where to redirect the browser.
        Failures redirect back to the dashboard with a slack_error flag.
        """
        if error:
            return _dashboard_url('?slack_error=denied')
        if not code or not state:
            return _dashboard_url('?slack_error=missing')

        workspace = Workspace.objects.filter(id=state).first() if state.isdigit() else None
        if workspace is None:
            return _dashboard_url('?slack_error=missing')

        try:
            result = SlackClient.exchange_code(code)
        except SlackError as e:
            logger.warning("[slack] code exchange failed for workspace %s: %s", state, e)
            return _dashboard_url('?slack_error=exchange')

        channels = SlackClient.list_channels(result['access_token'])
        setup = SlackSetup.objects.create(
            workspace=workspace,
            bot_token=result['access_token'],
            slack_team_id=result['team'].get('id', ''),
            team_name=result['team'].get('name', ''),
            channels=[{'id': c['id'], 'name': c['name']} for c in channels],
        )
        return _dashboard_url(f"/{workspace.id}/integrations?slack_setup={setup.id}")

    @staticmethod
    def _get_live_setup(setup_id) -> SlackSetup:
        setup = SlackSetup.objects.select_related('workspace').filter(id=setup_id).first()
        if setup is None:
            raise NotFoundError("Setup expired or invalid")
        if timezone.now() - setup.created_at > _setup_ttl():
            setup.delete()
            raise NotFoundError("Setup expired")
        return setup

    @staticmethod
    def get_setup(*, setup_id, user_id: str) -> Dict:
        """Team name and channel list for the picker; the token stays server-side"""
        setup = SlackIntegrationService._get_live_setup(setup_id)
        MembershipService.check_founder(setup.workspace, user_id, 'complete Slack setup')
        return {
            'team_name': setup.team_name or 'Slack',
            'channels': setup.channels or [],
        }

    @staticmethod
    @transaction.atomic
    def complete_setup(
        *,
        setup_id,
        user_id: str,
        channel_id: str,
        channel_name: str = ''
    ) -> WorkspaceIntegration:
        setup = SlackIntegrationService._get_live_setup(setup_id)
        MembershipService.check_founder(setup.workspace, user_id, 'complete Slack setup')

        SlackClient.join_channel(setup.bot_token, channel_id)

        integration = WorkspaceIntegration.objects.create(
            workspace=setup.workspace,
            integration_type=WorkspaceIntegration.IntegrationType.SLACK,
            slack_team_id=setup.slack_team_id,
            channel_id=channel_id,
            channel_name=(channel_name or '').strip() or channel_id,
            bot_token=setup.bot_token,
            created_by=str(user_id),
        )
        setup.delete()

        logger.info("[slack] workspace %s connected to #%s", integration.workspace_id, integration.channel_name)
        return integration

    @staticmethod
    def list_integrations(*, workspace: Workspace, user_id: str):
        MembershipService.check_member(workspace, user_id)
        return WorkspaceIntegration.objects.filter(workspace=workspace).order_by('-connected_at')

    @staticmethod
    def disconnect(*, workspace: Workspace, user_id: str, integration_id: int) -> None:
        MembershipService.check_founder(workspace, user_id, 'disconnect integrations')
        deleted, _ = WorkspaceIntegration.objects.filter(id=integration_id, workspace=workspace).delete()
        if not deleted:
            raise NotFoundError("Integration not found")
        logger.info("[slack] integration %s removed from workspace %s", integration_id, workspace.id)
