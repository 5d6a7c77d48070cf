# ============================================
# integrations/clients/slack_client.py
# ============================================
import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlencode

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class SlackError(Exception):
    """Slack answered with ok=false, or could not be reached"""


class SlackClient:
    """Thin wrapper over the Slack Web API calls the integration needs"""

    AUTHORIZE_URL = 'https://slack.com/oauth/v2/authorize'
    API_BASE = 'https://slack.com/api'
    SCOPES = 'chat:write,channels:read,channels:join,groups:read'

    @staticmethod
    def _timeout() -> float:
        return getattr(settings, 'SLACK_TIMEOUT', 8)

    @classmethod
    def redirect_uri(cls) -> str:
        base = getattr(settings, 'APP_BASE_URL', 'http://localhost:8000').rstrip('/')
        return f"{base}/api/integrations/slack/callback/"

    @classmethod
    def authorize_url(cls, state: str) -> str:
        client_id = getattr(settings, 'SLACK_CLIENT_ID', '')
        if not client_id:
            raise SlackError("SLACK_CLIENT_ID not set")
        query = urlencode({
            'client_id': client_id,
            'scope': cls.SCOPES,
            'redirect_uri': cls.redirect_uri(),
            'state': state,
        })
        return f"{cls.AUTHORIZE_URL}?{query}"

    @classmethod
    def exchange_code(cls, code: str) -> Dict:
        """
        Trade an OAuth code for a bot token.
        Returns {'access_token': ..., 'team': {'id': ..., 'name': ...}}
        """
        client_id = getattr(settings, 'SLACK_CLIENT_ID', '')
        client_secret = getattr(settings, 'SLACK_CLIENT_SECRET', '')
        if not client_id or not client_secret:
            raise SlackError("Slack OAuth not configured")

        try:
            response = requests.post(
                f"{cls.API_BASE}/oauth.v2.access",
                data={
                    'client_id': client_id,
                    'client_secret': client_secret,
                    'code': code,
                    'redirect_uri': cls.redirect_uri(),
                },
                timeout=cls._timeout()
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise SlackError(f"oauth.v2.access failed: {e}") from e

        if not data.get('ok') or not data.get('access_token') or not data.get('team'):
            raise SlackError(data.get('error') or 'Slack OAuth failed')

        return {'access_token': data['access_token'], 'team': data['team']}

    @classmethod
    def list_channels(cls, token: str) -> List[Dict]:
        """Public and private channels visible to the bot; empty on any failure"""
        try:
            response = requests.get(
                f"{cls.API_BASE}/conversations.list",
                params={'types': 'public_channel,private_channel', 'limit': 200},
                headers={'Authorization': f"Bearer {token}"},
                timeout=cls._timeout()
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("[slack] conversations.list failed: %s", e)
            return []

        if not data.get('ok'):
            logger.warning("[slack] conversations.list error: %s", data.get('error'))
            return []

        return [
            {'id': c['id'], 'name': c.get('name', ''), 'is_private': bool(c.get('is_private'))}
            for c in data.get('channels') or []
        ]

    @classmethod
    def _post(cls, method: str, token: str, payload: Dict) -> Tuple[bool, str, Optional[Dict], str]:
        """
        POST JSON to a Web API method.
        Returns (ok, status_code_str, resp_json or None, error)
        """
        try:
            response = requests.post(
                f"{cls.API_BASE}/{method}",
                json=payload,
                headers={'Authorization': f"Bearer {token}"},
                timeout=cls._timeout()
            )
        except requests.RequestException as e:
            return False, 'EXC', None, str(e)

        try:
            data = response.json()
        except ValueError:
            return False, str(response.status_code), None, (response.text or '')[:2000]

        ok = bool(data.get('ok'))
        return ok, str(response.status_code), data, '' if ok else str(data.get('error') or 'unknown_error')

    @classmethod
    def join_channel(cls, token: str, channel_id: str) -> bool:
        ok, _, _, error = cls._post('conversations.join', token, {'channel': channel_id})
        if not ok:
            logger.warning("[slack] conversations.join %s failed: %s", channel_id, error)
        return ok

    @classmethod
    def post_message(cls, token: str, channel_id: str, text: str) -> Tuple[bool, str, Optional[Dict], str]:
        return cls._post('chat.postMessage', token, {'channel': channel_id, 'text': text})
