# ============================================
# integrations/urls.py
# ============================================
from django.urls import path
from integrations.views.integration import (
    SlackOAuthStartAPIView,
    SlackCallbackAPIView,
    SlackSetupAPIView,
    SlackCompleteAPIView,
    SlackNotifyAPIView,
    IntegrationListAPIView,
    IntegrationDetailAPIView,
)

app_name = 'integrations'

urlpatterns = [
    # Slack OAuth
    path('workspaces/<int:workspace_id>/slack/oauth/', SlackOAuthStartAPIView.as_view(), name='slack-oauth'),
    path('integrations/slack/callback/', SlackCallbackAPIView.as_view(), name='slack-callback'),
    path('integrations/slack/setup/<uuid:setup_id>/', SlackSetupAPIView.as_view(), name='slack-setup'),
    path('integrations/slack/complete/', SlackCompleteAPIView.as_view(), name='slack-complete'),
    path('integrations/slack/notify/', SlackNotifyAPIView.as_view(), name='slack-notify'),

    # Connected integrations
    path('workspaces/<int:workspace_id>/integrations/', IntegrationListAPIView.as_view(), name='integration-list'),
    path(
        'workspaces/<int:workspace_id>/integrations/<int:integration_id>/',
        IntegrationDetailAPIView.as_view(),
        name='integration-detail'
    ),
]
