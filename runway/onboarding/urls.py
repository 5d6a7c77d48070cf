# ============================================
# onboarding/urls.py
# ============================================
from django.urls import path
from onboarding.views.onboarding import (
    ExtractSlidesAPIView,
    ExtractPitchAPIView,
    WorkspaceFromDraftAPIView,
)

app_name = 'onboarding'

urlpatterns = [
    path('onboarding/extract-slides/', ExtractSlidesAPIView.as_view(), name='extract-slides'),
    path('onboarding/extract-pitch/', ExtractPitchAPIView.as_view(), name='extract-pitch'),
    path('onboarding/workspaces/', WorkspaceFromDraftAPIView.as_view(), name='workspace-from-draft'),
]
