# ============================================
# funding/urls.py
# ============================================
from django.urls import path
from funding.views.funding import (
    FundingRoundListCreateAPIView,
    FundingRoundNotesAPIView,
    AllocationListCreateAPIView,
    AllocationDetailAPIView,
    SpendListCreateAPIView,
    SpendDetailAPIView,
    AuditLogAPIView,
    FundingSummaryAPIView,
)

app_name = 'funding'

urlpatterns = [
    # Rounds & allocations
    path('workspaces/<int:workspace_id>/funding-rounds/', FundingRoundListCreateAPIView.as_view(), name='round-list-create'),
    path('funding-rounds/<int:round_id>/', FundingRoundNotesAPIView.as_view(), name='round-notes'),
    path('funding-rounds/<int:round_id>/allocations/', AllocationListCreateAPIView.as_view(), name='allocation-list-create'),
    path('allocations/<int:allocation_id>/', AllocationDetailAPIView.as_view(), name='allocation-detail'),

    # Spend
    path('workspaces/<int:workspace_id>/spend/', SpendListCreateAPIView.as_view(), name='spend-list-create'),
    path('spend/<int:spend_id>/', SpendDetailAPIView.as_view(), name='spend-detail'),

    # Review
    path('workspaces/<int:workspace_id>/audit-log/', AuditLogAPIView.as_view(), name='audit-log'),
    path('workspaces/<int:workspace_id>/funding-summary/', FundingSummaryAPIView.as_view(), name='funding-summary'),
]
