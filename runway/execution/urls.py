# ============================================
# execution/urls.py
# ============================================
from django.urls import path
from execution.views.workspace import (
    WorkspaceListCreateAPIView,
    WorkspaceDetailAPIView,
    WorkspaceRoleAPIView,
    MemberAddAPIView,
    MemberRemoveAPIView,
    InviteCreateAPIView,
    InviteAcceptAPIView,
)
from execution.views.milestone import (
    MilestoneListCreateAPIView,
    MilestoneDetailAPIView,
)
from execution.views.task import (
    TaskListCreateAPIView,
    TaskDetailAPIView,
)
from execution.views.sprint import (
    SprintListCreateAPIView,
    SprintDetailAPIView,
    SprintTasksAPIView,
    SprintLockAPIView,
    SprintCloseAPIView,
)
from execution.views.ledger import LedgerListAPIView
from execution.views.validation import (
    ValidationListCreateAPIView,
    ExternalValidationAPIView,
)
from execution.views.insights import (
    InsightsAPIView,
    InvestorSummaryAPIView,
)

app_name = 'execution'

urlpatterns = [
    # Workspaces
    path('workspaces/', WorkspaceListCreateAPIView.as_view(), name='workspace-list-create'),
    path('workspaces/<int:workspace_id>/', WorkspaceDetailAPIView.as_view(), name='workspace-detail'),
    path('workspaces/<int:workspace_id>/role/', WorkspaceRoleAPIView.as_view(), name='workspace-role'),
    path('workspaces/<int:workspace_id>/members/', MemberAddAPIView.as_view(), name='member-add'),
    path('workspaces/<int:workspace_id>/members/<str:member_user_id>/', MemberRemoveAPIView.as_view(), name='member-remove'),

    # Invites
    path('workspaces/<int:workspace_id>/invites/', InviteCreateAPIView.as_view(), name='invite-create'),
    path('workspaces/<int:workspace_id>/invites/accept/', InviteAcceptAPIView.as_view(), name='invite-accept'),

    # Milestones
    path('workspaces/<int:workspace_id>/milestones/', MilestoneListCreateAPIView.as_view(), name='milestone-list-create'),
    path('milestones/<int:milestone_id>/', MilestoneDetailAPIView.as_view(), name='milestone-detail'),

    # Tasks
    path('workspaces/<int:workspace_id>/tasks/', TaskListCreateAPIView.as_view(), name='task-list-create'),
    path('tasks/<int:task_id>/', TaskDetailAPIView.as_view(), name='task-detail'),

    # Sprints
    path('workspaces/<int:workspace_id>/sprints/', SprintListCreateAPIView.as_view(), name='sprint-list-create'),
    path('sprints/<int:sprint_id>/', SprintDetailAPIView.as_view(), name='sprint-detail'),
    path('sprints/<int:sprint_id>/tasks/', SprintTasksAPIView.as_view(), name='sprint-tasks'),
    path('sprints/<int:sprint_id>/lock/', SprintLockAPIView.as_view(), name='sprint-lock'),
    path('sprints/<int:sprint_id>/close/', SprintCloseAPIView.as_view(), name='sprint-close'),

    # Ledger
    path('workspaces/<int:workspace_id>/ledger/', LedgerListAPIView.as_view(), name='ledger-list'),

    # Validation
    path('workspaces/<int:workspace_id>/validations/', ValidationListCreateAPIView.as_view(), name='validation-list-create'),
    path('workspaces/<int:workspace_id>/validations/external/', ExternalValidationAPIView.as_view(), name='validation-external'),

    # Insights
    path('workspaces/<int:workspace_id>/insights/', InsightsAPIView.as_view(), name='insights'),
    path('workspaces/<int:workspace_id>/investor-summary/', InvestorSummaryAPIView.as_view(), name='investor-summary'),
]
