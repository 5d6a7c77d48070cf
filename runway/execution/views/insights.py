# ============================================
# execution/views/insights.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response

from execution.selectors.sprint import SprintSelector
from execution.selectors.task import TaskSelector
from execution.selectors.validation import ValidationSelector
from execution.services.insights import (
    get_execution_insights,
    get_validation_insights,
    generate_investor_summary,
)
from execution.services.membership import MembershipService
from .utils import extend_schema, OpenApiTypes, path_int, std_errors, get_workspace_or_404, user_id_of


def _load(workspace):
    return (
        list(TaskSelector.get_tasks_for_workspace(workspace.id)),
        list(SprintSelector.get_sprints_for_workspace(workspace.id)),
        list(ValidationSelector.get_validations_for_workspace(workspace.id)),
    )


class InsightsAPIView(APIView):
    """
    GET: Rule-based execution and validation insights
    """

    @extend_schema(tags=["Insights"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={200: OpenApiTypes.OBJECT, **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        tasks, sprints, validations = _load(workspace)
        return Response({
            'execution': get_execution_insights(tasks, sprints),
            'validation': get_validation_insights(validations),
        })


class InvestorSummaryAPIView(APIView):
    """
    GET: Investor-ready summary built from tasks, sprints and validation
    """

    @extend_schema(tags=["Insights"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={200: OpenApiTypes.OBJECT, **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        tasks, sprints, validations = _load(workspace)
        return Response(generate_investor_summary(workspace.name, workspace.stage, tasks, validations, sprints))
