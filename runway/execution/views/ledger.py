# ============================================
# execution/views/ledger.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response

from execution.serializers.ledger import LedgerEntryOutputSerializer
from execution.selectors.ledger import LedgerSelector
from execution.services.membership import MembershipService
from .utils import (
    extend_schema, path_int, q_int, responses_ok, std_errors,
    get_workspace_or_404, user_id_of, query_int,
)


class LedgerListAPIView(APIView):
    """
    GET: Commitment / completion entries, newest first (max 50)

    Query params:
    - sprint_id: int (optional)
    """

    @extend_schema(
        tags=["Ledger"],
        parameters=[path_int("workspace_id", "Workspace ID"), q_int("sprint_id", "Only entries of this sprint")],
        responses={**responses_ok(LedgerEntryOutputSerializer, many=True), **std_errors()},
    )
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        entries = LedgerSelector.get_ledger_for_workspace(workspace.id, sprint_id=query_int(request, 'sprint_id'))
        return Response(LedgerEntryOutputSerializer(entries, many=True).data)
