# ============================================
# funding/views/funding.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from execution.exceptions import NotFoundError
from execution.services.membership import MembershipService
from execution.views.utils import (
    extend_schema, OpenApiTypes, path_int, q_int, q_str, responses_ok, std_errors,
    get_workspace_or_404, user_id_of, query_int,
)
from funding.selectors.funding import AUDIT_DEFAULT_LIMIT, FundingSelector
from funding.serializers.funding import (
    FundingRoundCreateSerializer,
    FundingRoundNotesSerializer,
    FundingRoundOutputSerializer,
    AllocationCreateSerializer,
    AllocationOutputSerializer,
    SpendCreateSerializer,
    SpendUpdateSerializer,
    SpendOutputSerializer,
    AuditLogOutputSerializer,
)
from funding.services.funding import AllocationService, FundingRoundService, SpendService
from funding.services.summary import get_funding_summary


class FundingRoundListCreateAPIView(APIView):
    """
    GET: Funding rounds, latest date first
    POST: Record a funding round (founder)
    """

    @extend_schema(tags=["Funding"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={**responses_ok(FundingRoundOutputSerializer, many=True), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))
        rounds = FundingSelector.get_rounds_for_workspace(workspace.id)
        return Response(FundingRoundOutputSerializer(rounds, many=True).data)

    @extend_schema(tags=["Funding"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=FundingRoundCreateSerializer, responses={201: FundingRoundOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = FundingRoundCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        funding_round = FundingRoundService.create_round(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(FundingRoundOutputSerializer(funding_round).data, status=status.HTTP_201_CREATED)


class FundingRoundNotesAPIView(APIView):
    """
    PATCH: Replace the notes of a round (founder)
    """

    @extend_schema(tags=["Funding"], parameters=[path_int("round_id", "Funding round ID")],
                   request=FundingRoundNotesSerializer,
                   responses={**responses_ok(FundingRoundOutputSerializer), **std_errors()})
    def patch(self, request, round_id):
        funding_round = FundingSelector.get_round_by_id(round_id)
        if not funding_round:
            raise NotFoundError("Funding round not found")

        serializer = FundingRoundNotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        funding_round = FundingRoundService.update_notes(
            funding_round=funding_round,
            user_id=user_id_of(request),
            notes=serializer.validated_data['notes'],
        )
        return Response(FundingRoundOutputSerializer(funding_round).data)


class AllocationListCreateAPIView(APIView):
    """
    GET: Allocations of a round
    POST: Allocate part of the round to a category (founder / team member)
    """

    @extend_schema(tags=["Funding"], parameters=[path_int("round_id", "Funding round ID")],
                   responses={**responses_ok(AllocationOutputSerializer, many=True), **std_errors()})
    def get(self, request, round_id):
        funding_round = FundingSelector.get_round_by_id(round_id)
        if not funding_round:
            raise NotFoundError("Funding round not found")
        MembershipService.check_member(funding_round.workspace, user_id_of(request))

        allocations = FundingSelector.get_allocations_for_workspace(funding_round.workspace_id, round_id=funding_round.id)
        return Response(AllocationOutputSerializer(allocations, many=True).data)

    @extend_schema(tags=["Funding"], parameters=[path_int("round_id", "Funding round ID")],
                   request=AllocationCreateSerializer, responses={201: AllocationOutputSerializer, **std_errors()})
    def post(self, request, round_id):
        funding_round = FundingSelector.get_round_by_id(round_id)
        if not funding_round:
            raise NotFoundError("Funding round not found")

        serializer = AllocationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        allocation = AllocationService.create_allocation(
            funding_round=funding_round,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(AllocationOutputSerializer(allocation).data, status=status.HTTP_201_CREATED)


class AllocationDetailAPIView(APIView):
    """
    DELETE: Remove an allocation (founder / team member)
    """

    @extend_schema(tags=["Funding"], parameters=[path_int("allocation_id", "Allocation ID")],
                   responses={204: None, **std_errors()})
    def delete(self, request, allocation_id):
        allocation = FundingSelector.get_allocation_by_id(allocation_id)
        if not allocation:
            raise NotFoundError("Allocation not found")

        AllocationService.delete_allocation(allocation=allocation, user_id=user_id_of(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class SpendListCreateAPIView(APIView):
    """
    GET: Spend logs, latest first
    POST: Log spend (founder / team member)

    Query params (GET):
    - category: string (optional)
    """

    @extend_schema(tags=["Spend"],
                   parameters=[path_int("workspace_id", "Workspace ID"), q_str("category", "Spend category")],
                   responses={**responses_ok(SpendOutputSerializer, many=True), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        spend = FundingSelector.get_spend_for_workspace(workspace.id, category=request.query_params.get('category'))
        return Response(SpendOutputSerializer(spend, many=True).data)

    @extend_schema(tags=["Spend"], parameters=[path_int("workspace_id", "Workspace ID")],
                   request=SpendCreateSerializer, responses={201: SpendOutputSerializer, **std_errors()})
    def post(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)

        serializer = SpendCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        spend = SpendService.log_spend(
            workspace=workspace,
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(SpendOutputSerializer(spend).data, status=status.HTTP_201_CREATED)


class SpendDetailAPIView(APIView):
    """
    PATCH: Update a spend log
    DELETE: Delete a spend log
    """

    @staticmethod
    def _get_spend(spend_id):
        spend = FundingSelector.get_spend_by_id(spend_id)
        if not spend:
            raise NotFoundError("Spend log not found")
        return spend

    @extend_schema(tags=["Spend"], parameters=[path_int("spend_id", "Spend log ID")],
                   request=SpendUpdateSerializer, responses={**responses_ok(SpendOutputSerializer), **std_errors()})
    def patch(self, request, spend_id):
        spend = self._get_spend(spend_id)

        serializer = SpendUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        spend = SpendService.update_spend(spend=spend, user_id=user_id_of(request), **serializer.validated_data)
        return Response(SpendOutputSerializer(spend).data)

    @extend_schema(tags=["Spend"], parameters=[path_int("spend_id", "Spend log ID")],
                   responses={204: None, **std_errors()})
    def delete(self, request, spend_id):
        spend = self._get_spend(spend_id)
        SpendService.delete_spend(spend=spend, user_id=user_id_of(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class AuditLogAPIView(APIView):
    """
    GET: Funding activity history, newest first

    Query params:
    - limit: int (optional, default 50)
    """

    @extend_schema(tags=["Funding"],
                   parameters=[path_int("workspace_id", "Workspace ID"), q_int("limit", "Max entries (default 50)")],
                   responses={**responses_ok(AuditLogOutputSerializer, many=True), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))

        limit = query_int(request, 'limit') or AUDIT_DEFAULT_LIMIT
        entries = FundingSelector.get_audit_log(workspace.id, limit=limit)
        return Response(AuditLogOutputSerializer(entries, many=True).data)


class FundingSummaryAPIView(APIView):
    """
    GET: Raised vs spent, burn rate, runway months and funding insights
    """

    @extend_schema(tags=["Funding"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={200: OpenApiTypes.OBJECT, **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        MembershipService.check_member(workspace, user_id_of(request))
        return Response(get_funding_summary(workspace))
