# ============================================
# integrations/views/integration.py
# ============================================
from django.shortcuts import redirect
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework import serializers, status

from execution.services.membership import MembershipService
from execution.views.utils import (
    extend_schema, inline_serializer, path_int, q_str, responses_ok, std_errors,
    get_workspace_or_404, user_id_of,
)
from integrations.serializers.integration import (
    IntegrationOutputSerializer,
    NotifySerializer,
    SlackCompleteSerializer,
    SlackSetupOutputSerializer,
)
from integrations.services.notify import notify_workspace_event
from integrations.services.slack import SlackIntegrationService

OkSerializer = inline_serializer(name="Ok", fields={"ok": serializers.BooleanField()})


class SlackOAuthStartAPIView(APIView):
    """
    GET: Redirect the founder to Slack's consent screen
    """

    @extend_schema(tags=["Slack"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={302: None, **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        url = SlackIntegrationService.start_oauth(workspace=workspace, user_id=user_id_of(request))
        return redirect(url)


class SlackCallbackAPIView(APIView):
    """
    GET: OAuth redirect target. Stores a short-lived setup record and
    sends the browser to the channel picker.

    Query params:
    - code, state, error (set by Slack)
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(tags=["Slack"],
                   parameters=[q_str("code", "OAuth code"), q_str("state", "Workspace ID"), q_str("error", "Slack error")],
                   responses={302: None})
    def get(self, request):
        url = SlackIntegrationService.handle_callback(
            code=request.query_params.get('code'),
            state=request.query_params.get('state'),
            error=request.query_params.get('error'),
        )
        return redirect(url)


class SlackSetupAPIView(APIView):
    """
    GET: Team name and channel list for the picker (founder). Expires after 15 minutes.
    """

    @extend_schema(tags=["Slack"], responses={**responses_ok(SlackSetupOutputSerializer), **std_errors()})
    def get(self, request, setup_id):
        data = SlackIntegrationService.get_setup(setup_id=setup_id, user_id=user_id_of(request))
        return Response(SlackSetupOutputSerializer(data).data)


class SlackCompleteAPIView(APIView):
    """
    POST: Save the chosen channel and finish the setup (founder)

    Request body:
    - setup_id: uuid
    - channel_id: string
    - channel_name: string
    """

    @extend_schema(tags=["Slack"], request=SlackCompleteSerializer,
                   responses={201: IntegrationOutputSerializer, **std_errors()})
    def post(self, request):
        serializer = SlackCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        integration = SlackIntegrationService.complete_setup(
            user_id=user_id_of(request),
            **serializer.validated_data
        )
        return Response(IntegrationOutputSerializer(integration).data, status=status.HTTP_201_CREATED)


class IntegrationListAPIView(APIView):
    """
    GET: Connected integrations (members). Tokens are never returned.
    """

    @extend_schema(tags=["Integrations"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={**responses_ok(IntegrationOutputSerializer, many=True), **std_errors()})
    def get(self, request, workspace_id):
        workspace = get_workspace_or_404(workspace_id)
        integrations = SlackIntegrationService.list_integrations(workspace=workspace, user_id=user_id_of(request))
        return Response(IntegrationOutputSerializer(integrations, many=True).data)


class IntegrationDetailAPIView(APIView):
    """
    DELETE: Disconnect an integration (founder)
    """

    @extend_schema(tags=["Integrations"], parameters=[path_int("workspace_id", "Workspace ID")],
                   responses={204: None, **std_errors()})
    def delete(self, request, workspace_id, integration_id):
        workspace = get_workspace_or_404(workspace_id)
        SlackIntegrationService.disconnect(
            workspace=workspace,
            user_id=user_id_of(request),
            integration_id=integration_id,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class SlackNotifyAPIView(APIView):
    """
    POST: Post an execution event to the workspace's Slack channel (members).
    Always 200; `ok` says whether Slack accepted the message.
    """

    @extend_schema(tags=["Slack"], request=NotifySerializer, responses={**responses_ok(OkSerializer), **std_errors()})
    def post(self, request):
        serializer = NotifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        workspace = get_workspace_or_404(serializer.validated_data['workspace_id'])
        MembershipService.check_member(workspace, user_id_of(request))

        ok = notify_workspace_event(
            workspace_id=workspace.id,
            event_type=serializer.validated_data['event_type'],
            metadata=serializer.validated_data['metadata'],
        )
        return Response({'ok': ok})
