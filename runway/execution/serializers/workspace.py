# ============================================
# execution/serializers/workspace.py
# ============================================
from rest_framework import serializers
from execution.models import Workspace, WorkspaceMember, WorkspaceInvite


class WorkspaceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    stage = serializers.ChoiceField(
        choices=Workspace.Stage.choices,
        default=Workspace.Stage.IDEA
    )


class WorkspaceUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    stage = serializers.ChoiceField(choices=Workspace.Stage.choices, required=False)


class MemberAddSerializer(serializers.Serializer):
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=WorkspaceMember.Role.choices)


class InviteCreateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=WorkspaceMember.Role.choices)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)


class InviteAcceptSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=64)


class MemberOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkspaceMember
        fields = ['user_id', 'role', 'email', 'display_name', 'is_pending', 'created_at']


class WorkspaceOutputSerializer(serializers.ModelSerializer):
    members = MemberOutputSerializer(many=True, read_only=True)

    class Meta:
        model = Workspace
        fields = ['id', 'name', 'stage', 'created_by', 'members', 'created_at', 'updated_at']


class WorkspaceListOutputSerializer(serializers.ModelSerializer):
    """Lighter serializer for list views"""

    class Meta:
        model = Workspace
        fields = ['id', 'name', 'stage', 'created_by', 'created_at']


class InviteOutputSerializer(serializers.ModelSerializer):
    invite_id = serializers.IntegerField(source='id', read_only=True)

    class Meta:
        model = WorkspaceInvite
        fields = ['invite_id', 'token', 'role', 'expires_at', 'created_at']
