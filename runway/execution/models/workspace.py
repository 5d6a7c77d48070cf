# ============================================
# execution/models/workspace.py
# ============================================
from django.db import models


class Workspace(models.Model):
    class Stage(models.TextChoices):
        IDEA = 'Idea', 'Idea'
        MVP = 'MVP', 'MVP'
        EARLY_TRACTION = 'Early Traction', 'Early Traction'

    name = models.CharField(max_length=255)
    stage = models.CharField(
        max_length=20,
        choices=Stage.choices,
        default=Stage.IDEA
    )
    created_by = models.CharField(max_length=128, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'workspaces'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.stage})"


class WorkspaceMember(models.Model):
    class Role(models.TextChoices):
        FOUNDER = 'founder', 'Founder'
        TEAM_MEMBER = 'team_member', 'Team member'
        INVESTOR = 'investor', 'Investor'

    workspace = models.ForeignKey(
        'Workspace',
        on_delete=models.CASCADE,
        related_name='members'
    )
    user_id = models.CharField(max_length=128, db_index=True)
    role = models.CharField(max_length=20, choices=Role.choices)
    email = models.CharField(max_length=254, blank=True, default='')
    display_name = models.CharField(max_length=255, blank=True, default='')
    # Added by email from the team screen; becomes a real member once they join
    is_pending = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'workspace_members'
        ordering = ['created_at']
        unique_together = ['workspace', 'user_id']

    def __str__(self):
        return f"{self.user_id} - {self.role}"


class WorkspaceInvite(models.Model):
    workspace = models.ForeignKey(
        'Workspace',
        on_delete=models.CASCADE,
        related_name='invites'
    )
    role = models.CharField(max_length=20, choices=WorkspaceMember.Role.choices)
    token = models.CharField(max_length=64, db_index=True)
    created_by = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    used = models.BooleanField(default=False)
    used_by = models.CharField(max_length=128, null=True, blank=True)
    used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'workspace_invites'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['workspace', 'token']),
        ]

    def __str__(self):
        state = 'used' if self.used else 'open'
        return f"Invite {self.role} to {self.workspace_id} ({state})"
