import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from execution.models import Milestone, Task, WorkspaceMember
from execution.services.workspace import WorkspaceService

User = get_user_model()


@pytest.fixture
def founder(db):
    return User.objects.create_user(username="founder", password="pass", email="founder@example.com")

@pytest.fixture
def teammate(db):
    return User.objects.create_user(username="teammate", password="pass", email="team@example.com")

@pytest.fixture
def investor(db):
    return User.objects.create_user(username="investor", password="pass", email="investor@example.com")

@pytest.fixture
def outsider(db):
    return User.objects.create_user(username="outsider", password="pass")

@pytest.fixture
def workspace(founder, teammate, investor):
    ws = WorkspaceService.create_workspace(name="Acme Labs", founder_id=str(founder.id))
    WorkspaceMember.objects.create(workspace=ws, user_id=str(teammate.id), role=WorkspaceMember.Role.TEAM_MEMBER)
    WorkspaceMember.objects.create(workspace=ws, user_id=str(investor.id), role=WorkspaceMember.Role.INVESTOR)
    return ws

@pytest.fixture
def other_workspace(outsider):
    return WorkspaceService.create_workspace(name="Other Co", founder_id=str(outsider.id))

@pytest.fixture
def milestone(workspace):
    return Milestone.objects.create(workspace=workspace, title="Launch MVP", order=0)

@pytest.fixture
def make_task(workspace, milestone):
    def _make(title="Task", status=Task.TaskStatus.TODO, **extra):
        extra.setdefault("milestone", milestone)
        return Task.objects.create(workspace=workspace, title=title, status=status, **extra)
    return _make

@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client
