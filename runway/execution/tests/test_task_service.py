import pytest
from datetime import date

from execution.exceptions import AuthorizationError, ValidationError
from execution.models import Milestone, Sprint, Task
from execution.services.milestone import MilestoneService
from execution.services.sprint import SprintService
from execution.services.task import TaskService


@pytest.fixture
def open_sprint(workspace, founder, make_task):
    return SprintService.create_sprint(
        workspace=workspace,
        user_id=str(founder.id),
        week_start_date=date(2025, 1, 6),
        week_end_date=date(2025, 1, 12),
        task_ids=[make_task("Seed").id],
    )


@pytest.mark.django_db
def test_create_task_in_backlog(workspace, teammate, milestone):
    task = TaskService.create_task(
        workspace=workspace, user_id=str(teammate.id), title="  Write landing page ", milestone_id=milestone.id,
    )
    assert task.title == "Write landing page"
    assert task.sprint_id is None
    assert task.status == Task.TaskStatus.TODO

@pytest.mark.django_db
def test_investor_cannot_create_task(workspace, investor):
    with pytest.raises(AuthorizationError):
        TaskService.create_task(workspace=workspace, user_id=str(investor.id), title="Nope")
    assert not Task.objects.exists()

@pytest.mark.django_db
def test_create_task_rejects_foreign_milestone(workspace, other_workspace, founder):
    foreign = Milestone.objects.create(workspace=other_workspace, title="Elsewhere")
    with pytest.raises(ValidationError):
        TaskService.create_task(workspace=workspace, user_id=str(founder.id), title="T", milestone_id=foreign.id)

@pytest.mark.django_db
def test_create_task_into_open_sprint(workspace, founder, open_sprint):
    task = TaskService.create_task(
        workspace=workspace, user_id=str(founder.id), title="Late addition", sprint_id=open_sprint.id,
    )
    open_sprint.refresh_from_db()
    assert task.sprint_id == open_sprint.id
    assert open_sprint.task_ids[-1] == task.id

@pytest.mark.django_db
def test_cannot_add_task_to_locked_sprint(workspace, founder, open_sprint, make_task):
    SprintService.lock_sprint(sprint=open_sprint, user_id=str(founder.id))
    task = make_task("Backlog item")

    with pytest.raises(ValidationError):
        TaskService.update_task(task=task, user_id=str(founder.id), sprint_id=open_sprint.id)

    open_sprint.refresh_from_db()
    assert task.id not in open_sprint.task_ids

@pytest.mark.django_db
def test_cannot_move_task_out_of_locked_sprint(workspace, founder, open_sprint):
    SprintService.lock_sprint(sprint=open_sprint, user_id=str(founder.id))
    task = Task.objects.get(sprint=open_sprint)

    with pytest.raises(ValidationError):
        TaskService.update_task(task=task, user_id=str(founder.id), sprint_id=None)

    assert Task.objects.get(pk=task.pk).sprint_id == open_sprint.id

@pytest.mark.django_db
def test_status_change_allowed_in_locked_sprint(workspace, founder, open_sprint):
    SprintService.lock_sprint(sprint=open_sprint, user_id=str(founder.id))
    task = Task.objects.get(sprint=open_sprint)

    TaskService.update_task(task=task, user_id=str(founder.id), status=Task.TaskStatus.DONE)

    assert Task.objects.get(pk=task.pk).status == Task.TaskStatus.DONE

@pytest.mark.django_db
def test_move_task_back_to_backlog_from_open_sprint(workspace, founder, open_sprint):
    task = Task.objects.get(sprint=open_sprint)
    TaskService.update_task(task=task, user_id=str(founder.id), sprint_id=None)

    open_sprint.refresh_from_db()
    assert Task.objects.get(pk=task.pk).sprint_id is None
    assert open_sprint.task_ids == []

@pytest.mark.django_db
def test_done_task_updates_milestone_progress(workspace, founder, milestone, make_task):
    t1, t2, t3 = make_task("A"), make_task("B"), make_task("C")

    TaskService.update_task(task=t1, user_id=str(founder.id), status=Task.TaskStatus.DONE)
    TaskService.update_task(task=t2, user_id=str(founder.id), status=Task.TaskStatus.DONE)

    milestone.refresh_from_db()
    assert milestone.progress_percentage == 67

@pytest.mark.django_db
def test_milestone_order_defaults_to_position(workspace, founder, milestone):
    second = MilestoneService.create_milestone(workspace=workspace, user_id=str(founder.id), title="Beta")
    assert second.order == 1

@pytest.mark.django_db
def test_milestone_spend_range_checked(workspace, founder):
    from decimal import Decimal

    with pytest.raises(ValidationError):
        MilestoneService.create_milestone(
            workspace=workspace, user_id=str(founder.id), title="Beta",
            estimated_spend_range_min=Decimal("500"), estimated_spend_range_max=Decimal("100"),
        )

@pytest.mark.django_db
def test_completing_milestone_emits_event(workspace, founder, milestone, django_capture_on_commit_callbacks):
    from unittest.mock import patch

    with patch("execution.services.events.notify_workspace_event") as notify:
        with django_capture_on_commit_callbacks(execute=True):
            MilestoneService.update_milestone(
                milestone=milestone, user_id=str(founder.id), status=Milestone.MilestoneStatus.COMPLETED,
            )
        with django_capture_on_commit_callbacks(execute=True):
            MilestoneService.update_milestone(milestone=milestone, user_id=str(founder.id), title="Launch MVP v1")

    notify.assert_called_once_with(
        workspace_id=workspace.id,
        event_type="milestone_completed",
        metadata={"milestone_title": "Launch MVP"},
    )
