from datetime import datetime, timedelta, timezone as dt_timezone

from execution.models import Sprint, Task, ValidationEntry
from execution.services.insights import (
    generate_investor_summary,
    get_execution_insights,
    get_validation_insights,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


def _task(pk, status=Task.TaskStatus.TODO, age_days=0):
    return Task(id=pk, title=f"T{pk}", status=status, updated_at=NOW - timedelta(days=age_days))


def _closed(pct):
    return Sprint(completed=True, locked=True, completion_stats={"completion_percentage": pct})


def _ids(insights):
    return [i["id"] for i in insights]


def test_stale_tasks_need_two():
    one = [_task(1, age_days=20), _task(2, status=Task.TaskStatus.DONE)]
    assert "stale-tasks" not in _ids(get_execution_insights(one, [], now=NOW))

    two = [_task(1, age_days=20), _task(2, age_days=15), _task(3, status=Task.TaskStatus.DONE, age_days=40)]
    stale = [i for i in get_execution_insights(two, [], now=NOW) if i["id"] == "stale-tasks"]
    assert stale[0]["task_ids"] == [1, 2]
    assert stale[0]["severity"] == "high"

def test_low_progress_threshold():
    tasks = [_task(1, Task.TaskStatus.DONE), _task(2), _task(3), _task(4), _task(5)]
    assert "low-progress" in _ids(get_execution_insights(tasks, [], now=NOW))

    tasks = [_task(1, Task.TaskStatus.DONE), _task(2), _task(3), _task(4)]
    assert "low-progress" not in _ids(get_execution_insights(tasks, [], now=NOW))

def test_low_progress_ignores_tiny_backlogs():
    assert get_execution_insights([_task(1), _task(2)], [], now=NOW) == []

def test_sprint_reliability_needs_two_low_sprints():
    assert "sprint-reliability" not in _ids(get_execution_insights([], [_closed(40), _closed(90)], now=NOW))
    assert "sprint-reliability" in _ids(get_execution_insights([], [_closed(40), _closed(10)], now=NOW))

def test_open_sprints_are_ignored_for_reliability():
    open_sprint = Sprint(completed=False, locked=True, completion_stats=None)
    assert get_execution_insights([], [_closed(10), open_sprint], now=NOW) == []

def test_validation_insights():
    assert _ids(get_validation_insights([])) == ["missing-validation"]
    assert _ids(get_validation_insights([ValidationEntry(summary="a")])) == ["weak-signal"]
    assert get_validation_insights([ValidationEntry(summary="a"), ValidationEntry(summary="b")]) == []

def test_investor_summary_numbers():
    tasks = [_task(1, Task.TaskStatus.DONE), _task(2, Task.TaskStatus.DONE), _task(3)]
    sprints = [_closed(67), _closed(100)]

    summary = generate_investor_summary("Acme Labs", "MVP", tasks, [ValidationEntry(summary="a")], sprints)

    assert summary["problem"].startswith("Acme Labs is in MVP stage")
    assert "2/3 tasks completed (67%)" in summary["traction"]
    assert "2 sprints closed with 84% avg completion" in summary["traction"]
    assert summary["execution_progress"] == "2/3 tasks done (67%). Sprint reliability: 84% average completion."
    assert summary["roadmap"] == "Continue weekly sprints; 1 tasks in progress."

def test_investor_summary_empty_workspace():
    summary = generate_investor_summary("Acme Labs", "Idea", [], [], [])
    assert summary["traction"] == "0/0 tasks completed (0%). 0 sprints closed with 0% avg completion"
    assert summary["validation_status"].startswith("No validation entries yet")
    assert summary["roadmap"] == "Define sprints and tasks to build execution history."
