# -*- coding: utf-8 -*-
"""
Rule-based execution / validation insights and the investor summary.

Pure functions over already-loaded rows; callers decide what to load.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from django.utils import timezone

from execution.models import Sprint, Task, ValidationEntry
from execution.services.sprint import completion_percentage

STALE_AFTER = timedelta(days=14)
MIN_STALE_TASKS = 2
LOW_PROGRESS_MIN_TASKS = 3
LOW_PROGRESS_PCT = 25
LOW_SPRINT_PCT = 50
MIN_LOW_SPRINTS = 2


def _closed_percentages(sprints: Sequence[Sprint]) -> List[int]:
    return [
        s.completion_stats.get('completion_percentage', 0)
        for s in sprints
        if s.completed and s.completion_stats
    ]


def get_execution_insights(
    tasks: Sequence[Task],
    sprints: Sequence[Sprint],
    now: Optional[datetime] = None,
) -> List[Dict]:
    now = now or timezone.now()
    insights: List[Dict] = []

    stale = [
        t for t in tasks
        if t.status != Task.TaskStatus.DONE and now - t.updated_at > STALE_AFTER
    ]
    if len(stale) >= MIN_STALE_TASKS:
        insights.append({
            'id': 'stale-tasks',
            'type': 'repeated_blocker',
            'title': 'No recent activity on tasks',
            'description': f"{len(stale)} tasks have had no updates in over two weeks. They may be blocked.",
            'severity': 'high',
            'task_ids': [t.id for t in stale],
        })

    total = len(tasks)
    done = sum(1 for t in tasks if t.status == Task.TaskStatus.DONE)
    if total >= LOW_PROGRESS_MIN_TASKS and done * 100 < LOW_PROGRESS_PCT * total:
        insights.append({
            'id': 'low-progress',
            'type': 'stalled_tasks',
            'title': 'Low task completion',
            'description': (
                f"Only {completion_percentage(done, total)}% of tasks are done ({done}/{total}). "
                "Consider reprioritizing."
            ),
            'severity': 'medium',
        })

    low = [pct for pct in _closed_percentages(sprints) if pct < LOW_SPRINT_PCT]
    if len(low) >= MIN_LOW_SPRINTS:
        insights.append({
            'id': 'sprint-reliability',
            'type': 'risk',
            'title': 'Sprint completion rate low',
            'description': (
                f"{len(low)} recent sprints completed below {LOW_SPRINT_PCT}%. "
                "Consider smaller goals or addressing blockers."
            ),
            'severity': 'high',
        })

    return insights


def get_validation_insights(validations: Sequence[ValidationEntry]) -> List[Dict]:
    if len(validations) == 0:
        return [{
            'id': 'missing-validation',
            'type': 'missing_validation',
            'title': 'No validation recorded',
            'description': 'Log customer interviews, surveys, or experiments to de-risk your roadmap.',
        }]
    if len(validations) == 1:
        return [{
            'id': 'weak-signal',
            'type': 'weak_signal',
            'title': 'Single validation source',
            'description': 'Multiple sources (e.g. interviews + survey) strengthen signal.',
        }]
    return []


def generate_investor_summary(
    workspace_name: str,
    stage: str,
    tasks: Sequence[Task],
    validations: Sequence[ValidationEntry],
    sprints: Sequence[Sprint],
) -> Dict:
    total = len(tasks)
    done = sum(1 for t in tasks if t.status == Task.TaskStatus.DONE)
    task_pct = completion_percentage(done, total)

    closed = [s for s in sprints if s.completed]
    percentages = _closed_percentages(closed)
    avg_completion = (
        completion_percentage(sum(percentages), 100 * len(percentages))
        if closed and len(percentages) == len(closed) else 0
    )

    traction = [
        f"{done}/{total} tasks completed ({task_pct}%)",
        f"{len(closed)} sprints closed with {avg_completion}% avg completion",
    ]
    if validations:
        traction.append(f"{len(validations)} validation entries (interviews/surveys/experiments)")

    if validations:
        validation_status = f"{len(validations)} validation entries (interviews, surveys, experiments) recorded."
    else:
        validation_status = "No validation entries yet. Recommend adding customer interviews and experiment logs."

    if closed:
        roadmap = f"Continue weekly sprints; {total - done} tasks in progress."
    else:
        roadmap = "Define sprints and tasks to build execution history."

    return {
        'problem': (
            f"{workspace_name} is in {stage} stage, focused on validating product-market fit "
            "and scaling execution discipline."
        ),
        'solution': (
            f"Unified operational workspace for {workspace_name}: execution tracking (tasks, sprints), "
            "structured validation, and verifiable progress via sprint commitments and completion records."
        ),
        'traction': '. '.join(traction),
        'execution_progress': (
            f"{done}/{total} tasks done ({task_pct}%). "
            f"Sprint reliability: {avg_completion}% average completion."
        ),
        'validation_status': validation_status,
        'roadmap': roadmap,
        'generated_at': timezone.now().isoformat(),
    }
