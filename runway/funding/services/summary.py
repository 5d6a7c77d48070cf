# -*- coding: utf-8 -*-
"""
Funding overview: raised vs spent, burn rate, runway and a few rule-based
insights that tie spend back to execution and validation.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from django.utils import timezone

from execution.models import FundingCategory, Sprint, ValidationEntry, Workspace
from funding.models import FundingRound, SpendLog

DAYS_PER_MONTH = 30
LOW_RUNWAY_MONTHS = 3
ZERO = Decimal('0')


def _q(value: Decimal, places: str = '0.01') -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def average_monthly_spend(spend_logs: List[SpendLog], today: Optional[date] = None) -> Decimal:
    """Total spend over the months since the first spend, counting at least one month"""
    if not spend_logs:
        return ZERO
    today = today or timezone.localdate()
    first = min(s.date for s in spend_logs)
    months = max(Decimal(1), Decimal((today - first).days) / DAYS_PER_MONTH)
    return sum((s.amount for s in spend_logs), ZERO) / months


def build_funding_insights(
    *,
    total_raised: Decimal,
    total_spend: Decimal,
    by_category: Dict[str, Decimal],
    runway_months: Optional[Decimal],
    validation_count: int,
    completed_sprints: int
) -> List[str]:
    insights = []
    if by_category.get(FundingCategory.MARKETING, ZERO) > 0 and validation_count == 0:
        insights.append("Spend logged under Marketing, but no validation recorded yet.")
    if by_category.get(FundingCategory.ENGINEERING, ZERO) > 0 and completed_sprints == 0:
        insights.append("Engineering spend is present while no sprints are completed yet.")
    if runway_months is not None and runway_months < LOW_RUNWAY_MONTHS:
        insights.append(
            f"At current spend rate, runway is under {LOW_RUNWAY_MONTHS} months "
            f"(≈{_q(runway_months, '0.1')} months)."
        )
    if total_raised > 0 and total_spend == 0:
        insights.append("Capital raised but no spend logged yet. Log spend to track usage.")
    if not insights and total_raised > 0:
        insights.append("Funding and spend data look consistent. Keep logging spend and linking to milestones.")
    return insights


def get_funding_summary(workspace: Workspace, today: Optional[date] = None) -> Dict:
    rounds = list(FundingRound.objects.filter(workspace=workspace))
    spend_logs = list(SpendLog.objects.filter(workspace=workspace))

    total_raised = sum((r.amount for r in rounds), ZERO)
    total_spend = sum((s.amount for s in spend_logs), ZERO)

    by_category = defaultdict(lambda: ZERO)
    for spend in spend_logs:
        by_category[spend.category] += spend.amount

    avg_monthly = average_monthly_spend(spend_logs, today)
    runway_months = None
    if avg_monthly > 0 and total_raised > total_spend:
        runway_months = (total_raised - total_spend) / avg_monthly

    insights = build_funding_insights(
        total_raised=total_raised,
        total_spend=total_spend,
        by_category=by_category,
        runway_months=runway_months,
        validation_count=ValidationEntry.objects.filter(workspace=workspace).count(),
        completed_sprints=Sprint.objects.filter(workspace=workspace, completed=True).count(),
    )

    return {
        'total_raised': _q(total_raised),
        'total_spend': _q(total_spend),
        'spend_by_category': {k: _q(v) for k, v in sorted(by_category.items())},
        'average_monthly_spend': _q(avg_monthly),
        'runway_months': _q(runway_months, '0.1') if runway_months is not None else None,
        'insights': insights,
    }
