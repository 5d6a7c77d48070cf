import pytest
from datetime import date
from decimal import Decimal

from execution.models import Sprint, ValidationEntry
from funding.models import FundingRound, SpendLog
from funding.services.summary import average_monthly_spend, build_funding_insights, get_funding_summary

TODAY = date(2025, 4, 1)


def _spend(workspace, category, amount, day):
    return SpendLog.objects.create(
        workspace=workspace, category=category, amount=Decimal(amount), date=day, created_by="x",
    )


def test_average_monthly_spend_counts_at_least_one_month():
    logs = [SpendLog(amount=Decimal("300"), date=date(2025, 3, 25))]
    assert average_monthly_spend(logs, TODAY) == Decimal("300")
    assert average_monthly_spend([], TODAY) == Decimal("0")

def test_average_monthly_spend_over_sixty_days():
    logs = [
        SpendLog(amount=Decimal("400"), date=date(2025, 1, 31)),
        SpendLog(amount=Decimal("200"), date=date(2025, 3, 1)),
    ]
    assert average_monthly_spend(logs, TODAY) == Decimal("300")

def test_consistent_message_when_nothing_flagged():
    insights = build_funding_insights(
        total_raised=Decimal("100"), total_spend=Decimal("10"), by_category={},
        runway_months=Decimal("20"), validation_count=1, completed_sprints=1,
    )
    assert insights == ["Funding and spend data look consistent. Keep logging spend and linking to milestones."]

def test_no_insights_without_funding():
    assert build_funding_insights(
        total_raised=Decimal("0"), total_spend=Decimal("0"), by_category={},
        runway_months=None, validation_count=0, completed_sprints=0,
    ) == []


@pytest.mark.django_db
def test_summary_flags_unvalidated_marketing_and_short_runway(workspace, founder):
    FundingRound.objects.create(
        workspace=workspace, name="Angel", amount=Decimal("1000"), source=FundingRound.Source.ANGEL,
        date=date(2025, 1, 1), created_by=str(founder.id),
    )
    _spend(workspace, "Marketing", "400", date(2025, 1, 31))
    _spend(workspace, "Engineering", "200", date(2025, 3, 1))

    summary = get_funding_summary(workspace, today=TODAY)

    assert summary["total_raised"] == Decimal("1000.00")
    assert summary["total_spend"] == Decimal("600.00")
    assert summary["spend_by_category"] == {"Engineering": Decimal("200.00"), "Marketing": Decimal("400.00")}
    assert summary["average_monthly_spend"] == Decimal("300.00")
    assert summary["runway_months"] == Decimal("1.3")
    assert summary["insights"] == [
        "Spend logged under Marketing, but no validation recorded yet.",
        "Engineering spend is present while no sprints are completed yet.",
        "At current spend rate, runway is under 3 months (≈1.3 months).",
    ]

@pytest.mark.django_db
def test_summary_with_raise_but_no_spend(workspace, founder):
    FundingRound.objects.create(
        workspace=workspace, name="Grant", amount=Decimal("5000"), source=FundingRound.Source.GRANT,
        date=date(2025, 1, 1), created_by=str(founder.id),
    )
    ValidationEntry.objects.create(workspace=workspace, validation_type="survey", summary="ok")
    Sprint.objects.create(
        workspace=workspace, week_start_date=date(2025, 1, 6), week_end_date=date(2025, 1, 12),
        locked=True, completed=True, created_by=str(founder.id),
    )

    summary = get_funding_summary(workspace, today=TODAY)

    assert summary["runway_months"] is None
    assert summary["insights"] == ["Capital raised but no spend logged yet. Log spend to track usage."]
