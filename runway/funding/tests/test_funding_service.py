import pytest
from datetime import date
from decimal import Decimal

from execution.exceptions import AuthorizationError, ValidationError
from execution.models import Milestone
from funding.models import ExecutionAuditLog, FundingAllocation, FundingRound, SpendLog
from funding.services.funding import AllocationService, FundingRoundService, SpendService, format_amount


@pytest.fixture
def seed_round(workspace, founder):
    return FundingRoundService.create_round(
        workspace=workspace,
        user_id=str(founder.id),
        name="Pre-seed",
        amount=Decimal("1000000"),
        source=FundingRound.Source.ANGEL,
        date=date(2025, 1, 1),
    )


def test_format_amount():
    assert format_amount(Decimal("1234567.5"), "INR") == "1,234,567.50 INR"


@pytest.mark.django_db
def test_create_round_writes_audit_entry(workspace, seed_round):
    assert seed_round.currency == "INR"
    audit = ExecutionAuditLog.objects.get(workspace=workspace)
    assert audit.event_type == ExecutionAuditLog.EventType.FUNDING_CREATED
    assert audit.entity_id == str(seed_round.id)
    assert "Pre-seed" in audit.summary

@pytest.mark.django_db
def test_only_founder_creates_round(workspace, teammate):
    with pytest.raises(AuthorizationError):
        FundingRoundService.create_round(
            workspace=workspace, user_id=str(teammate.id), name="Seed",
            amount=Decimal("10"), source=FundingRound.Source.VC, date=date(2025, 1, 1),
        )
    assert not FundingRound.objects.exists()
    assert not ExecutionAuditLog.objects.exists()

@pytest.mark.django_db
def test_round_amount_must_be_positive(workspace, founder):
    with pytest.raises(ValidationError):
        FundingRoundService.create_round(
            workspace=workspace, user_id=str(founder.id), name="Seed",
            amount=Decimal("0"), source=FundingRound.Source.VC, date=date(2025, 1, 1),
        )

@pytest.mark.django_db
def test_update_notes(seed_round, founder, teammate):
    with pytest.raises(AuthorizationError):
        FundingRoundService.update_notes(funding_round=seed_round, user_id=str(teammate.id), notes="x")

    FundingRoundService.update_notes(funding_round=seed_round, user_id=str(founder.id), notes="  SAFE, 10% discount ")
    assert FundingRound.objects.get(pk=seed_round.pk).notes == "SAFE, 10% discount"


# ---------- allocations ----------

@pytest.mark.django_db
def test_allocations_cannot_exceed_round(seed_round, teammate):
    AllocationService.create_allocation(
        funding_round=seed_round, user_id=str(teammate.id), category="Engineering", allocated_amount=Decimal("600000"),
    )
    AllocationService.create_allocation(
        funding_round=seed_round, user_id=str(teammate.id), category="Marketing", allocated_amount=Decimal("400000"),
    )
    with pytest.raises(ValidationError):
        AllocationService.create_allocation(
            funding_round=seed_round, user_id=str(teammate.id), category="Ops", allocated_amount=Decimal("0.01"),
        )
    assert FundingAllocation.objects.count() == 2

@pytest.mark.django_db
def test_investor_cannot_allocate(seed_round, investor):
    with pytest.raises(AuthorizationError):
        AllocationService.create_allocation(
            funding_round=seed_round, user_id=str(investor.id), category="Ops", allocated_amount=Decimal("1"),
        )

@pytest.mark.django_db
def test_delete_allocation_is_audited(seed_round, founder):
    allocation = AllocationService.create_allocation(
        funding_round=seed_round, user_id=str(founder.id), category="Hiring", allocated_amount=Decimal("5000"),
    )
    AllocationService.delete_allocation(allocation=allocation, user_id=str(founder.id))

    assert not FundingAllocation.objects.exists()
    assert ExecutionAuditLog.objects.filter(event_type=ExecutionAuditLog.EventType.ALLOCATION_UPDATED).count() == 2


# ---------- spend ----------

@pytest.mark.django_db
def test_log_spend_with_links(workspace, teammate, seed_round, milestone):
    spend = SpendService.log_spend(
        workspace=workspace, user_id=str(teammate.id), category="Engineering",
        amount=Decimal("25000"), date=date(2025, 2, 1), note=" AWS credits ",
        funding_round_id=seed_round.id, linked_milestone_id=milestone.id,
    )
    assert spend.note == "AWS credits"
    assert spend.funding_round_id == seed_round.id
    assert spend.linked_milestone_id == milestone.id
    assert ExecutionAuditLog.objects.filter(event_type=ExecutionAuditLog.EventType.SPEND_LOGGED).exists()

@pytest.mark.django_db
def test_spend_link_must_be_same_workspace(workspace, other_workspace, founder):
    foreign = Milestone.objects.create(workspace=other_workspace, title="Elsewhere")
    with pytest.raises(ValidationError):
        SpendService.log_spend(
            workspace=workspace, user_id=str(founder.id), category="Ops",
            amount=Decimal("10"), date=date(2025, 2, 1), linked_milestone_id=foreign.id,
        )
    assert not SpendLog.objects.exists()

@pytest.mark.django_db
def test_update_and_delete_spend(workspace, founder, investor):
    spend = SpendService.log_spend(
        workspace=workspace, user_id=str(founder.id), category="Ops", amount=Decimal("10"), date=date(2025, 2, 1),
    )
    with pytest.raises(AuthorizationError):
        SpendService.update_spend(spend=spend, user_id=str(investor.id), amount=Decimal("20"))

    SpendService.update_spend(spend=spend, user_id=str(founder.id), amount=Decimal("20"), category="Infra")
    spend.refresh_from_db()
    assert spend.amount == Decimal("20")
    assert spend.category == "Infra"

    with pytest.raises(ValidationError):
        SpendService.update_spend(spend=spend, user_id=str(founder.id), amount=Decimal("-1"))

    SpendService.delete_spend(spend=spend, user_id=str(founder.id))
    assert not SpendLog.objects.exists()

@pytest.mark.django_db
def test_audit_log_is_append_only(seed_round):
    entry = ExecutionAuditLog.objects.get()
    entry.summary = "edited"
    with pytest.raises(ValueError):
        entry.save()
