import pytest

from execution.exceptions import AuthorizationError, ValidationError
from execution.models import Milestone, ValidationEntry
from execution.services.validation import ValidationService


@pytest.mark.django_db
def test_log_validation(workspace, teammate, milestone):
    entry = ValidationService.log_validation(
        workspace=workspace, user_id=str(teammate.id), validation_type=ValidationEntry.ValidationType.INTERVIEW,
        summary="Talked to 5 clinics", milestone_id=milestone.id,
    )
    assert entry.origin == ValidationEntry.Origin.INTERNAL
    assert entry.created_by == str(teammate.id)
    assert entry.milestone_id == milestone.id

@pytest.mark.django_db
def test_investor_cannot_log_validation(workspace, investor):
    with pytest.raises(AuthorizationError):
        ValidationService.log_validation(
            workspace=workspace, user_id=str(investor.id), validation_type="survey", summary="x",
        )

@pytest.mark.django_db
def test_validation_rejects_foreign_milestone(workspace, other_workspace, founder):
    foreign = Milestone.objects.create(workspace=other_workspace, title="Elsewhere")
    with pytest.raises(ValidationError):
        ValidationService.log_validation(
            workspace=workspace, user_id=str(founder.id), validation_type="survey", summary="x",
            milestone_id=foreign.id,
        )

@pytest.mark.django_db
def test_external_validation_summary_from_feedback(workspace):
    feedback = "Would pay for this tomorrow. " * 10
    entry = ValidationService.submit_external_validation(
        workspace=workspace,
        validation_type="interview",
        source_type=ValidationEntry.SourceType.CUSTOMER,
        feedback_text=feedback,
        confidence_score=4,
    )
    assert entry.origin == ValidationEntry.Origin.EXTERNAL_LINK
    assert entry.created_by is None
    assert entry.summary == feedback.strip()[:120]

@pytest.mark.django_db
@pytest.mark.parametrize("score", [0, 6])
def test_external_validation_confidence_bounds(workspace, score):
    with pytest.raises(ValidationError):
        ValidationService.submit_external_validation(
            workspace=workspace, validation_type="survey", source_type="other",
            feedback_text="meh", confidence_score=score,
        )

@pytest.mark.django_db
def test_external_validation_requires_feedback(workspace):
    with pytest.raises(ValidationError):
        ValidationService.submit_external_validation(
            workspace=workspace, validation_type="survey", source_type="other", feedback_text="  ",
        )
