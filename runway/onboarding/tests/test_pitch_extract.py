import json
import pytest
from types import SimpleNamespace
from unittest.mock import patch

from django.test import override_settings
from openai import OpenAIError

from execution.exceptions import ValidationError
from onboarding.services.pitch_extract import extract_pitch, heuristic_extract

SLIDES = [
    {"slide_index": 0, "text": "ClinicFlow\nScheduling for small clinics"},
    {"slide_index": 1, "text": "The problem\nClinics lose hours to no-shows"},
    {"slide_index": 2, "text": "Our solution\nSMS reminders that patients answer"},
    {"slide_index": 3, "text": "Traction\n12 clinic interviews, 2 pilots signed"},
    {"slide_index": 4, "text": "Roadmap\n- Q1: pilot with 5 clinics\n- Q2: launch self-serve\n- Q3: payments"},
]


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def test_heuristic_extract():
    result = heuristic_extract(SLIDES)

    assert result["startup_name"] == "ClinicFlow"
    assert result["problem_statement"].startswith("The problem")
    assert result["solution_description"].startswith("Our solution")
    assert result["milestones"] == ["- Q1: pilot with 5 clinics", "- Q2: launch self-serve", "- Q3: payments"]
    assert result["traction"].startswith("Traction")
    assert "Startup name from first slide." in result["confidence_notes"]

def test_heuristic_extract_on_blank_slides():
    result = heuristic_extract([{"slide_index": 0, "text": ""}])
    assert result["startup_name"] is None
    assert result["milestones"] == []
    assert result["problem_statement"] is None

def test_empty_slides_rejected():
    with pytest.raises(ValidationError):
        extract_pitch([])

@override_settings(OPENAI_API_KEY="")
def test_without_key_uses_heuristic():
    with patch("onboarding.services.pitch_extract.OpenAI") as client_cls:
        result = extract_pitch(SLIDES)
    client_cls.assert_not_called()
    assert result["startup_name"] == "ClinicFlow"

@override_settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4o-mini")
def test_openai_extraction():
    payload = {
        "startup_name": "ClinicFlow",
        "problem_statement": "No-shows cost clinics revenue.",
        "solution_description": None,
        "milestones": ["Pilot", "Launch", 7, "Payments", "Extra"],
        "traction": "2 pilots",
        "confidence_notes": "Solution not stated.",
    }
    with patch("onboarding.services.pitch_extract.OpenAI") as client_cls:
        client_cls.return_value.chat.completions.create.return_value = _completion(json.dumps(payload))
        result = extract_pitch(SLIDES)

    client_cls.assert_called_once_with(api_key="sk-test")
    kwargs = client_cls.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert "[Slide 1]\nClinicFlow" in kwargs["messages"][1]["content"]

    assert result["milestones"] == ["Pilot", "Launch", "Payments"]
    assert result["solution_description"] is None
    assert result["confidence_notes"] == "Solution not stated."

@override_settings(OPENAI_API_KEY="sk-test")
def test_openai_failure_falls_back_to_heuristic():
    with patch("onboarding.services.pitch_extract.OpenAI") as client_cls:
        client_cls.return_value.chat.completions.create.side_effect = OpenAIError("rate limited")
        result = extract_pitch(SLIDES)
    assert result["startup_name"] == "ClinicFlow"

@override_settings(OPENAI_API_KEY="sk-test")
def test_bad_json_falls_back_to_heuristic():
    with patch("onboarding.services.pitch_extract.OpenAI") as client_cls:
        client_cls.return_value.chat.completions.create.return_value = _completion("not json")
        result = extract_pitch(SLIDES)
    assert result["traction"].startswith("Traction")

@override_settings(OPENAI_API_KEY="sk-test")
def test_non_object_json_falls_back_to_heuristic():
    with patch("onboarding.services.pitch_extract.OpenAI") as client_cls:
        client_cls.return_value.chat.completions.create.return_value = _completion("[1, 2]")
        result = extract_pitch(SLIDES)
    assert result["startup_name"] == "ClinicFlow"

@override_settings(OPENAI_API_KEY="sk-test")
def test_slides_without_index_are_numbered_in_order():
    slides = [{"text": "ClinicFlow"}, {"text": "The problem"}]
    with patch("onboarding.services.pitch_extract.OpenAI") as client_cls:
        client_cls.return_value.chat.completions.create.return_value = _completion(json.dumps({"startup_name": "ClinicFlow"}))
        result = extract_pitch(slides)

    content = client_cls.return_value.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert "[Slide 1]\nClinicFlow" in content
    assert "[Slide 2]\nThe problem" in content
    assert result["startup_name"] == "ClinicFlow"
    assert result["milestones"] == []
