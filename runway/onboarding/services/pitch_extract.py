# -*- coding: utf-8 -*-
"""
Structured extraction from pitch-deck text.

Extraction only: fields that are not stated in the deck come back as None.
With OPENAI_API_KEY configured the chat API does the extraction; otherwise,
or when the API call fails, a keyword heuristic over the slides is used.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from django.conf import settings
from openai import OpenAI, OpenAIError

from execution.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_MILESTONES = 3

EXTRACTION_SYSTEM = """You extract structure from pitch deck text. Output valid JSON only. No markdown, no explanation.
Rules:
- Extract only what is explicitly stated. If something is missing, use null.
- Do NOT invent, infer, or add content.
- startup_name: string or null (e.g. from title slide).
- problem_statement: 1-2 sentences or null.
- solution_description: 1-2 sentences or null.
- milestones: array of up to 3 strings (roadmap/timeline items). Empty array if none.
- traction: string or null (users, pilots, revenue, validation signals).
- confidence_notes: one short sentence listing what was found and what was missing.

Output format: {"startup_name":...|null,"problem_statement":...|null,"solution_description":...|null,"milestones":[...],"traction":...|null,"confidence_notes":"..."}"""

PROBLEM_RE = re.compile(r'problem|pain|challenge|issue', re.I)
SOLUTION_RE = re.compile(r'solution|product|we build|our (product|app)', re.I)
ROADMAP_RE = re.compile(r'roadmap|timeline|milestone|phase|quarter|q1|q2|launch', re.I)
TRACTION_RE = re.compile(r'traction|users|revenue|pilot|interview|validation|beta', re.I)
BULLET_RE = re.compile(r'^[-*•\d.]')
TIMELINE_RE = re.compile(r'q[1-4]|phase|launch|milestone', re.I)


def _lines(text: str) -> List[str]:
    return [line.strip() for line in (text or '').split('\n') if line.strip()]


def heuristic_extract(slides: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Deterministic extraction from slide order and keywords"""
    all_lines = _lines('\n\n'.join(s.get('text') or '' for s in slides))

    first = _lines(slides[0].get('text') or '') if slides else []
    startup_name = first[0][:80] if first else None

    problem = solution = traction = None
    candidates: List[str] = []

    for slide in slides:
        text = slide.get('text') or ''
        if not text:
            continue
        if problem is None and PROBLEM_RE.search(text):
            problem = text[:300]
        if solution is None and SOLUTION_RE.search(text):
            solution = text[:300]
        if ROADMAP_RE.search(text):
            bullets = [
                line for line in _lines(text)
                if (len(line) > 10 and BULLET_RE.match(line)) or TIMELINE_RE.search(line)
            ]
            candidates.extend(b for b in bullets[:5] if len(b) < 120)
        if traction is None and TRACTION_RE.search(text):
            traction = text[:200]

    if not candidates and len(all_lines) >= 3:
        candidates.extend(line for line in all_lines[:3] if 15 < len(line) < 100)

    milestones = (candidates or all_lines)[:MAX_MILESTONES]

    notes = [
        "Startup name from first slide." if startup_name else "Startup name not detected.",
        "Problem section found." if problem else "Problem section not found.",
        "Solution section found." if solution else "Solution section not found.",
        (f"Up to 3 milestones extracted ({len(milestones)})." if milestones
         else "No clear roadmap/milestones; review suggested items."),
        "Traction/validation text found." if traction else "Traction not found.",
    ]

    return {
        'startup_name': startup_name,
        'problem_statement': problem,
        'solution_description': solution,
        'milestones': milestones,
        'traction': traction,
        'confidence_notes': ' '.join(notes),
    }


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def openai_extract(slides: List[Dict[str, Any]], api_key: str) -> Dict[str, Any]:
    limit = getattr(settings, 'PITCH_TEXT_LIMIT', 12000)
    text = '\n\n'.join(
        f"[Slide {s.get('slide_index', index) + 1}]\n{s.get('text') or ''}"
        for index, s in enumerate(slides)
    )

    client = OpenAI(api_key=api_key)
    response = client.chat.completions.create(
        model=getattr(settings, 'OPENAI_MODEL', 'gpt-4o-mini'),
        messages=[
            {'role': 'system', 'content': EXTRACTION_SYSTEM},
            {'role': 'user', 'content': f"Extract from this pitch deck text:\n\n{text[:limit]}"},
        ],
        response_format={'type': 'json_object'},
        temperature=0.1,
    )

    raw = (response.choices[0].message.content or '').strip() if response.choices else ''
    if not raw:
        raise ValueError("Empty OpenAI response")

    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError("OpenAI response is not a JSON object")

    milestones = parsed.get('milestones')
    milestones = [m for m in milestones if isinstance(m, str)][:MAX_MILESTONES] if isinstance(milestones, list) else []

    return {
        'startup_name': _str_or_none(parsed.get('startup_name')),
        'problem_statement': _str_or_none(parsed.get('problem_statement')),
        'solution_description': _str_or_none(parsed.get('solution_description')),
        'milestones': milestones,
        'traction': _str_or_none(parsed.get('traction')),
        'confidence_notes': _str_or_none(parsed.get('confidence_notes')) or 'Extracted with OpenAI.',
    }


def extract_pitch(slides: List[Dict[str, Any]]) -> Dict[str, Any]:
    if not slides:
        raise ValidationError("Missing or empty slides array.")

    api_key = getattr(settings, 'OPENAI_API_KEY', '')
    if api_key:
        try:
            return openai_extract(slides, api_key)
        except (OpenAIError, ValueError) as ex:
            logger.warning("[onboarding] OpenAI extraction failed, using heuristic: %s", ex)

    return heuristic_extract(slides)
