"""
Program designer: pick a split template and tailor its set counts.

Ranking (higher score wins, ties keep template order):
  frequency    40 − 10 × |template days − requested days| (floored at 0),
               +20 on an exact match
  evidence     +15 for research-backed templates
  focus        upper/lower: +35 matching specialization, −20 opposite one,
               +8 when the name mentions the requested half
               none: −25 for any specialization
  constraints  beginner on > 5 days −8, short sessions on > 4 days −6

Set adjustments are applied per exercise, in order, then clamped to
GUIDED_SETS_MIN..GUIDED_SETS_MAX.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import replace

from .config import (
    BEGINNER_HIGH_FREQUENCY_PENALTY,
    DAY_DISTANCE_PENALTY,
    DAY_MATCH_BASE_SCORE,
    EVIDENCE_BONUS,
    EXACT_DAYS_BONUS,
    FOCUS_CONFLICT_PENALTY,
    FOCUS_MATCH_BONUS,
    FOCUS_NAME_BONUS,
    GUIDED_SETS_MAX,
    GUIDED_SETS_MIN,
    SHORT_SESSION_HIGH_FREQUENCY_PENALTY,
    UNWANTED_SPECIALIZATION_PENALTY,
)
from .models import ProgramDesignAnswers, SplitTemplate, TemplateDay, TemplateExercise

_UPPER_SPECIALIZATION = re.compile(
    r"upper\s*focus|specialization\s*upper|upper\s*priority", re.IGNORECASE
)
_LOWER_SPECIALIZATION = re.compile(
    r"lower\s*focus|specialization\s*lower|lower\s*priority|quad\s*focus|quad\s*priority",
    re.IGNORECASE,
)
_UPPER_NAME = re.compile(r"upper|push|chest|back", re.IGNORECASE)
_LOWER_NAME = re.compile(r"lower|legs|full body", re.IGNORECASE)
_UPPER_DAY = re.compile(r"upper|push|pull|chest|back|shoulder", re.IGNORECASE)
_LOWER_DAY = re.compile(r"lower|leg|quad|ham|glute", re.IGNORECASE)
_HIGH_SKILL_EXERCISE = re.compile(
    r"barbell|squat|deadlift|overhead press|pull-up", re.IGNORECASE
)

FOCUS_LABELS = {
    "upper_focus": "Upper Focus",
    "lower_focus": "Lower Focus",
    "no_focus": "No Specific Focus",
}
SESSION_LABELS = {
    "short": "short sessions",
    "moderate": "moderate sessions",
    "long": "long sessions",
}
EXPERIENCE_LABELS = {
    "beginner": "beginner-friendly volume",
    "intermediate": "intermediate progression",
    "advanced": "advanced progression headroom",
}


def _template_text(template: SplitTemplate) -> str:
    return f"{template.name} {template.description}"


def is_upper_specialization(template: SplitTemplate) -> bool:
    return bool(_UPPER_SPECIALIZATION.search(_template_text(template)))


def is_lower_specialization(template: SplitTemplate) -> bool:
    return bool(_LOWER_SPECIALIZATION.search(_template_text(template)))


def score_template(template: SplitTemplate, answers: ProgramDesignAnswers) -> int:
    """
    Score how well a template fits the questionnaire answers.

    Args:
        template: Candidate split template
        answers: Program designer answers

    Returns:
        Integer score (may be negative)
    """
    score = 0

    day_distance = abs(template.days_per_week - answers.days_per_week)
    score += max(0, DAY_MATCH_BASE_SCORE - day_distance * DAY_DISTANCE_PENALTY)
    if day_distance == 0:
        score += EXACT_DAYS_BONUS

    if template.evidence_label:
        score += EVIDENCE_BONUS

    upper = is_upper_specialization(template)
    lower = is_lower_specialization(template)

    if answers.focus == "upper_focus":
        if upper:
            score += FOCUS_MATCH_BONUS
        if lower:
            score -= FOCUS_CONFLICT_PENALTY
        if _UPPER_NAME.search(template.name):
            score += FOCUS_NAME_BONUS
    elif answers.focus == "lower_focus":
        if lower:
            score += FOCUS_MATCH_BONUS
        if upper:
            score -= FOCUS_CONFLICT_PENALTY
        if _LOWER_NAME.search(template.name):
            score += FOCUS_NAME_BONUS
    elif upper or lower:
        score -= UNWANTED_SPECIALIZATION_PENALTY

    if answers.experience == "beginner" and template.days_per_week > 5:
        score -= BEGINNER_HIGH_FREQUENCY_PENALTY

    if answers.session_length == "short" and template.days_per_week > 4:
        score -= SHORT_SESSION_HIGH_FREQUENCY_PENALTY

    return score


def rank_program_templates(
    templates: Sequence[SplitTemplate],
    answers: ProgramDesignAnswers,
) -> list[tuple[SplitTemplate, int]]:
    """All templates with their scores, best first (stable on ties)."""
    scored = [(template, score_template(template, answers)) for template in templates]
    return sorted(scored, key=lambda pair: -pair[1])


def recommend_program_template(
    templates: Sequence[SplitTemplate],
    answers: ProgramDesignAnswers,
) -> SplitTemplate | None:
    """
    Pick the best-fitting template.

    Returns:
        Highest-scoring template (earliest on ties), or None when there
        are no templates
    """
    ranked = rank_program_templates(templates, answers)
    return ranked[0][0] if ranked else None


def _guided_sets(
    exercise: TemplateExercise,
    exercise_index: int,
    day_name: str,
    answers: ProgramDesignAnswers,
) -> int:
    sets = exercise.sets

    if answers.experience == "beginner" and sets > 2:
        sets -= 1

    if answers.session_length == "short" and exercise.reps_min >= 10 and sets > 1:
        sets -= 1

    if (
        answers.session_length == "long"
        and answers.experience == "advanced"
        and exercise_index == 0
        and exercise.reps_min <= 10
    ):
        sets += 1

    upper_day = bool(_UPPER_DAY.search(day_name))
    lower_day = bool(_LOWER_DAY.search(day_name))

    if answers.focus == "upper_focus":
        if upper_day and exercise_index < 2:
            sets += 1
        if lower_day and exercise_index >= 2 and sets > 1:
            sets -= 1

    if answers.focus == "lower_focus":
        if lower_day and exercise_index < 2:
            sets += 1
        if upper_day and exercise_index >= 2 and sets > 1:
            sets -= 1

    if answers.equipment == "minimal" and _HIGH_SKILL_EXERCISE.search(exercise.name) and sets > 2:
        sets -= 1

    return max(GUIDED_SETS_MIN, min(GUIDED_SETS_MAX, sets))


def build_guided_template(
    base_template: SplitTemplate,
    answers: ProgramDesignAnswers,
) -> SplitTemplate:
    """
    Personalize a template's set counts for the questionnaire answers.

    Day and exercise structure is kept; only set counts, the name
    (suffixed " · Guided") and the description change.
    """
    days = tuple(
        replace(
            day,
            exercises=tuple(
                replace(exercise, sets=_guided_sets(exercise, index, day.day_name, answers))
                for index, exercise in enumerate(day.exercises)
            ),
        )
        for day in base_template.days
    )

    description = (
        f"{FOCUS_LABELS[answers.focus]} setup for {answers.days_per_week} days/week "
        f"with {SESSION_LABELS[answers.session_length]} and "
        f"{EXPERIENCE_LABELS[answers.experience]}."
    )

    return replace(
        base_template,
        name=f"{base_template.name} · Guided",
        description=description,
        days=days,
    )


def total_sets(day: TemplateDay) -> int:
    return sum(exercise.sets for exercise in day.exercises)
