import math
from collections.abc import Mapping

from assessor.interview.domain.models import (
    AssessmentStatus,
    QuestionAssessment,
    ScoreSummary,
)

SCORED_STATUSES = (AssessmentStatus.READY, AssessmentStatus.VALIDATED)


def _one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def calculate_aggregate_scores(
    assessments: Mapping[str, QuestionAssessment],
) -> ScoreSummary:
    """
    Rolls per-question assessments up into session scores (0-5 scale).

    Only answered questions that carry a score and are ready or validated
    count. Technical score is the mean keyword coverage of questions that
    have keywords; soft-skill score is the share of positive indicators.
    """
    items = list(assessments.values())
    skipped = sum(1 for a in items if a.did_not_get_to)

    valid = [
        a
        for a in items
        if not a.did_not_get_to
        and a.effective_score() is not None
        and a.status in SCORED_STATUSES
    ]

    if not valid:
        return ScoreSummary(total_questions=len(items), skipped_questions=skipped)

    average = sum(a.effective_score() or 0 for a in valid) / len(valid)

    soft_total = sum(a.soft_skills.positive_count() for a in valid)
    soft_skill = soft_total / (len(valid) * 4) * 5

    technical = 0.0
    with_keywords = [a for a in valid if a.total_keywords > 0]
    if with_keywords:
        coverage = sum(
            len(a.keywords_hit) / a.total_keywords for a in with_keywords
        ) / len(with_keywords)
        technical = coverage * 5

    return ScoreSummary(
        total_questions=len(items),
        completed_questions=len(valid),
        skipped_questions=skipped,
        average_score=_one_decimal(average),
        technical_score=_one_decimal(technical),
        soft_skill_score=_one_decimal(soft_skill),
    )
