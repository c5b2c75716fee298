# ==============================================================================
# ARCHITECTURE: UNIT TEST (CORE LOGIC)
# ------------------------------------------------------------------------------
# GOAL: Verify session score aggregation.
# CONSTRAINTS:
#   1. EXECUTION: FAST (< 50ms per test).
#   2. I/O: FORBIDDEN. No Database, No Network, No File System.
# ==============================================================================
from assessor.interview.domain.models import (
    AssessmentStatus,
    QuestionAssessment,
    SoftSkills,
)
from assessor.interview.domain.scoring import calculate_aggregate_scores


def test_empty_assessments_give_zero_summary():
    summary = calculate_aggregate_scores({})

    assert summary.total_questions == 0
    assert summary.average_score == 0.0


def test_aggregates_only_scored_answers():
    assessments = {
        "a1": QuestionAssessment(
            question_id="a1",
            keywords_hit=["x", "y"],
            keywords_missed=["z", "w"],
            soft_skills=SoftSkills(clearly_spoken=True, confidence=True),
            llm_score=4,
            status=AssessmentStatus.READY,
        ),
        "a2": QuestionAssessment(
            question_id="a2",
            keywords_hit=["x"],
            soft_skills=SoftSkills(
                clearly_spoken=True,
                eye_contact=True,
                confidence=True,
                structured_thinking=True,
            ),
            llm_score=3,
            final_score=5,
            status=AssessmentStatus.VALIDATED,
        ),
        "a3": QuestionAssessment(question_id="a3", did_not_get_to=True, llm_score=1),
        "a4": QuestionAssessment(question_id="a4"),
    }

    summary = calculate_aggregate_scores(assessments)

    assert summary.total_questions == 4
    assert summary.completed_questions == 2
    assert summary.skipped_questions == 1
    # (4 + 5) / 2, validated score wins
    assert summary.average_score == 4.5
    # 6 of 8 indicators, 3.75 rounds half up
    assert summary.soft_skill_score == 3.8
    # mean coverage (0.5 + 1.0) / 2 on a 5 point scale
    assert summary.technical_score == 3.8


def test_processing_answers_are_not_counted():
    assessments = {
        "a1": QuestionAssessment(
            question_id="a1", llm_score=5, status=AssessmentStatus.PROCESSING
        ),
    }

    summary = calculate_aggregate_scores(assessments)

    assert summary.completed_questions == 0
    assert summary.average_score == 0.0


def test_questions_without_keywords_do_not_affect_technical_score():
    assessments = {
        "starter-1": QuestionAssessment(
            question_id="starter-1", llm_score=2, status=AssessmentStatus.READY
        ),
        "q1": QuestionAssessment(
            question_id="q1",
            keywords_hit=["a"],
            keywords_missed=["b", "c", "d"],
            llm_score=4,
            status=AssessmentStatus.READY,
        ),
    }

    summary = calculate_aggregate_scores(assessments)

    assert summary.technical_score == 1.3
    assert summary.average_score == 3.0
    assert summary.soft_skill_score == 0.0
