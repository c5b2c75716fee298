import json
import re
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI
from pydantic import ValidationError

from assessor.config import AppConfig
from assessor.interview.adapters.prompts import (
    STARTER_SCORING_PROMPT,
    SUMMARY_PROMPT,
    TECHNICAL_SCORING_PROMPT,
)
from assessor.interview.domain.errors import SummaryUnavailableError
from assessor.interview.domain.models import (
    InterviewSession,
    OverallFeedback,
    Question,
    QuestionAssessment,
    ScoreResult,
    StarterQuestion,
)
from assessor.interview.domain.ports import IScoringService
from assessor.shared.telemetry import Telemetry, measure_time

NO_KEY_FEEDBACK = (
    "AI scoring not available - OPENAI_API_KEY is not configured. "
    "Please review manually."
)
UNAVAILABLE_FEEDBACK = (
    "Scoring temporarily unavailable. Please click retry or review manually."
)
UNPARSED_FEEDBACK = (
    "Feedback could not be parsed from LLM response. Please review manually."
)

SCORE_PATTERNS = (
    re.compile(r"\*\*SCORE\*\*:\s*(\d)", re.IGNORECASE),
    re.compile(r"SCORE:\s*(\d)", re.IGNORECASE),
    re.compile(r"(\d)\s*/\s*5"),
)
FEEDBACK_PATTERNS = (
    re.compile(r"\*\*FEEDBACK\*\*:\s*(.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"FEEDBACK:\s*(.+)", re.IGNORECASE | re.DOTALL),
)
TRAILING_SCORE = re.compile(r"\n+\**SCORE\**:.*", re.IGNORECASE | re.DOTALL)
SCORE_LINE = re.compile(r"\**SCORE\**:\s*\d", re.IGNORECASE)
OUT_OF_FIVE_LINE = re.compile(r"^\s*\d\s*/\s*5\s*", re.MULTILINE)
JSON_FENCE = re.compile(r"```json\n?|\n?```")

STARTER_TYPE_LABELS = {
    "about-yourself": "About Yourself / Background",
    "project-work": "Project Experience",
}


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def parse_score_response(content: str) -> ScoreResult:
    """
    Extracts SCORE / FEEDBACK from a free-form model reply.
    Missing score means neutral; missing feedback falls back to the
    reply itself with score lines stripped.
    """
    score = AppConfig.NEUTRAL_SCORE
    for pattern in SCORE_PATTERNS:
        match = pattern.search(content)
        if match:
            score = int(match.group(1))
            break

    feedback = ""
    for pattern in FEEDBACK_PATTERNS:
        match = pattern.search(content)
        if match:
            feedback = TRAILING_SCORE.sub("", match.group(1).strip()).strip()
            break

    if not feedback and len(content) > 20:
        feedback = OUT_OF_FIVE_LINE.sub("", SCORE_LINE.sub("", content)).strip()
        if len(feedback) > AppConfig.MAX_FEEDBACK_LENGTH:
            feedback = feedback[: AppConfig.MAX_FEEDBACK_LENGTH] + "..."

    degraded = False
    if not feedback:
        feedback = UNPARSED_FEEDBACK
        degraded = True

    return ScoreResult(score=min(5, max(1, score)), feedback=feedback, degraded=degraded)


def format_session_for_summary(session: InterviewSession) -> str:
    blocks = []
    for index, question in enumerate(session.all_questions(), start=1):
        assessment = session.assessments.get(question.id)
        if assessment is None or assessment.did_not_get_to:
            continue
        kind = question.type if isinstance(question, StarterQuestion) else "Technical"
        blocks.append(
            "\n".join(
                [
                    f"Q{index} ({kind}): {question.text[:100]}...",
                    f"Score: {assessment.effective_score()}/5",
                    f"Keywords Hit: {', '.join(assessment.keywords_hit) or 'N/A'}",
                    f"Keywords Missed: {', '.join(assessment.keywords_missed) or 'N/A'}",
                    "Soft Skills: "
                    f"clearlySpoken={assessment.soft_skills.clearly_spoken}, "
                    f"structured={assessment.soft_skills.structured_thinking}",
                    f"Specific Feedback: {assessment.effective_feedback()}",
                ]
            )
        )
    return "\n---\n".join(blocks)


class LLMScoringService(IScoringService):
    """
    Scores answers with an OpenAI chat model through LangChain.
    Any failure is answered with a neutral score and a note for the
    interviewer; the interview never stops because of scoring.
    """

    def __init__(
        self,
        api_key: str | None = AppConfig.OPENAI_API_KEY,
        scoring_llm: BaseChatModel | None = None,
        summary_llm: BaseChatModel | None = None,
    ) -> None:
        self.telemetry = Telemetry("LLMScoringService")
        self.enabled = AppConfig.has_valid_api_key(api_key) or scoring_llm is not None

        if scoring_llm is None and self.enabled:
            scoring_llm = ChatOpenAI(
                model=AppConfig.LLM_MODEL,
                temperature=AppConfig.SCORING_TEMPERATURE,
                api_key=api_key,
            )
        if summary_llm is None and AppConfig.has_valid_api_key(api_key):
            summary_llm = ChatOpenAI(
                model=AppConfig.LLM_MODEL,
                temperature=AppConfig.SUMMARY_TEMPERATURE,
                api_key=api_key,
            )

        self.scoring_llm = scoring_llm
        self.summary_llm = summary_llm if summary_llm is not None else scoring_llm

    def _technical_input(
        self, question: Question, assessment: QuestionAssessment
    ) -> dict[str, Any]:
        excerpt = question.model_answer[: AppConfig.MODEL_ANSWER_EXCERPT]
        return {
            "question": question.text,
            "model_answer_section": (
                f"MODEL ANSWER (for reference):\n{excerpt}" if excerpt else ""
            ),
            "keywords_hit": len(assessment.keywords_hit),
            "total_keywords": assessment.total_keywords,
            "keywords_list": ", ".join(assessment.keywords_hit) or "None",
            "keywords_missed": ", ".join(assessment.keywords_missed) or "None",
            **self._soft_skill_input(assessment),
        }

    def _starter_input(
        self, question: StarterQuestion, assessment: QuestionAssessment
    ) -> dict[str, Any]:
        return {
            "question_type": STARTER_TYPE_LABELS[question.type],
            "question": question.text,
            "guidelines": "\n".join(
                f"{i}. {g}" for i, g in enumerate(question.guidelines, start=1)
            ),
            **self._soft_skill_input(assessment),
        }

    @staticmethod
    def _soft_skill_input(assessment: QuestionAssessment) -> dict[str, str]:
        skills = assessment.soft_skills
        return {
            "clearly_spoken": _yes_no(skills.clearly_spoken),
            "eye_contact": _yes_no(skills.eye_contact),
            "confidence": _yes_no(skills.confidence),
            "structured_thinking": _yes_no(skills.structured_thinking),
            "notes": assessment.interviewer_notes or "No additional notes",
        }

    @measure_time("llm_score")
    def score(
        self, question: Question | StarterQuestion, assessment: QuestionAssessment
    ) -> ScoreResult:
        if not self.enabled or self.scoring_llm is None:
            Telemetry.record_fallback("no_api_key")
            self.telemetry.log_warning("Scoring skipped: no API key", q_id=question.id)
            return ScoreResult(
                score=AppConfig.NEUTRAL_SCORE, feedback=NO_KEY_FEEDBACK, degraded=True
            )

        if isinstance(question, StarterQuestion):
            chain = STARTER_SCORING_PROMPT | self.scoring_llm
            payload = self._starter_input(question, assessment)
        else:
            chain = TECHNICAL_SCORING_PROMPT | self.scoring_llm
            payload = self._technical_input(question, assessment)

        try:
            response = chain.invoke(payload)
        except Exception as e:
            # Provider errors come in many types (network, auth, rate limit)
            Telemetry.record_fallback("llm_error")
            self.telemetry.log_error("Scoring call failed", e, q_id=question.id)
            return ScoreResult(
                score=AppConfig.NEUTRAL_SCORE,
                feedback=UNAVAILABLE_FEEDBACK,
                degraded=True,
            )

        content = (
            response.content
            if isinstance(response.content, str)
            else json.dumps(response.content)
        )
        self.telemetry.log_info("LLM Response", q_id=question.id, preview=content[:200])

        result = parse_score_response(content)
        if result.degraded:
            Telemetry.record_fallback("unparsed")
        return result

    @measure_time("llm_summarize")
    def summarize(self, session: InterviewSession) -> OverallFeedback:
        if self.summary_llm is None:
            raise SummaryUnavailableError("OpenAI API key not configured")

        chain = SUMMARY_PROMPT | self.summary_llm
        try:
            response = chain.invoke(
                {"session_data": format_session_for_summary(session)}
            )
        except Exception as e:
            self.telemetry.log_error("Summary call failed", e, session=session.id)
            raise SummaryUnavailableError("Failed to generate summary") from e

        content = response.content if isinstance(response.content, str) else ""
        try:
            data = json.loads(JSON_FENCE.sub("", content).strip())
            return OverallFeedback(
                technical_feedback=data["technicalFeedback"],
                soft_skill_feedback=data["softSkillFeedback"],
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
            self.telemetry.log_error("Summary not valid JSON", e, session=session.id)
            raise SummaryUnavailableError("Summary response was not valid JSON") from e
