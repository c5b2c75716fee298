import random
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from assessor.config import Difficulty, InterviewLevel


# --- Enums ---
class AssessmentStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    PROCESSING = "processing"
    READY = "ready"
    VALIDATED = "validated"


class SessionStatus(str, Enum):
    SETUP = "setup"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    COMPLETED = "completed"


StarterType = Literal["about-yourself", "project-work"]


# --- Entities ---
class Question(BaseModel):
    """
    A technical question parsed from a question bank.
    Immutable once parsed; the sampler only reads `id`, `week_number`
    and `difficulty`.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    question_number: int = 0
    text: str
    keywords: tuple[str, ...] = ()
    model_answer: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    week_number: int | None = None
    source: str | None = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, value: Any) -> Difficulty:
        # Unknown or missing tags go to the beginner bucket
        if isinstance(value, Difficulty):
            return value
        try:
            return Difficulty(str(value).strip().lower())
        except ValueError:
            return Difficulty.BEGINNER


class StarterQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    type: StarterType
    guidelines: tuple[str, ...] = ()


class SoftSkills(BaseModel):
    clearly_spoken: bool = False
    eye_contact: bool = False
    confidence: bool = False
    structured_thinking: bool = False

    def positive_count(self) -> int:
        return sum(
            [
                self.clearly_spoken,
                self.eye_contact,
                self.confidence,
                self.structured_thinking,
            ]
        )


SoftSkillName = Literal[
    "clearly_spoken", "eye_contact", "confidence", "structured_thinking"
]


class QuestionAssessment(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    question_id: str
    keywords_hit: list[str] = []
    keywords_missed: list[str] = []
    soft_skills: SoftSkills = Field(default_factory=SoftSkills)
    interviewer_notes: str = ""
    did_not_get_to: bool = False
    llm_score: int | None = Field(default=None, ge=1, le=5)
    llm_feedback: str | None = None
    final_score: int | None = Field(default=None, ge=1, le=5)
    final_feedback: str | None = None
    status: AssessmentStatus = AssessmentStatus.PENDING

    def toggle_keyword(self, keyword: str) -> None:
        if keyword in self.keywords_hit:
            self.keywords_hit.remove(keyword)
            self.keywords_missed.append(keyword)
        else:
            if keyword in self.keywords_missed:
                self.keywords_missed.remove(keyword)
            self.keywords_hit.append(keyword)

    def toggle_soft_skill(self, skill: SoftSkillName) -> None:
        setattr(self.soft_skills, skill, not getattr(self.soft_skills, skill))

    def effective_score(self) -> int | None:
        """Interviewer-validated score wins over the LLM suggestion."""
        return self.final_score if self.final_score is not None else self.llm_score

    def effective_feedback(self) -> str | None:
        return self.final_feedback if self.final_feedback is not None else self.llm_feedback

    @property
    def total_keywords(self) -> int:
        return len(self.keywords_hit) + len(self.keywords_missed)


def _new_session_id() -> str:
    suffix = "".join(random.choices("abcdefghijklmnopqrstuvwxyz0123456789", k=9))
    return f"session-{int(time.time() * 1000)}-{suffix}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class InterviewSession(BaseModel):
    """
    Encapsulates the state of a running interview.
    """

    id: str = Field(default_factory=_new_session_id)
    candidate_name: str | None = None
    interviewer_name: str | None = None
    date: str = Field(default_factory=_now_iso)
    level: InterviewLevel = InterviewLevel.ENTRY
    selected_banks: list[str] = []
    question_count: int = 0
    starter_questions: list[StarterQuestion] = []
    questions: list[Question] = []
    assessments: dict[str, QuestionAssessment] = {}
    current_question_index: int = 0
    status: SessionStatus = SessionStatus.SETUP

    overall_technical_score: float | None = None
    overall_soft_skill_score: float | None = None
    technical_feedback: str | None = None
    soft_skill_feedback: str | None = None

    def all_questions(self) -> list[Question | StarterQuestion]:
        return [*self.starter_questions, *self.questions]

    def current_question(self) -> Question | StarterQuestion | None:
        items = self.all_questions()
        if 0 <= self.current_question_index < len(items):
            return items[self.current_question_index]
        return None

    def go_to(self, index: int) -> None:
        total = len(self.all_questions())
        if total == 0:
            self.current_question_index = 0
            return
        self.current_question_index = min(max(index, 0), total - 1)

    def next_question(self) -> None:
        self.go_to(self.current_question_index + 1)

    def previous_question(self) -> None:
        self.go_to(self.current_question_index - 1)

    def progress(self) -> tuple[int, int]:
        """(1-based current position, total questions)."""
        total = len(self.all_questions())
        if total == 0:
            return 0, 0
        return self.current_question_index + 1, total


# --- Value Objects ---
class ScoreResult(BaseModel):
    score: int = Field(ge=1, le=5)
    feedback: str
    # True when the scorer answered with a neutral placeholder
    degraded: bool = False


class ScoreSummary(BaseModel):
    total_questions: int = 0
    completed_questions: int = 0
    skipped_questions: int = 0
    average_score: float = 0.0
    technical_score: float = 0.0
    soft_skill_score: float = 0.0


class OverallFeedback(BaseModel):
    technical_feedback: str
    soft_skill_feedback: str


class QuestionBank(BaseModel):
    id: str
    name: str
    filename: str
    question_count: int = 0
    created_at: str | None = None
    modified_at: str | None = None
    size: int = 0


class RemoteFile(BaseModel):
    name: str
    path: str
    type: Literal["file", "dir"] = "file"
    sha: str | None = None
    size: int = 0
    download_url: str | None = None
    html_url: str | None = None
