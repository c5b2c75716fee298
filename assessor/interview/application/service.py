import random
from typing import Any

from assessor.config import InterviewLevel
from assessor.interview.adapters.markdown_parser import parse_interview_questions
from assessor.interview.domain.errors import (
    AssessorError,
    SessionNotStartedError,
    SummaryUnavailableError,
)
from assessor.interview.domain.models import (
    AssessmentStatus,
    InterviewSession,
    Question,
    QuestionAssessment,
    ScoreResult,
    ScoreSummary,
    SessionStatus,
    SoftSkillName,
    StarterQuestion,
)
from assessor.interview.domain.ports import (
    IHistoryRepository,
    IQuestionBankStore,
    IRemoteQuestionSource,
    IScoringService,
)
from assessor.interview.domain.sampler import sample_questions
from assessor.interview.domain.scoring import calculate_aggregate_scores
from assessor.interview.domain.starters import generate_starter_questions
from assessor.shared.telemetry import Telemetry, measure_time

SUMMARY_UNAVAILABLE_NOTE = (
    "Overall summary could not be generated. Please write it manually."
)


class InterviewService:
    """
    Runs one interview: builds the session from a question pool,
    records the interviewer's assessments and drives scoring.
    """

    def __init__(
        self,
        scorer: IScoringService,
        history: IHistoryRepository,
        banks: IQuestionBankStore | None = None,
        remote: IRemoteQuestionSource | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.scorer = scorer
        self.history = history
        self.banks = banks
        self.remote = remote
        self.rng = rng if rng is not None else random.Random()
        self.telemetry = Telemetry("InterviewService")
        self.session: InterviewSession | None = None

    # --- Question Pool ---
    @measure_time("load_pool")
    def load_pool(
        self, bank_files: list[str] | None = None, remote_paths: list[str] | None = None
    ) -> list[Question]:
        """
        Parses every selected bank. Each source becomes its own week,
        numbered by its position in the selection (1-based).
        """
        sources: list[tuple[str, str | None]] = []
        for filename in bank_files or []:
            sources.append((filename, self._read_local(filename)))
        for path in remote_paths or []:
            sources.append((path, self._read_remote(path)))

        pool: list[Question] = []
        for week, (name, content) in enumerate(sources, start=1):
            if content is None:
                continue
            pool.extend(parse_interview_questions(content, week, source=name))

        self.telemetry.log_info("Pool Loaded", sources=len(sources), questions=len(pool))
        return pool

    def _read_local(self, filename: str) -> str | None:
        if self.banks is None:
            return None
        try:
            return self.banks.read_bank(filename)
        except AssessorError as e:
            self.telemetry.log_error("Bank unavailable", e, filename=filename)
            return None

    def _read_remote(self, path: str) -> str | None:
        if self.remote is None:
            return None
        try:
            return self.remote.get_file_content(path)
        except AssessorError as e:
            self.telemetry.log_error("Remote bank unavailable", e, path=path)
            return None

    # --- Session Lifecycle ---
    @measure_time("create_session")
    def create_session(
        self,
        pool: list[Question],
        question_count: int,
        level: InterviewLevel | str = InterviewLevel.ENTRY,
        candidate_name: str | None = None,
        interviewer_name: str | None = None,
        selected_banks: list[str] | None = None,
    ) -> InterviewSession:
        resolved = InterviewLevel.parse(level) or InterviewLevel.ENTRY

        questions = sample_questions(pool, question_count, resolved, rng=self.rng)
        starters = generate_starter_questions(self.rng)

        assessments: dict[str, QuestionAssessment] = {
            sq.id: QuestionAssessment(question_id=sq.id) for sq in starters
        }
        for q in questions:
            # Every keyword starts as missed
            assessments[q.id] = QuestionAssessment(
                question_id=q.id, keywords_missed=list(q.keywords)
            )

        self.session = InterviewSession(
            candidate_name=candidate_name or None,
            interviewer_name=interviewer_name or None,
            level=resolved,
            selected_banks=selected_banks or [],
            question_count=question_count,
            starter_questions=starters,
            questions=questions,
            assessments=assessments,
            status=SessionStatus.IN_PROGRESS,
        )
        self.telemetry.log_info(
            "Session Created",
            session=self.session.id,
            requested=question_count,
            sampled=len(questions),
            level=resolved.value,
        )
        return self.session

    def resume(self, session: InterviewSession) -> None:
        self.session = session

    def reset(self) -> None:
        self.session = None

    def _require_session(self) -> InterviewSession:
        if self.session is None:
            raise SessionNotStartedError()
        return self.session

    def _assessment(self, question_id: str) -> QuestionAssessment | None:
        return self._require_session().assessments.get(question_id)

    # --- Navigation ---
    def current_question(self) -> Question | StarterQuestion | None:
        return self._require_session().current_question()

    def next_question(self) -> None:
        self._require_session().next_question()

    def previous_question(self) -> None:
        self._require_session().previous_question()

    def go_to(self, index: int) -> None:
        self._require_session().go_to(index)

    def progress(self) -> tuple[int, int]:
        if self.session is None:
            return 0, 0
        return self.session.progress()

    # --- Assessment Edits ---
    def update_assessment(self, question_id: str, **updates: Any) -> None:
        assessment = self._assessment(question_id)
        if assessment is None:
            return
        for field, value in updates.items():
            setattr(assessment, field, value)

    def toggle_keyword(self, question_id: str, keyword: str) -> None:
        assessment = self._assessment(question_id)
        if assessment is not None:
            assessment.toggle_keyword(keyword)

    def toggle_soft_skill(self, question_id: str, skill: SoftSkillName) -> None:
        assessment = self._assessment(question_id)
        if assessment is not None:
            assessment.toggle_soft_skill(skill)

    def set_notes(self, question_id: str, notes: str) -> None:
        self.update_assessment(question_id, interviewer_notes=notes)

    def mark_did_not_get_to(self, question_id: str, value: bool) -> None:
        self.update_assessment(question_id, did_not_get_to=value)

    # --- Scoring ---
    @measure_time("complete_question")
    def complete_question(self, question_id: str) -> ScoreResult | None:
        """Marks the answer done and asks the scorer for a suggestion."""
        session = self._require_session()
        assessment = session.assessments.get(question_id)
        question = next((q for q in session.all_questions() if q.id == question_id), None)
        if assessment is None or question is None:
            self.telemetry.log_warning("Unknown question", q_id=question_id)
            return None

        assessment.status = AssessmentStatus.PROCESSING
        result = self.scorer.score(question, assessment)

        assessment.llm_score = result.score
        assessment.llm_feedback = result.feedback
        assessment.status = AssessmentStatus.READY
        self.telemetry.log_info(
            "Question Scored", q_id=question_id, score=result.score, degraded=result.degraded
        )
        return result

    def validate_score(self, question_id: str, score: int, feedback: str) -> None:
        assessment = self._assessment(question_id)
        if assessment is None:
            return
        # Assignment is validated; an out-of-range score raises before anything changes
        assessment.final_score = score
        assessment.final_feedback = feedback
        assessment.status = AssessmentStatus.VALIDATED

    # --- Wrap Up ---
    def finish_interview(self) -> None:
        self._require_session().status = SessionStatus.REVIEW

    def resume_interview(self) -> None:
        """Back from review to asking questions."""
        self._require_session().status = SessionStatus.IN_PROGRESS

    def set_overall_scores(self, technical: float, soft_skill: float) -> None:
        session = self._require_session()
        session.overall_technical_score = technical
        session.overall_soft_skill_score = soft_skill

    def set_overall_feedback(self, technical: str, soft_skill: str) -> None:
        session = self._require_session()
        session.technical_feedback = technical
        session.soft_skill_feedback = soft_skill

    def summary(self) -> ScoreSummary:
        return calculate_aggregate_scores(self._require_session().assessments)

    @measure_time("generate_summary")
    def generate_summary(self) -> str | None:
        """
        Fills the overall feedback from the scorer. Returns a note for the
        interviewer when it is unavailable, None on success.
        """
        session = self._require_session()
        try:
            feedback = self.scorer.summarize(session)
        except SummaryUnavailableError as e:
            self.telemetry.log_warning("Summary unavailable", reason=str(e))
            return SUMMARY_UNAVAILABLE_NOTE

        self.set_overall_feedback(feedback.technical_feedback, feedback.soft_skill_feedback)
        return None

    @measure_time("complete_review")
    def complete_review(self) -> int:
        """Closes the session and stores it; returns the history size."""
        session = self._require_session()
        session.status = SessionStatus.COMPLETED

        totals = self.summary()
        if session.overall_technical_score is None:
            session.overall_technical_score = totals.technical_score
        if session.overall_soft_skill_score is None:
            session.overall_soft_skill_score = totals.soft_skill_score

        return self.history.save_session(session)

    # --- History ---
    def list_history(self) -> list[InterviewSession]:
        return self.history.list_sessions()

    def delete_history(self, session_id: str) -> int:
        return self.history.delete_session(session_id)
