from assessor.config import AppConfig, InterviewLevel
from assessor.fsm import InterviewAction, InterviewState, InterviewStateMachine
from assessor.interview.application.service import InterviewService
from assessor.interview.domain.models import (
    InterviewSession,
    Question,
    QuestionAssessment,
    ScoreResult,
    ScoreSummary,
    SoftSkillName,
    StarterQuestion,
)
from assessor.interview.presentation.state_provider import IStateProvider
from assessor.shared.telemetry import Telemetry


class InterviewViewModel:
    """
    Glue between the Streamlit views and InterviewService.
    The session and FSM state live in the state provider so they
    survive Streamlit reruns.
    """

    def __init__(self, service: InterviewService, state_provider: IStateProvider):
        self.service = service
        self.state = state_provider
        self.telemetry = Telemetry("ViewModel")

        saved_fsm = self.state.get("fsm_state", InterviewState.SETUP)
        self.fsm = InterviewStateMachine(initial_state=saved_fsm)

        saved_session = self.state.get("interview_session")
        if saved_session is not None:
            self.service.resume(saved_session)

    # --- Properties ---
    @property
    def current_state(self) -> InterviewState:
        return self.fsm.current_state

    @property
    def session(self) -> InterviewSession | None:
        return self.state.get("interview_session")

    @property
    def current_question(self) -> Question | StarterQuestion | None:
        return self.service.current_question() if self.session else None

    @property
    def current_assessment(self) -> QuestionAssessment | None:
        q = self.current_question
        if q is None or self.session is None:
            return None
        return self.session.assessments.get(q.id)

    @property
    def notice(self) -> str | None:
        return self.state.get("notice")

    def progress(self) -> tuple[int, int]:
        return self.service.progress()

    def summary(self) -> ScoreSummary:
        return self.service.summary()

    # --- Actions (Traced) ---
    def start_interview(
        self,
        bank_files: list[str],
        remote_paths: list[str],
        question_count: int,
        level: InterviewLevel,
        candidate_name: str = "",
        interviewer_name: str = "",
    ) -> None:
        Telemetry.start_trace()
        count = min(max(question_count, 0), AppConfig.MAX_QUESTION_COUNT)
        self.telemetry.log_info(
            "Action: Start Interview", banks=len(bank_files) + len(remote_paths), count=count
        )

        pool = self.service.load_pool(bank_files, remote_paths)
        if not pool:
            self.fsm.transition(InterviewAction.START_EMPTY)
            self._persist()
            return

        self.service.create_session(
            pool,
            count,
            level,
            candidate_name=candidate_name,
            interviewer_name=interviewer_name,
            selected_banks=[*bank_files, *remote_paths],
        )
        self.state.set("notice", None)
        self.fsm.transition(InterviewAction.START)
        self._persist()

    def toggle_keyword(self, keyword: str) -> None:
        q = self.current_question
        if q is not None:
            self.service.toggle_keyword(q.id, keyword)
            self._persist()

    def toggle_soft_skill(self, skill: SoftSkillName) -> None:
        q = self.current_question
        if q is not None:
            self.service.toggle_soft_skill(q.id, skill)
            self._persist()

    def save_notes(self, notes: str) -> None:
        q = self.current_question
        if q is not None:
            self.service.set_notes(q.id, notes)
            self._persist()

    def skip_current(self, value: bool = True) -> None:
        q = self.current_question
        if q is not None:
            self.service.mark_did_not_get_to(q.id, value)
            self._persist()

    def score_current(self) -> ScoreResult | None:
        Telemetry.start_trace()
        q = self.current_question
        if q is None:
            self.telemetry.log_error("Scoring failed", Exception("No active question"))
            return None
        result = self.service.complete_question(q.id)
        self._persist()
        return result

    def next_question(self) -> None:
        self.service.next_question()
        self._persist()

    def previous_question(self) -> None:
        self.service.previous_question()
        self._persist()

    def finish_interview(self) -> None:
        Telemetry.start_trace()
        self.service.finish_interview()
        self.fsm.transition(InterviewAction.FINISH_INTERVIEW)
        self._persist()

    def back_to_interview(self) -> None:
        if self.fsm.transition(InterviewAction.BACK_TO_INTERVIEW):
            self.service.resume_interview()
        self._persist()

    def validate_score(self, question_id: str, score: int, feedback: str) -> None:
        self.service.validate_score(question_id, score, feedback)
        self._persist()

    def generate_summary(self) -> None:
        Telemetry.start_trace()
        note = self.service.generate_summary()
        self.state.set("notice", note)
        self._persist()

    def save_overall(
        self, technical: float, soft_skill: float, technical_text: str, soft_text: str
    ) -> None:
        self.service.set_overall_scores(technical, soft_skill)
        self.service.set_overall_feedback(technical_text, soft_text)
        self._persist()

    def complete_review(self) -> None:
        Telemetry.start_trace()
        total = self.service.complete_review()
        self.telemetry.log_info("Interview Archived", history_size=total)
        self.fsm.transition(InterviewAction.COMPLETE_REVIEW)
        self._persist()

    def reset(self) -> None:
        Telemetry.start_trace()
        self.service.reset()
        self.state.set("interview_session", None)
        self.state.set("notice", None)
        self.fsm.transition(InterviewAction.RESET)
        self._persist()

    def _persist(self) -> None:
        self.state.set("interview_session", self.service.session)
        self.state.set("fsm_state", self.fsm.current_state)
