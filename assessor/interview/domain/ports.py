from abc import ABC, abstractmethod

from assessor.interview.domain.models import (
    InterviewSession,
    OverallFeedback,
    Question,
    QuestionAssessment,
    QuestionBank,
    RemoteFile,
    ScoreResult,
    StarterQuestion,
)


class IScoringService(ABC):
    @abstractmethod
    def score(
        self, question: Question | StarterQuestion, assessment: QuestionAssessment
    ) -> ScoreResult:
        """
        Must not raise: an unavailable backend yields a neutral,
        degraded ScoreResult.
        """
        pass

    @abstractmethod
    def summarize(self, session: InterviewSession) -> OverallFeedback:
        """Raises SummaryUnavailableError when no summary can be produced."""
        pass


class IHistoryRepository(ABC):
    @abstractmethod
    def list_sessions(self) -> list[InterviewSession]:
        """Newest first."""
        pass

    @abstractmethod
    def get_session(self, session_id: str) -> InterviewSession | None:
        pass

    @abstractmethod
    def save_session(self, session: InterviewSession) -> int:
        """Upserts the session and returns the number of stored sessions."""
        pass

    @abstractmethod
    def delete_session(self, session_id: str) -> int:
        pass


class IQuestionBankStore(ABC):
    @abstractmethod
    def list_banks(self) -> list[QuestionBank]:
        pass

    @abstractmethod
    def save_bank(self, filename: str, content: str) -> QuestionBank:
        pass

    @abstractmethod
    def read_bank(self, filename: str) -> str:
        pass

    @abstractmethod
    def delete_bank(self, filename: str) -> None:
        pass


class IRemoteQuestionSource(ABC):
    @abstractmethod
    def list_contents(self, path: str = "") -> list[RemoteFile]:
        pass

    @abstractmethod
    def get_file_content(self, path: str) -> str | None:
        pass

    @abstractmethod
    def find_question_banks(self, path: str = "") -> list[RemoteFile]:
        pass
