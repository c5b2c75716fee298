class AssessorError(Exception):
    """Base class for errors the interview flow is expected to handle."""


class SessionNotStartedError(AssessorError):
    def __init__(self) -> None:
        super().__init__("No interview session is active")


class QuestionBankNotFoundError(AssessorError):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Question bank not found: {filename}")


class InvalidBankPathError(AssessorError):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Path escapes the question bank directory: {filename}")


class RemoteSourceError(AssessorError):
    def __init__(self, path: str, status: int | None, reason: str) -> None:
        self.path = path
        self.status = status
        super().__init__(f"Remote fetch failed for '{path}' ({status}): {reason}")


class SummaryUnavailableError(AssessorError):
    """Raised when the overall feedback summary cannot be produced."""


class QuestionBankUnreadableError(AssessorError):
    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        super().__init__(f"Question bank could not be read: {filename} ({reason})")
