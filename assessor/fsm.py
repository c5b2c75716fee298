import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class InterviewState(Enum):
    SETUP = auto()  # Choosing banks, level and question count
    IN_PROGRESS = auto()  # Walking through questions
    REVIEW = auto()  # Editing scores and overall feedback
    COMPLETED = auto()  # Saved to history
    EMPTY_STATE = auto()  # Selected banks held no questions


class InterviewAction(Enum):
    START = auto()
    START_EMPTY = auto()
    FINISH_INTERVIEW = auto()
    BACK_TO_INTERVIEW = auto()
    COMPLETE_REVIEW = auto()
    RESET = auto()


class InterviewStateMachine:
    """
    Pure FSM Logic.
    Only cares about state transitions, not UI or storage.
    """

    def __init__(self, initial_state: InterviewState = InterviewState.SETUP) -> None:
        self._state = initial_state

    @property
    def current_state(self) -> InterviewState:
        return self._state

    def transition(self, action: InterviewAction) -> bool:
        """Applies `action`; returns False (and keeps the state) if not allowed."""
        previous = self._state

        match (self._state, action):
            case (InterviewState.SETUP, InterviewAction.START):
                self._state = InterviewState.IN_PROGRESS
            case (InterviewState.SETUP, InterviewAction.START_EMPTY):
                self._state = InterviewState.EMPTY_STATE

            case (InterviewState.IN_PROGRESS, InterviewAction.FINISH_INTERVIEW):
                self._state = InterviewState.REVIEW
            case (InterviewState.REVIEW, InterviewAction.BACK_TO_INTERVIEW):
                self._state = InterviewState.IN_PROGRESS
            case (InterviewState.REVIEW, InterviewAction.COMPLETE_REVIEW):
                self._state = InterviewState.COMPLETED

            case (_, InterviewAction.RESET):
                self._state = InterviewState.SETUP

            case _:
                logger.error(f"⛔ INVALID TRANSITION: {self._state.name} + {action.name}")
                return False

        logger.info(f"🔄 FSM: {previous.name} --[{action.name}]--> {self._state.name}")
        return True
