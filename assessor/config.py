import os
from enum import Enum
from typing import Final, NamedTuple


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def icon(self) -> str:
        return {
            Difficulty.BEGINNER: "🟢",
            Difficulty.INTERMEDIATE: "🟡",
            Difficulty.ADVANCED: "🔴",
        }[self]


class InterviewLevel(str, Enum):
    ENTRY = "entry"
    EXPERIENCED = "experienced"

    @property
    def label(self) -> str:
        return "Entry Level" if self is InterviewLevel.ENTRY else "Experienced"

    @classmethod
    def parse(cls, value: "InterviewLevel | str | None") -> "InterviewLevel | None":
        """Returns the matching level, or None for unknown input."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class DifficultyRatio(NamedTuple):
    beginner: float
    intermediate: float
    advanced: float


class AppConfig:
    # --- App Identity ---
    APP_TITLE = "Interview Assessor"
    SERVICE_NAME = "interview-assessor"

    # --- Sampling Rules ---
    DIFFICULTY_RATIOS: Final[dict[InterviewLevel, DifficultyRatio]] = {
        InterviewLevel.ENTRY: DifficultyRatio(0.5, 0.4, 0.1),
        InterviewLevel.EXPERIENCED: DifficultyRatio(0.1, 0.4, 0.5),
    }
    # Questions without a week number are grouped here
    MISSING_WEEK_NUMBER: Final[int] = 99
    DEFAULT_QUESTION_COUNT: Final[int] = 10
    MAX_QUESTION_COUNT: Final[int] = 50

    # --- Storage ---
    DB_PATH = os.getenv("ASSESSOR_DB_PATH", "data/assessor.db")
    BANKS_DIR = os.getenv("ASSESSOR_BANKS_DIR", "data/question-banks")
    HISTORY_LIMIT: Final[int] = 100

    # --- LLM Scoring ---
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    LLM_MODEL = os.getenv("ASSESSOR_LLM_MODEL", "gpt-4o-mini")
    SCORING_TEMPERATURE = 0.3
    SUMMARY_TEMPERATURE = 0.4
    NEUTRAL_SCORE: Final[int] = 3
    MODEL_ANSWER_EXCERPT = 800
    MAX_FEEDBACK_LENGTH = 1000

    # --- Remote Question Banks (GitHub) ---
    GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
    GITHUB_OWNER = os.getenv("GITHUB_OWNER", "JesterCharles")
    GITHUB_REPO = os.getenv("GITHUB_REPO", "mock-question-bank")
    GITHUB_BRANCH = os.getenv("GITHUB_BRANCH", "main")
    GITHUB_API_URL = "https://api.github.com"
    HTTP_TIMEOUT_SECONDS = 15.0

    @staticmethod
    def ratio_for(level: InterviewLevel) -> DifficultyRatio:
        return AppConfig.DIFFICULTY_RATIOS[level]

    @staticmethod
    def has_valid_api_key(api_key: str | None) -> bool:
        """OpenAI keys are expected to start with 'sk-'."""
        return bool(api_key and api_key.strip() and api_key.startswith("sk-"))
