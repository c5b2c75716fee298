import random

import pytest

from assessor.config import Difficulty
from assessor.interview.adapters.db_manager import DatabaseManager
from assessor.interview.adapters.sqlite_history_repository import SQLiteHistoryRepository
from assessor.interview.domain.models import Question


def _make_question(
    id: str,
    week: int | None = 1,
    difficulty: Difficulty | str = Difficulty.BEGINNER,
    keywords: tuple[str, ...] = (),
) -> Question:
    """Helper to create minimal valid Question objects for testing."""
    return Question(
        id=id,
        text=f"Question {id}",
        keywords=keywords,
        difficulty=difficulty,
        week_number=week,
    )


def _make_pool(weeks: int, per_cell: int) -> list[Question]:
    """`weeks` x 3 difficulties x `per_cell` questions."""
    return [
        _make_question(f"w{w}-{d.value}-{i}", week=w, difficulty=d)
        for w in range(1, weeks + 1)
        for d in Difficulty
        for i in range(per_cell)
    ]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sample_question():
    return Question(
        id="week1-q1",
        question_number=1,
        text="What is a closure?",
        keywords=("scope", "function", "environment"),
        model_answer="A function bundled with its lexical environment.",
        difficulty=Difficulty.INTERMEDIATE,
        week_number=1,
        source="week1.md",
    )


@pytest.fixture
def scenario_pool():
    """2 weeks x 3 difficulties x 5 questions = 30."""
    return _make_pool(weeks=2, per_cell=5)


@pytest.fixture
def in_memory_history():
    """Returns a clean, empty in-memory history repository."""
    db_manager = DatabaseManager(db_path=":memory:")
    repo = SQLiteHistoryRepository(db_manager=db_manager)
    yield repo
    db_manager.close()


@pytest.fixture
def question_factory():
    return _make_question


@pytest.fixture
def pool_factory():
    return _make_pool
