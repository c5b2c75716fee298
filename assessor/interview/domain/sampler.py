"""
Stratified question sampling.

Picks `count` questions from a pool so that every source week gets an
even share of the quota, and within each week the difficulty mix follows
the ratio profile of the interview level. Shortfalls are backfilled from
the rest of the week, then from the rest of the pool.

Pure domain logic: no I/O, no shared state. Every random draw goes
through the `rng` argument so callers (and tests) can seed it.
"""

import math
import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

from assessor.config import AppConfig, Difficulty, DifficultyRatio, InterviewLevel
from assessor.interview.domain.models import Question
from assessor.shared.telemetry import Telemetry, measure_time

T = TypeVar("T")

telemetry = Telemetry("QuestionSampler")


def shuffle(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Fisher-Yates shuffle into a new list; the input is left untouched."""
    draw = rng if rng is not None else random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = draw.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def week_key(question: Question) -> int:
    """Questions with no week number (or week 0) share a catch-all group."""
    return question.week_number or AppConfig.MISSING_WEEK_NUMBER


def group_by_week(pool: Iterable[Question]) -> dict[int, tuple[Question, ...]]:
    groups: dict[int, list[Question]] = {}
    for q in pool:
        groups.setdefault(week_key(q), []).append(q)
    return {week: tuple(groups[week]) for week in sorted(groups)}


def group_by_difficulty(
    questions: Iterable[Question],
) -> dict[Difficulty, tuple[Question, ...]]:
    buckets: dict[Difficulty, list[Question]] = {d: [] for d in Difficulty}
    for q in questions:
        buckets[q.difficulty].append(q)
    return {d: tuple(qs) for d, qs in buckets.items()}


def week_quotas(weeks: Sequence[int], count: int) -> dict[int, int]:
    """
    Splits `count` across weeks as evenly as possible.
    The first `count % len(weeks)` weeks get one extra question.
    """
    if not weeks:
        return {}
    per_week, remainder = divmod(max(count, 0), len(weeks))
    return {
        week: per_week + (1 if index < remainder else 0)
        for index, week in enumerate(weeks)
    }


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def difficulty_targets(
    buckets: dict[Difficulty, tuple[Question, ...]],
    quota: int,
    ratio: DifficultyRatio,
) -> dict[Difficulty, int]:
    """
    Advanced and intermediate targets follow the ratio, clamped to what the
    bucket holds. Beginner absorbs whatever is left of the quota.
    """
    advanced = min(
        len(buckets[Difficulty.ADVANCED]),
        max(0, _round_half_up(quota * ratio.advanced)),
    )
    intermediate = min(
        len(buckets[Difficulty.INTERMEDIATE]),
        max(0, _round_half_up(quota * ratio.intermediate)),
    )
    beginner = max(0, quota - intermediate - advanced)
    return {
        Difficulty.BEGINNER: beginner,
        Difficulty.INTERMEDIATE: intermediate,
        Difficulty.ADVANCED: advanced,
    }


def _take_unique(
    candidates: Iterable[Question], limit: int, taken: set[str]
) -> list[Question]:
    picked: list[Question] = []
    for q in candidates:
        if len(picked) >= limit:
            break
        if q.id in taken:
            continue
        taken.add(q.id)
        picked.append(q)
    return picked


def stratify_week(
    week_questions: Sequence[Question],
    quota: int,
    ratio: DifficultyRatio,
    rng: random.Random | None = None,
    taken: set[str] | None = None,
) -> list[Question]:
    """
    Selects up to `quota` questions from one week following `ratio`.

    `taken` holds ids already selected elsewhere; it is updated in place
    so ids stay unique across weeks.
    """
    taken = taken if taken is not None else set()
    if quota <= 0 or not week_questions:
        return []

    buckets = group_by_difficulty(week_questions)
    targets = difficulty_targets(buckets, quota, ratio)

    selected: list[Question] = []
    for difficulty in Difficulty:
        selected.extend(
            _take_unique(shuffle(buckets[difficulty], rng), targets[difficulty], taken)
        )

    # A bucket ran short; fill the gap from the rest of the week
    if len(selected) < quota:
        selected.extend(
            _take_unique(shuffle(week_questions, rng), quota - len(selected), taken)
        )

    return selected


@measure_time("sample_questions", component="QuestionSampler")
def sample_questions(
    pool: Sequence[Question],
    count: int,
    level: InterviewLevel | str = InterviewLevel.ENTRY,
    rng: random.Random | None = None,
) -> list[Question]:
    """
    Returns min(count, unique ids in pool) questions, balanced across weeks
    and skewed toward the difficulty profile of `level`, in random order.
    Never raises: an empty pool or non-positive count gives an empty list.
    """
    rng = rng if rng is not None else random.Random()
    if count <= 0 or not pool:
        return []

    resolved = InterviewLevel.parse(level)
    if resolved is None:
        telemetry.log_warning("Unknown interview level, using entry", level=level)
        resolved = InterviewLevel.ENTRY
    ratio = AppConfig.ratio_for(resolved)

    by_week = group_by_week(pool)
    quotas = week_quotas(list(by_week), count)

    taken: set[str] = set()
    selected: list[Question] = []
    for week, questions in by_week.items():
        selected.extend(stratify_week(questions, quotas[week], ratio, rng, taken))

    # Some weeks could not cover their quota; top up from the whole pool
    if len(selected) < count:
        backfill = _take_unique(shuffle(pool, rng), count - len(selected), taken)
        selected.extend(backfill)

    telemetry.log_info(
        "Sampled Questions",
        requested=count,
        returned=len(selected),
        weeks=len(by_week),
        level=resolved.value,
    )

    # Interleave weeks and difficulties
    return shuffle(selected, rng)
