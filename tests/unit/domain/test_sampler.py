# ==============================================================================
# ARCHITECTURE: UNIT TEST (CORE LOGIC)
# ------------------------------------------------------------------------------
# GOAL: Verify the stratified sampling algorithm.
# CONSTRAINTS:
#   1. EXECUTION: FAST (< 50ms per test).
#   2. I/O: FORBIDDEN. No Database, No Network, No File System.
#   3. RANDOMNESS: Always seeded through an explicit random.Random.
# ==============================================================================
import random
from collections import Counter

import pytest

from assessor.config import AppConfig, Difficulty, InterviewLevel
from assessor.interview.domain.sampler import (
    difficulty_targets,
    group_by_difficulty,
    group_by_week,
    sample_questions,
    shuffle,
    stratify_week,
    week_quotas,
)


def _ids(questions):
    return [q.id for q in questions]


def _difficulty_counts(questions):
    return Counter(q.difficulty for q in questions)


class TestShuffle:
    def test_returns_permutation_without_mutating_input(self, rng):
        items = list(range(20))

        result = shuffle(items, rng)

        assert items == list(range(20))
        assert sorted(result) == items

    def test_same_seed_same_order(self):
        items = list(range(20))
        assert shuffle(items, random.Random(5)) == shuffle(items, random.Random(5))

    def test_empty_and_single(self, rng):
        assert shuffle([], rng) == []
        assert shuffle(["a"], rng) == ["a"]


class TestGrouping:
    def test_weeks_sorted_numerically(self, question_factory):
        pool = [
            question_factory("a", week=10),
            question_factory("b", week=2),
            question_factory("c", week=1),
        ]

        assert list(group_by_week(pool)) == [1, 2, 10]

    def test_missing_week_goes_to_catch_all_group(self, question_factory):
        pool = [
            question_factory("a", week=None),
            question_factory("b", week=0),
            question_factory("c", week=3),
        ]

        groups = group_by_week(pool)

        assert list(groups) == [3, AppConfig.MISSING_WEEK_NUMBER]
        assert _ids(groups[AppConfig.MISSING_WEEK_NUMBER]) == ["a", "b"]

    def test_difficulty_buckets_always_present(self, question_factory):
        buckets = group_by_difficulty([question_factory("a", difficulty=Difficulty.ADVANCED)])

        assert set(buckets) == set(Difficulty)
        assert buckets[Difficulty.BEGINNER] == ()
        assert _ids(buckets[Difficulty.ADVANCED]) == ["a"]


class TestWeekQuotas:
    def test_remainder_goes_to_earliest_weeks(self):
        assert week_quotas([1, 2, 3], 10) == {1: 4, 2: 3, 3: 3}

    def test_more_weeks_than_questions(self):
        assert week_quotas([1, 2, 3, 4], 2) == {1: 1, 2: 1, 3: 0, 4: 0}

    def test_no_weeks(self):
        assert week_quotas([], 5) == {}


class TestDifficultyTargets:
    @pytest.fixture
    def full_buckets(self, pool_factory):
        return group_by_difficulty(pool_factory(weeks=1, per_cell=5))

    def test_entry_profile_rounds_half_up(self, full_buckets):
        targets = difficulty_targets(full_buckets, 5, AppConfig.ratio_for(InterviewLevel.ENTRY))

        # 5 * 0.1 = 0.5 rounds up to 1
        assert targets == {
            Difficulty.BEGINNER: 2,
            Difficulty.INTERMEDIATE: 2,
            Difficulty.ADVANCED: 1,
        }

    def test_experienced_profile(self, full_buckets):
        targets = difficulty_targets(full_buckets, 5, AppConfig.ratio_for(InterviewLevel.EXPERIENCED))

        assert targets == {
            Difficulty.BEGINNER: 0,
            Difficulty.INTERMEDIATE: 2,
            Difficulty.ADVANCED: 3,
        }

    def test_single_question_quota(self, full_buckets):
        entry = difficulty_targets(full_buckets, 1, AppConfig.ratio_for(InterviewLevel.ENTRY))
        experienced = difficulty_targets(full_buckets, 1, AppConfig.ratio_for(InterviewLevel.EXPERIENCED))

        assert entry[Difficulty.BEGINNER] == 1
        assert experienced[Difficulty.ADVANCED] == 1

    def test_clamped_to_bucket_size(self, question_factory):
        buckets = group_by_difficulty(
            [question_factory(f"b{i}") for i in range(5)]
            + [question_factory(f"i{i}", difficulty=Difficulty.INTERMEDIATE) for i in range(5)]
        )

        targets = difficulty_targets(buckets, 10, AppConfig.ratio_for(InterviewLevel.ENTRY))

        assert targets[Difficulty.ADVANCED] == 0
        assert targets[Difficulty.INTERMEDIATE] == 4
        assert targets[Difficulty.BEGINNER] == 6


class TestStratifyWeek:
    def test_backfills_within_week_when_bucket_is_short(self, question_factory, rng):
        week = [question_factory(f"b{i}") for i in range(5)] + [
            question_factory(f"i{i}", difficulty=Difficulty.INTERMEDIATE) for i in range(5)
        ]

        selected = stratify_week(week, 10, AppConfig.ratio_for(InterviewLevel.ENTRY), rng)

        assert sorted(_ids(selected)) == sorted(_ids(week))
        assert _difficulty_counts(selected)[Difficulty.ADVANCED] == 0

    def test_respects_ids_taken_elsewhere(self, question_factory, rng):
        week = [question_factory(f"b{i}") for i in range(3)]
        taken = {"b0"}

        selected = stratify_week(week, 3, AppConfig.ratio_for(InterviewLevel.ENTRY), rng, taken)

        assert sorted(_ids(selected)) == ["b1", "b2"]
        assert taken == {"b0", "b1", "b2"}

    def test_zero_quota(self, question_factory, rng):
        assert stratify_week([question_factory("a")], 0, AppConfig.ratio_for(InterviewLevel.ENTRY), rng) == []


class TestSampleQuestions:
    def test_two_week_entry_scenario(self, scenario_pool, rng):
        selected = sample_questions(scenario_pool, 10, InterviewLevel.ENTRY, rng)

        assert len(selected) == 10
        assert Counter(q.week_number for q in selected) == {1: 5, 2: 5}
        assert _difficulty_counts(selected) == {
            Difficulty.BEGINNER: 4,
            Difficulty.INTERMEDIATE: 4,
            Difficulty.ADVANCED: 2,
        }

    def test_two_week_experienced_scenario(self, scenario_pool, rng):
        selected = sample_questions(scenario_pool, 10, InterviewLevel.EXPERIENCED, rng)

        assert _difficulty_counts(selected) == {
            Difficulty.INTERMEDIATE: 4,
            Difficulty.ADVANCED: 6,
        }

    def test_three_questions_over_three_weeks(self, pool_factory, rng):
        pool = pool_factory(weeks=3, per_cell=2)

        selected = sample_questions(pool, 3, InterviewLevel.ENTRY, rng)

        assert sorted(q.week_number for q in selected) == [1, 2, 3]
        # A quota of one with the entry profile is always a beginner question
        assert all(q.difficulty == Difficulty.BEGINNER for q in selected)

    def test_every_week_represented_when_count_allows(self, pool_factory, rng):
        pool = pool_factory(weeks=4, per_cell=3)

        selected = sample_questions(pool, 8, InterviewLevel.EXPERIENCED, rng)

        assert Counter(q.week_number for q in selected) == {1: 2, 2: 2, 3: 2, 4: 2}

    def test_week_without_advanced_backfills(self, question_factory, rng):
        pool = [question_factory(f"b{i}") for i in range(5)] + [
            question_factory(f"i{i}", difficulty=Difficulty.INTERMEDIATE) for i in range(5)
        ]

        selected = sample_questions(pool, 10, InterviewLevel.EXPERIENCED, rng)

        assert sorted(_ids(selected)) == sorted(_ids(pool))

    def test_short_week_tops_up_from_other_weeks(self, question_factory, rng):
        pool = [question_factory("w1-a", week=1)] + [
            question_factory(f"w2-{i}", week=2) for i in range(9)
        ]

        selected = sample_questions(pool, 6, InterviewLevel.ENTRY, rng)

        assert len(selected) == 6
        assert "w1-a" in _ids(selected)

    def test_count_larger_than_pool_returns_whole_pool(self, pool_factory, rng):
        pool = pool_factory(weeks=1, per_cell=1)

        selected = sample_questions(pool, 10, InterviewLevel.ENTRY, rng)

        assert sorted(_ids(selected)) == sorted(_ids(pool))

    def test_duplicate_ids_in_pool_are_returned_once(self, question_factory, rng):
        pool = [question_factory("dup"), question_factory("dup"), question_factory("other")]

        selected = sample_questions(pool, 5, InterviewLevel.ENTRY, rng)

        assert sorted(_ids(selected)) == ["dup", "other"]

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_returns_empty(self, scenario_pool, rng, count):
        assert sample_questions(scenario_pool, count, InterviewLevel.ENTRY, rng) == []

    def test_empty_pool_returns_empty(self, rng):
        assert sample_questions([], 5, InterviewLevel.ENTRY, rng) == []

    def test_level_accepts_plain_strings(self, scenario_pool):
        by_enum = sample_questions(scenario_pool, 10, InterviewLevel.EXPERIENCED, random.Random(9))
        by_str = sample_questions(scenario_pool, 10, "experienced", random.Random(9))

        assert _ids(by_enum) == _ids(by_str)

    def test_unknown_level_falls_back_to_entry(self, scenario_pool):
        fallback = sample_questions(scenario_pool, 10, "principal", random.Random(3))
        entry = sample_questions(scenario_pool, 10, InterviewLevel.ENTRY, random.Random(3))

        assert _ids(fallback) == _ids(entry)

    def test_same_seed_is_deterministic(self, scenario_pool):
        first = sample_questions(scenario_pool, 12, InterviewLevel.ENTRY, random.Random(42))
        second = sample_questions(scenario_pool, 12, InterviewLevel.ENTRY, random.Random(42))

        assert _ids(first) == _ids(second)

    def test_different_seeds_vary_the_selection(self, scenario_pool):
        outcomes = {
            tuple(_ids(sample_questions(scenario_pool, 10, InterviewLevel.ENTRY, random.Random(seed))))
            for seed in range(20)
        }

        assert len(outcomes) > 1

    def test_does_not_mutate_pool(self, scenario_pool, rng):
        before = _ids(scenario_pool)

        sample_questions(scenario_pool, 10, InterviewLevel.ENTRY, rng)

        assert _ids(scenario_pool) == before

    def test_experienced_draws_more_advanced_than_entry(self, pool_factory):
        pool = pool_factory(weeks=3, per_cell=10)

        entry = sample_questions(pool, 20, InterviewLevel.ENTRY, random.Random(1))
        experienced = sample_questions(pool, 20, InterviewLevel.EXPERIENCED, random.Random(1))

        assert (
            _difficulty_counts(experienced)[Difficulty.ADVANCED]
            > _difficulty_counts(entry)[Difficulty.ADVANCED]
        )
        assert (
            _difficulty_counts(entry)[Difficulty.BEGINNER]
            > _difficulty_counts(experienced)[Difficulty.BEGINNER]
        )


def test_size_uniqueness_and_subset_hold_for_random_pools(question_factory):
    """Randomised pools of uneven shape keep the basic guarantees."""
    for seed in range(40):
        shape = random.Random(seed)
        pool = [
            question_factory(
                f"q{i}",
                week=shape.choice([None, 0, 1, 2, 3, 7]),
                difficulty=shape.choice(list(Difficulty)),
            )
            for i in range(shape.randint(0, 25))
        ]
        count = shape.randint(0, 30)

        selected = sample_questions(pool, count, shape.choice(list(InterviewLevel)), random.Random(seed))

        ids = _ids(selected)
        assert len(ids) == min(max(count, 0), len(pool))
        assert len(set(ids)) == len(ids)
        assert set(ids) <= set(_ids(pool))
