"""
Unit tests for achievement checking.
"""

from datetime import datetime, timedelta, timezone

import pytest

from ratethedogs.constants import ACHIEVEMENTS, RATING_VALUES
from ratethedogs.services.achievements import (
    check_achievements,
    evaluate_achievements,
    has_early_bird,
    has_variety_pack,
    max_streak,
)


START = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def unlocked(achievements):
    return {a.id for a in achievements if a.is_unlocked}


class TestEarlyBird:
    """Tests for has_early_bird."""

    def test_five_ratings_within_thirty_minutes(self):
        timestamps = [START + timedelta(minutes=7 * i) for i in range(5)]
        assert has_early_bird(timestamps)

    def test_exactly_thirty_minutes(self):
        timestamps = [START + timedelta(minutes=7.5 * i) for i in range(5)]
        assert has_early_bird(timestamps)

    def test_too_slow(self):
        timestamps = [START + timedelta(minutes=8 * i) for i in range(5)]
        assert not has_early_bird(timestamps)

    def test_any_window_counts(self):
        slow = [START + timedelta(hours=i) for i in range(3)]
        fast = [START + timedelta(hours=5, minutes=i) for i in range(5)]
        assert has_early_bird(slow + fast)

    def test_fewer_than_five(self):
        assert not has_early_bird([START] * 4)


class TestStreak:
    """Tests for max_streak."""

    def test_consecutive_days(self):
        timestamps = [START + timedelta(days=i) for i in range(7)]
        assert max_streak(timestamps) == 7

    def test_gap_resets(self):
        days = [0, 1, 2, 4, 5]
        timestamps = [START + timedelta(days=d) for d in days]
        assert max_streak(timestamps) == 3

    def test_same_day_counts_once(self):
        timestamps = [START, START + timedelta(hours=1), START + timedelta(days=1)]
        assert max_streak(timestamps) == 2

    def test_order_does_not_matter(self):
        timestamps = [START + timedelta(days=d) for d in (3, 1, 2)]
        assert max_streak(timestamps) == 3

    def test_uses_utc_calendar_days(self):
        late = datetime(2026, 5, 1, 23, 30, tzinfo=timezone.utc)
        assert max_streak([late, late + timedelta(hours=1)]) == 2

    def test_empty(self):
        assert max_streak([]) == 0


class TestEvaluateAchievements:
    """Tests for evaluate_achievements."""

    def test_nothing_unlocked(self):
        achievements = evaluate_achievements([], [], 0)

        assert [a.id for a in achievements] == [a["id"] for a in ACHIEVEMENTS]
        assert unlocked(achievements) == set()
        assert all(a.unlocked_at is None for a in achievements)

    def test_perfect_score_and_tough_crowd(self):
        achievements = evaluate_achievements([5.0, 1.5], [START, START + timedelta(days=2)], 1)
        assert unlocked(achievements) == {"perfect_score", "tough_crowd"}

    def test_tough_crowd_boundary(self):
        assert "tough_crowd" not in unlocked(evaluate_achievements([2.0], [START], 1))

    def test_breed_explorer(self):
        assert "breed_explorer" in unlocked(evaluate_achievements([3.0], [START], 10))
        assert "breed_explorer" not in unlocked(evaluate_achievements([3.0], [START], 9))

    def test_variety_pack(self):
        assert has_variety_pack(RATING_VALUES)
        assert not has_variety_pack(RATING_VALUES[:-1])

    def test_all_star_rater(self):
        values = [4.0] * 20
        timestamps = [START + timedelta(days=i) for i in range(20)]
        result = unlocked(evaluate_achievements(values, timestamps, 1))
        assert "all_star_rater" in result
        assert "streak_master" in result

        result = unlocked(evaluate_achievements(values[:19], timestamps[:19], 1))
        assert "all_star_rater" not in result


class TestCheckAchievements:
    """Tests for the database-backed check."""

    def test_loads_rating_history(self, db, make_breed, make_dog, make_rating, anon_id):
        breeds = [make_breed(name=f"Breed {i}") for i in range(10)]
        for i, breed in enumerate(breeds):
            dog = make_dog(breed=breed)
            make_rating(dog, anon_id, RATING_VALUES[i], created_at=START + timedelta(minutes=i))

        result = unlocked(check_achievements(db, anon_id))

        assert result == {"perfect_score", "breed_explorer", "variety_pack", "early_bird", "tough_crowd"}

    def test_other_users_ignored(self, db, make_dog, make_rating, anon_id):
        make_rating(make_dog(), "someone-else", 5.0)
        assert unlocked(check_achievements(db, anon_id)) == set()
