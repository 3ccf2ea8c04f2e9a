"""
Unit tests for personal statistics.
"""

from datetime import datetime, timedelta, timezone

import pytest

from ratethedogs.services.stats import (
    get_achievements_summary,
    get_milestone_progress,
    get_personality,
    get_rating_distribution,
    get_recent_ratings,
    get_top_breeds,
    get_user_stats,
)


START = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)


class TestPersonality:
    """Tests for get_personality."""

    def test_locked_below_ten_ratings(self):
        personality = get_personality(3, 4.8)

        assert personality.id == "puppy_trainee"
        assert not personality.is_unlocked
        assert personality.ratings_needed == 7
        assert not personality.is_top_dog

    def test_locked_without_average(self):
        assert get_personality(12, None).id == "puppy_trainee"

    @pytest.mark.parametrize("avg,expected", [
        (5.0, "treat_dispenser"),
        (4.2, "treat_dispenser"),
        (4.19, "belly_rub_expert"),
        (3.5, "belly_rub_expert"),
        (3.49, "bark_inspector"),
        (2.5, "bark_inspector"),
        (2.49, "picky_pup_parent"),
        (0.5, "picky_pup_parent"),
    ])
    def test_ranges(self, avg, expected):
        personality = get_personality(10, avg)

        assert personality.id == expected
        assert personality.is_unlocked
        assert personality.ratings_needed == 0

    def test_top_dog_flag(self):
        assert get_personality(100, 3.0).is_top_dog
        assert not get_personality(99, 3.0).is_top_dog


class TestMilestones:
    """Tests for get_milestone_progress."""

    def test_no_ratings(self):
        progress = get_milestone_progress(0)

        assert progress.next_milestone == 1
        assert progress.next_milestone_name == "First Rating"
        assert progress.progress_percent == 0
        assert progress.completed_milestones == []

    def test_midway(self):
        progress = get_milestone_progress(25)

        assert progress.next_milestone == 50
        assert progress.progress_percent == 50
        assert progress.completed_milestones == [1, 10]

    def test_exactly_on_milestone(self):
        progress = get_milestone_progress(100)
        assert progress.next_milestone == 250
        assert progress.completed_milestones == [1, 10, 50, 100]

    def test_all_complete(self):
        progress = get_milestone_progress(600)

        assert progress.next_milestone is None
        assert progress.next_milestone_name is None
        assert progress.progress_percent == 100
        assert progress.completed_milestones == [1, 10, 50, 100, 250, 500]


class TestUserStats:
    """Database-backed statistics."""

    def test_empty_history(self, db, anon_id):
        stats = get_user_stats(db, anon_id)

        assert stats.ratings_count == 0
        assert stats.skips_count == 0
        assert stats.avg_rating_given is None
        assert stats.first_rating_at is None
        assert stats.global_avg_rating is None
        assert stats.rating_diff_from_global is None
        assert stats.personality.id == "puppy_trainee"

    def test_summary(self, db, make_dog, make_rating, make_skip, anon_id):
        dogs = [make_dog() for _ in range(3)]
        make_rating(dogs[0], anon_id, 4.0, created_at=START)
        make_rating(dogs[1], anon_id, 5.0, created_at=START + timedelta(hours=2))
        make_rating(dogs[0], "other", 1.5)
        make_skip(dogs[2], anon_id)

        stats = get_user_stats(db, anon_id)

        assert stats.ratings_count == 2
        assert stats.skips_count == 1
        assert stats.avg_rating_given == 4.5
        assert stats.global_avg_rating == 3.5
        assert stats.rating_diff_from_global == 1.0
        assert stats.first_rating_at == START
        assert stats.last_rating_at == START + timedelta(hours=2)

    def test_distribution(self, db, make_dog, make_rating, anon_id):
        for value in (4.0, 4.0, 5.0, 5.0, 1.0):
            make_rating(make_dog(), anon_id, value)

        result = get_rating_distribution(db, anon_id)

        assert list(result.distribution) == ["0.5", "1", "1.5", "2", "2.5", "3", "3.5", "4", "4.5", "5"]
        assert result.distribution["4"] == 2
        assert result.distribution["5"] == 2
        assert result.distribution["1"] == 1
        assert result.distribution["3"] == 0
        assert result.total_ratings == 5
        # Ties go to the higher value
        assert result.mode_rating == 5.0

    def test_distribution_empty(self, db, anon_id):
        result = get_rating_distribution(db, anon_id)
        assert result.mode_rating is None
        assert result.total_ratings == 0
        assert set(result.distribution.values()) == {0}

    def test_top_breeds(self, db, make_breed, make_dog, make_rating, anon_id):
        beagle = make_breed("Beagle")
        pug = make_breed("Pug")
        best_beagle = make_dog(breed=beagle)
        make_rating(best_beagle, anon_id, 5.0)
        make_rating(make_dog(breed=beagle), anon_id, 4.0)
        make_rating(make_dog(breed=pug), anon_id, 3.0)

        result = get_top_breeds(db, anon_id, limit=1)

        assert result.total_breeds_rated == 2
        assert len(result.items) == 1
        top = result.items[0]
        assert top.slug == "beagle"
        assert top.avg_rating == 4.5
        assert top.rating_count == 2
        assert top.image_url == best_beagle.image_url

    def test_recent_ratings_newest_first(self, db, make_dog, make_rating, anon_id):
        first = make_dog(name="Old")
        second = make_dog(name="New")
        make_rating(first, anon_id, 2.0, created_at=START)
        make_rating(second, anon_id, 3.5, created_at=START + timedelta(minutes=5))

        recent = get_recent_ratings(db, anon_id, limit=10)

        assert [r.dog_name for r in recent] == ["New", "Old"]
        assert recent[0].value == 3.5
        assert recent[0].breed_slug == "beagle"
        assert recent[0].rated_at == START + timedelta(minutes=5)

        assert len(get_recent_ratings(db, anon_id, limit=1)) == 1

    def test_achievements_summary(self, db, make_dog, make_rating, anon_id):
        make_rating(make_dog(), anon_id, 5.0)

        summary = get_achievements_summary(db, anon_id)

        assert summary.milestones.current == 1
        assert summary.milestones.completed_milestones == [1]
        assert summary.total_achievements == 7
        assert summary.unlocked_count == 1
