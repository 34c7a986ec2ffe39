"""Tests for round scoring."""

import pytest
from hypothesis import given, strategies as st

from screenguess.services.scoring import (
    HotStreak,
    apply_hot_streak,
    calculate_score,
    get_difficulty_zoom_bonus,
)


class TestCalculateScore:
    """Tests for calculate_score."""

    @pytest.mark.parametrize(
        ("guesses", "points"),
        [(1, 5), (2, 4), (3, 3), (4, 2), (5, 1)],
    )
    def test_points_per_guess_count(self, guesses: int, points: int) -> None:
        assert calculate_score(guesses) == points

    @pytest.mark.parametrize("guesses", [0, 6, 7, 100, -1])
    def test_out_of_range_scores_zero(self, guesses: int) -> None:
        assert calculate_score(guesses) == 0

    @pytest.mark.parametrize("guesses", [1.0, "1", None, True])
    def test_non_integers_score_zero(self, guesses: object) -> None:
        assert calculate_score(guesses) == 0  # type: ignore[arg-type]

    @given(st.integers(min_value=1, max_value=4))
    def test_strictly_decreasing(self, guesses: int) -> None:
        assert calculate_score(guesses) > calculate_score(guesses + 1)

    @given(st.integers())
    def test_range(self, guesses: int) -> None:
        assert 0 <= calculate_score(guesses) <= 5


class TestDifficultyZoomBonus:
    """Tests for get_difficulty_zoom_bonus."""

    @pytest.mark.parametrize(
        ("level", "bonus"),
        [(0, 0), (4, 0), (5, 10), (9, 10), (14, 20), (25, 50)],
    )
    def test_bonus_table(self, level: int, bonus: int) -> None:
        assert get_difficulty_zoom_bonus(level) == bonus

    def test_negative_level_is_zero(self) -> None:
        assert get_difficulty_zoom_bonus(-5) == 0

    @given(st.integers(min_value=0, max_value=10_000))
    def test_monotonic_multiple_of_ten(self, level: int) -> None:
        bonus = get_difficulty_zoom_bonus(level)

        assert bonus % 10 == 0
        assert bonus == (level // 5) * 10
        assert get_difficulty_zoom_bonus(level + 1) >= bonus


class TestHotStreak:
    """Tests for hot streak doubling."""

    def test_third_quick_round_doubles(self) -> None:
        streak = HotStreak()
        awarded = []
        for guesses in (1, 2, 1, 2):
            streak, points = apply_hot_streak(streak, guesses)
            awarded.append(points)

        assert awarded == [5, 4, 10, 8]
        assert streak.count == 4
        assert streak.active

    def test_slow_round_resets(self) -> None:
        streak, _ = apply_hot_streak(HotStreak(2), 1)
        assert streak.active

        streak, points = apply_hot_streak(streak, 3)

        assert points == 3
        assert streak == HotStreak()
        assert not streak.active

    def test_failed_round_resets(self) -> None:
        streak, points = apply_hot_streak(HotStreak(5), 6)

        assert points == 0
        assert streak.count == 0
