"""Round scoring: guess-count points, difficulty bonus and hot streaks."""

from dataclasses import dataclass

# Points per guess count; anything else is worth nothing
_POINTS_BY_GUESSES: dict[int, int] = {1: 5, 2: 4, 3: 3, 4: 2, 5: 1}

ZOOM_BONUS_LEVEL_STEP = 5
ZOOM_BONUS_PER_STEP = 10

HOT_STREAK_MAX_GUESSES = 2
HOT_STREAK_THRESHOLD = 3


def calculate_score(guesses_used: int) -> int:
    """Points for solving a round in ``guesses_used`` attempts.

    1 -> 5, 2 -> 4, 3 -> 3, 4 -> 2, 5 -> 1. Any other count (0, 6 and up,
    negatives, non-integers) is a failed round and scores 0.
    """
    if isinstance(guesses_used, bool) or not isinstance(guesses_used, int):
        return 0
    return _POINTS_BY_GUESSES.get(guesses_used, 0)


def get_difficulty_zoom_bonus(level: int) -> int:
    """Bonus of 10 for every full 5 completed levels: ``(level // 5) * 10``.

    Negative or non-integer levels give 0. Whether the caller adds this to the
    score or to the screenshot zoom is up to the caller.
    """
    if isinstance(level, bool) or not isinstance(level, int) or level < 0:
        return 0
    return (level // ZOOM_BONUS_LEVEL_STEP) * ZOOM_BONUS_PER_STEP


@dataclass(frozen=True)
class HotStreak:
    """Consecutive rounds solved in at most two guesses."""
    count: int = 0

    @property
    def active(self) -> bool:
        return self.count >= HOT_STREAK_THRESHOLD


def apply_hot_streak(streak: HotStreak, guesses_used: int) -> tuple[HotStreak, int]:
    """Score a solved round and advance the streak.

    Points are doubled once the streak (including this round) reaches three.
    """
    points = calculate_score(guesses_used)
    if points and guesses_used <= HOT_STREAK_MAX_GUESSES:
        streak = HotStreak(streak.count + 1)
    else:
        streak = HotStreak()

    if streak.active:
        points *= 2
    return streak, points
