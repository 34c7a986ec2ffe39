"""Session and run data models."""

from dataclasses import dataclass, field
from enum import Enum

from .game import GameRecord


class RoundStatus(Enum):
    """Lifecycle state of a single round."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class SessionRound:
    """Presentation state of the round in progress. Never persisted."""
    game: GameRecord
    guesses: list[int | None] = field(default_factory=list)  # None marks a skipped guess
    status: RoundStatus = RoundStatus.PLAYING
    anagram: str | None = None

    @property
    def guesses_used(self) -> int:
        return len(self.guesses)


@dataclass(frozen=True)
class RoundResult:
    """Outcome of a finished round as stored in run history."""
    game_id: int
    score: int
    status: RoundStatus


@dataclass(frozen=True)
class RunRecord:
    """Submitted run: total score plus the signature that vouches for it."""
    id: str
    total_score: int
    total_games: int
    history: tuple[RoundResult, ...]
    signature: str | None = None
