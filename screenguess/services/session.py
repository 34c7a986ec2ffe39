"""Single-player run: ordered pool, rounds, scoring and the signed result."""

import uuid
from collections.abc import Sequence

import structlog

from ..models.game import GameRecord
from ..models.session import RoundResult, RoundStatus, RunRecord, SessionRound
from .anagram import generate_anagram
from .errors import ValidationError
from .ordering import weighted_game_order
from .random_source import RandomSource, resolve
from .scoring import HotStreak, apply_hot_streak, get_difficulty_zoom_bonus
from .signing import ScoreSigner

log = structlog.stdlib.get_logger()


class GameSession:
    """One endless run through a game pool that opens with friendly picks.

    A round ends when the game is guessed or the guess limit is used up;
    a lost round ends the run.
    """

    def __init__(
        self,
        games: Sequence[GameRecord],
        signer: ScoreSigner | None = None,
        max_guesses: int = 5,
        random_source: RandomSource | None = None,
        anagram_decoy: bool = False,
    ) -> None:
        """Initialize the session.

        Args:
            games: Candidate pool; put in weighted friendly-first order up front
            signer: Signs the final score, None to leave runs unsigned
            max_guesses: Guesses allowed per round
            random_source: Callable returning floats in [0, 1)
            anagram_decoy: Mix one random decoy letter into anagrams
        """
        if max_guesses < 1:
            raise ValidationError("max_guesses must be positive", field="max_guesses", value=max_guesses)

        self._random_source: RandomSource = resolve(random_source)
        self._order: list[GameRecord] = weighted_game_order(games, self._random_source)
        self._position: int = 0
        self._signer: ScoreSigner | None = signer
        self.max_guesses: int = max_guesses
        self.anagram_decoy: bool = anagram_decoy

        self._round: SessionRound | None = None
        self._streak: HotStreak = HotStreak()
        self._history: list[RoundResult] = []
        self.score: int = 0
        self.level: int = 0  # Completed rounds
        self.is_over: bool = False

        log.info("Game session created", pool_size=len(self._order), max_guesses=max_guesses)

    @property
    def current_round(self) -> SessionRound | None:
        return self._round

    @property
    def history(self) -> tuple[RoundResult, ...]:
        return tuple(self._history)

    @property
    def hot_streak(self) -> HotStreak:
        return self._streak

    @property
    def zoom_bonus(self) -> int:
        return get_difficulty_zoom_bonus(self.level)

    def start_round(self) -> SessionRound | None:
        """Move to the next game. Returns None once the pool is exhausted."""
        self._require_running()
        if self._round is not None and self._round.status is RoundStatus.PLAYING:
            raise ValidationError("A round is already in progress")

        if self._position >= len(self._order):
            self.is_over = True
            self._round = None
            log.info("Game pool exhausted", score=self.score, level=self.level)
            return None

        self._round = SessionRound(game=self._order[self._position])
        self._position += 1
        return self._round

    def submit_guess(self, game_id: int) -> RoundStatus:
        """Record a guess by game id and return the round's new status."""
        current = self._require_playing()
        current.guesses.append(game_id)

        if game_id == current.game.id:
            self._streak, points = apply_hot_streak(self._streak, current.guesses_used)
            self.score += points
            self.level += 1
            self._end_round(current, RoundStatus.WON, points)
        elif current.guesses_used >= self.max_guesses:
            self._lose(current)

        return current.status

    def skip(self) -> RoundStatus:
        """Spend a guess without answering."""
        current = self._require_playing()
        current.guesses.append(None)
        if current.guesses_used >= self.max_guesses:
            self._lose(current)
        return current.status

    def use_anagram(self) -> str:
        """Scrambled letters of the current title. Stable for the round."""
        current = self._require_playing()
        if current.anagram is None:
            current.anagram = generate_anagram(current.game.name, self._random_source, decoy=self.anagram_decoy)
        return current.anagram

    def finish(self) -> RunRecord:
        """End the run and produce the record to submit."""
        signature = self._signer.sign(self.score) if self._signer is not None else None
        self.is_over = True
        run = RunRecord(
            id=uuid.uuid4().hex[:8],
            total_score=self.score,
            total_games=len(self._history),
            history=tuple(self._history),
            signature=signature,
        )
        log.info("Run finished", run_id=run.id, total_score=run.total_score, signed=signature is not None)
        return run

    def _lose(self, current: SessionRound) -> None:
        self._streak = HotStreak()
        self._end_round(current, RoundStatus.LOST, 0)
        self.is_over = True

    def _end_round(self, current: SessionRound, status: RoundStatus, points: int) -> None:
        current.status = status
        self._history.append(RoundResult(game_id=current.game.id, score=points, status=status))
        log.debug(
            "Round ended",
            game_id=current.game.id,
            status=status.value,
            guesses_used=current.guesses_used,
            points=points,
        )

    def _require_running(self) -> None:
        if self.is_over:
            raise ValidationError("The run is over")

    def _require_playing(self) -> SessionRound:
        self._require_running()
        if self._round is None or self._round.status is not RoundStatus.PLAYING:
            raise ValidationError("No round in progress")
        return self._round
