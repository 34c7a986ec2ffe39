"""Engine context: wires configuration into the engine services.

The request handlers that host the engine create one ``Engine`` and call
through it, so secrets and tunables are read in a single place.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import structlog

from .models import EngineConfig, GameRecord
from .services.anagram import generate_anagram
from .services.config import ConfigurationService
from .services.crop_geometry import build_game_record
from .services.logging import LoggingService, setup_logging
from .services.ordering import build_level_order, seeded_game_order
from .services.random_source import RandomSource, resolve
from .services.session import GameSession
from .services.signing import ScoreSigner, verify_admin_key


log = structlog.stdlib.get_logger()


class Engine:
    """Container for engine services and configuration.

    Services are created lazily on first use.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        config_path: Path | None = None,
        random_source: RandomSource | None = None,
        log_dir: Path | None = None,
    ) -> None:
        """Initialize the engine context.

        Args:
            config: Ready-made configuration; loaded from ``config_path`` and
                the environment when None
            config_path: Path to configuration file
            random_source: Callable returning floats in [0, 1)
            log_dir: Directory for rotating log files (None for console only)
        """
        self._config: EngineConfig | None = config
        self._config_path: Path | None = config_path
        self._random_source: RandomSource = resolve(random_source)
        self._log_dir: Path | None = log_dir

        self._config_service: ConfigurationService | None = None
        self._signer: ScoreSigner | None = None
        self._logging_service: LoggingService | None = None

    @property
    def config_service(self) -> ConfigurationService:
        """Get the configuration service (lazy initialization)."""
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> EngineConfig:
        """Get the current engine configuration.

        Logging is configured from it the first time it is resolved.
        """
        if self._config is None:
            self._config = self.config_service.load_config()
        if self._logging_service is None:
            self._logging_service = setup_logging(log_level=self._config.log_level, log_dir=self._log_dir)
            log.info("Engine logging configured", log_level=self._config.log_level)
        return self._config

    @property
    def signer(self) -> ScoreSigner:
        """Get the score signer bound to the configured secret."""
        if self._signer is None:
            self._signer = ScoreSigner(self.config.signing_secret)
        return self._signer

    def ingest_game(self, game_data: Mapping[str, Any], screenshots: Sequence[str]) -> GameRecord:
        """Build the immutable record for a newly accepted game."""
        return build_game_record(game_data, screenshots, self._random_source)

    def standard_order(self, games: Sequence[GameRecord]) -> list[GameRecord]:
        """Shared seeded order used by the standard mode."""
        return seeded_game_order(
            games,
            fixed_count=self.config.fixed_intro_count,
            seed=self.config.order_seed,
        )

    def level_order(self, games: Sequence[GameRecord]) -> list[GameRecord]:
        """Per-player level list of the configured length."""
        return build_level_order(games, self.config.target_levels, self._random_source)

    def new_session(self, games: Sequence[GameRecord]) -> GameSession:
        """Start a signed run over ``games``."""
        return GameSession(
            games,
            signer=self.signer,
            max_guesses=self.config.max_guesses,
            random_source=self._random_source,
            anagram_decoy=self.config.anagram_decoy,
        )

    def anagram(self, title: str) -> str:
        return generate_anagram(title, self._random_source, decoy=self.config.anagram_decoy)

    def verify_score(self, score: int | float, signature: str | None) -> bool:
        return self.signer.verify(score, signature)

    def verify_admin_key(self, provided: str | None) -> bool:
        """Admin-key gate against the configured key.

        Raises:
            ConfigurationError: If no admin key is configured
        """
        authorized = verify_admin_key(provided, self.config.admin_key)
        if not authorized:
            log.warning("Admin key rejected")
        return authorized
