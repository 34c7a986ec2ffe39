"""Configuration service for managing engine settings."""

import json
import os
from pathlib import Path

import structlog

from ..models import EngineConfig
from .logging import LOG_LEVELS

log = structlog.stdlib.get_logger()

SIGNING_SECRET_ENV = "SCREENGUESS_SIGNING_SECRET"
ADMIN_KEY_ENV = "SCREENGUESS_ADMIN_KEY"


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing engine configuration.

    Tunables live in a JSON file; secrets are read from the environment only.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "screenguess" / "config.json"
        self._environ = environ if environ is not None else os.environ
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> EngineConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._with_secrets(self._get_default_config())

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, str | int | bool | None] = json.load(f)

            config = self._with_secrets(self._dict_to_config(data))
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._with_secrets(self._get_default_config())

            log.info("Configuration loaded successfully")
            return config

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._with_secrets(self._get_default_config())

    def save_config(self, config: EngineConfig) -> None:
        """Save non-secret settings to file."""
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: EngineConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.max_guesses, int) or isinstance(config.max_guesses, bool) or config.max_guesses < 1:
            errors.append("max_guesses must be a positive integer")
        elif config.max_guesses > 5:
            errors.append("max_guesses should not exceed 5")

        if not isinstance(config.order_seed, int) or isinstance(config.order_seed, bool):
            errors.append("order_seed must be an integer")

        if not isinstance(config.fixed_intro_count, int) or config.fixed_intro_count < 0:
            errors.append("fixed_intro_count must be a non-negative integer")

        if not isinstance(config.target_levels, int) or config.target_levels < 1:
            errors.append("target_levels must be a positive integer")

        if config.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(LOG_LEVELS)}")

        if config.signing_secret is not None and not config.signing_secret:
            errors.append("signing_secret must not be empty when set")

        return ValidationResult(len(errors) == 0, errors)

    def _with_secrets(self, config: EngineConfig) -> EngineConfig:
        """Attach secrets from the environment. Empty values count as unset."""
        signing_secret = self._environ.get(SIGNING_SECRET_ENV) or None
        admin_key = self._environ.get(ADMIN_KEY_ENV) or None
        if signing_secret is None:
            log.warning("Signing secret not configured", env_var=SIGNING_SECRET_ENV)
        return EngineConfig(
            signing_secret=signing_secret,
            admin_key=admin_key,
            max_guesses=config.max_guesses,
            order_seed=config.order_seed,
            fixed_intro_count=config.fixed_intro_count,
            target_levels=config.target_levels,
            anagram_decoy=config.anagram_decoy,
            log_level=config.log_level,
        )

    def _get_default_config(self) -> EngineConfig:
        """Get default configuration."""
        return EngineConfig()

    def _config_to_dict(self, config: EngineConfig) -> dict[str, str | int | bool | None]:
        """Convert EngineConfig to dictionary for JSON serialization."""
        return {
            "max_guesses": config.max_guesses,
            "order_seed": config.order_seed,
            "fixed_intro_count": config.fixed_intro_count,
            "target_levels": config.target_levels,
            "anagram_decoy": config.anagram_decoy,
            "log_level": config.log_level,
        }

    def _dict_to_config(self, data: dict[str, str | int | bool | None]) -> EngineConfig:
        """Convert dictionary to EngineConfig, falling back per field."""
        defaults = self._get_default_config()

        def int_field(name: str, default: int) -> int:
            raw = data.get(name, default)
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                return default
            return int(raw)

        anagram_raw = data.get("anagram_decoy", defaults.anagram_decoy)
        log_level_raw = data.get("log_level", defaults.log_level)

        return EngineConfig(
            max_guesses=int_field("max_guesses", defaults.max_guesses),
            order_seed=int_field("order_seed", defaults.order_seed),
            fixed_intro_count=int_field("fixed_intro_count", defaults.fixed_intro_count),
            target_levels=int_field("target_levels", defaults.target_levels),
            anagram_decoy=anagram_raw if isinstance(anagram_raw, bool) else defaults.anagram_decoy,
            log_level=str(log_level_raw).upper() if isinstance(log_level_raw, str) else defaults.log_level,
        )
