"""Configuration data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration settings."""
    signing_secret: str | None = None  # Loaded from the environment only
    admin_key: str | None = None  # Loaded from the environment only
    max_guesses: int = 5
    order_seed: int = 20250101
    fixed_intro_count: int = 50
    target_levels: int = 100
    anagram_decoy: bool = False
    log_level: str = "INFO"
