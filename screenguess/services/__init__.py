"""Service layer: the round fairness and integrity engine."""

from .anagram import generate_anagram, normalize_title
from .config import ConfigurationService, ValidationResult
from .crop_geometry import build_game_record, generate_crop_positions
from .errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    IntegrityError,
    RandomSourceError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .ordering import build_level_order, generate_weighted_game_order, seeded_game_order, weighted_game_order
from .random_source import Mulberry32
from .redaction import redact_game_name
from .scoring import HotStreak, apply_hot_streak, calculate_score, get_difficulty_zoom_bonus
from .sequencer import shuffle, shuffle_string
from .session import GameSession
from .signing import (
    ScoreSigner,
    constant_time_equals,
    generate_signature,
    verify_admin_key,
    verify_signature,
)
from .token_cache import TokenCache, ensure_token

__all__ = [
    "AppError",
    "ConfigurationError",
    "ConfigurationService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "GameSession",
    "HotStreak",
    "IntegrityError",
    "Mulberry32",
    "RandomSourceError",
    "ScoreSigner",
    "TokenCache",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "apply_hot_streak",
    "build_game_record",
    "build_level_order",
    "calculate_score",
    "constant_time_equals",
    "ensure_token",
    "generate_anagram",
    "generate_crop_positions",
    "generate_signature",
    "generate_weighted_game_order",
    "get_difficulty_zoom_bonus",
    "get_error_service",
    "handle_error",
    "normalize_title",
    "redact_game_name",
    "seeded_game_order",
    "shuffle",
    "shuffle_string",
    "verify_admin_key",
    "verify_signature",
    "weighted_game_order",
]
