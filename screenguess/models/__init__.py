"""Data models for the screenguess engine."""

from .config import EngineConfig
from .game import CropPosition, GameRecord, RedactedRegion
from .session import RoundResult, RoundStatus, RunRecord, SessionRound

__all__ = [
    "CropPosition",
    "EngineConfig",
    "GameRecord",
    "RedactedRegion",
    "RoundResult",
    "RoundStatus",
    "RunRecord",
    "SessionRound",
]
