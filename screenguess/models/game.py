"""Game-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CropPosition:
    """Percentage offset (0-99) of a screenshot's crop anchor."""
    x: int
    y: int


@dataclass(frozen=True)
class RedactedRegion:
    """Rectangle hidden on a screenshot, in percentages."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class GameRecord:
    """Core game data structure, immutable once ingested."""
    id: int
    name: str
    year: int | None
    platform: str
    genre: str
    synopsis: str
    rating: float | None  # 0-100 scale, None if not available
    screenshots: tuple[str, ...]
    cover: str | None
    crop_positions: tuple[CropPosition, ...]
    redacted_regions: tuple[RedactedRegion, ...] = ()
