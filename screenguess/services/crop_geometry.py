"""Crop anchor generation and the game ingestion step that assigns them."""

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from ..models.game import CropPosition, GameRecord, RedactedRegion
from .errors import ValidationError
from .random_source import RandomSource, random_index, resolve

log = structlog.stdlib.get_logger()

CROP_ANCHOR_COUNT = 5
SCREENSHOT_COUNT = 5


def generate_crop_positions(
    count: int = CROP_ANCHOR_COUNT,
    random_source: RandomSource | None = None,
) -> list[CropPosition]:
    """Generate ``count`` independent crop anchors with coordinates in [0, 99].

    Anchors may coincide; overlapping crops are allowed.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValidationError(
            "Crop anchor count must be a non-negative integer",
            field="count",
            value=count,
        )

    source = resolve(random_source)
    return [
        CropPosition(x=random_index(100, source), y=random_index(100, source))
        for _ in range(count)
    ]


def build_game_record(
    game_data: Mapping[str, Any],
    screenshots: Sequence[str],
    random_source: RandomSource | None = None,
) -> GameRecord:
    """Accept a new game into the store: validate it and fix its crop anchors.

    This is the only place crop anchors are generated. The returned record
    is frozen; anchors are never regenerated afterwards.

    Args:
        game_data: Raw game fields (id, name, year, platform, genre,
            synopsis, rating, cover, redacted_regions)
        screenshots: Exactly five selected screenshot references
        random_source: Callable returning floats in [0, 1)

    Returns:
        Immutable GameRecord with five crop anchors

    Raises:
        ValidationError: If the id, name, or screenshot selection is invalid
    """
    if isinstance(screenshots, str) or len(screenshots) != SCREENSHOT_COUNT:
        raise ValidationError(
            f"Exactly {SCREENSHOT_COUNT} screenshots must be selected.",
            field="screenshots",
            value=None if isinstance(screenshots, str) else len(screenshots),
        )

    game_id = game_data.get("id")
    if isinstance(game_id, bool) or not isinstance(game_id, int) or game_id < 1:
        raise ValidationError("Game id must be a positive integer", field="id", value=game_id)

    name = game_data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Game name must not be blank", field="name", value=name)

    regions = tuple(
        region if isinstance(region, RedactedRegion) else RedactedRegion(**region)
        for region in game_data.get("redacted_regions") or ()
    )

    record = GameRecord(
        id=game_id,
        name=name.strip(),
        year=game_data.get("year"),
        platform=game_data.get("platform") or "",
        genre=game_data.get("genre") or "",
        synopsis=game_data.get("synopsis") or "",
        rating=game_data.get("rating"),
        screenshots=tuple(screenshots),
        cover=game_data.get("cover"),
        crop_positions=tuple(generate_crop_positions(CROP_ANCHOR_COUNT, random_source)),
        redacted_regions=regions,
    )

    log.info("Game record built", game_id=record.id, name=record.name)
    return record
