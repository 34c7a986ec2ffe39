"""Shared fixtures for the screenguess tests."""

import logging
import random

import pytest
import structlog

from screenguess.models import CropPosition, GameRecord


def make_game(
    game_id: int,
    name: str | None = None,
    rating: float | None = 50.0,
    year: int | None = 2000,
) -> GameRecord:
    """Build a GameRecord with placeholder media."""
    return GameRecord(
        id=game_id,
        name=name or f"Game {game_id}",
        year=year,
        platform="PC",
        genre="Action",
        synopsis="",
        rating=rating,
        screenshots=tuple(f"shot-{game_id}-{i}.jpg" for i in range(5)),
        cover=None,
        crop_positions=tuple(CropPosition(x=50, y=50) for _ in range(5)),
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave no handlers or structlog config behind for other tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def games() -> list[GameRecord]:
    return [make_game(i) for i in range(1, 11)]


@pytest.fixture
def identity_source():
    """Source whose draws make Fisher-Yates leave the order unchanged."""
    return lambda: 0.999999


@pytest.fixture
def seeded_source():
    return random.Random(1234).random
