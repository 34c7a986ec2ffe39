"""Game pool ordering for the different play modes.

All orderings are built on ``sequencer.shuffle``; nothing here sorts by a
random key or comparator.
"""

from collections.abc import Sequence

import structlog

from ..models.game import GameRecord
from .errors import ValidationError
from .random_source import Mulberry32, RandomSource, draw, random_int, resolve
from .sequencer import shuffle

log = structlog.stdlib.get_logger()

DEFAULT_ORDER_SEED = 20250101
DEFAULT_FIXED_COUNT = 50
DEFAULT_TARGET_LEVELS = 100

# Chance that each of the first five endless picks comes from a friendly pool
FRIENDLY_PICK_PROBABILITIES = (1.0, 0.9, 0.7, 0.4, 0.3)
FRIENDLY_RATING_RANGE = (88, 91)
FRIENDLY_YEAR_RANGE = (2010, 2015)


def seeded_game_order(
    games: Sequence[GameRecord],
    fixed_count: int = DEFAULT_FIXED_COUNT,
    seed: int = DEFAULT_ORDER_SEED,
) -> list[GameRecord]:
    """Shared order for the standard mode, identical for every player.

    The first ``fixed_count`` games stay in place as the introductory levels;
    the rest are shuffled with a ``Mulberry32`` stream seeded by ``seed``.
    """
    if fixed_count < 0:
        raise ValidationError("fixed_count must be non-negative", field="fixed_count", value=fixed_count)

    if len(games) <= fixed_count:
        return list(games)

    fixed = list(games[:fixed_count])
    rest = shuffle(games[fixed_count:], Mulberry32(seed))
    return fixed + rest


def build_level_order(
    games: Sequence[GameRecord],
    target_levels: int = DEFAULT_TARGET_LEVELS,
    random_source: RandomSource | None = None,
) -> list[GameRecord]:
    """Pick ``target_levels`` games in random order.

    A pool smaller than the target is repeated, one fresh shuffle per pass.
    """
    if target_levels < 0:
        raise ValidationError("target_levels must be non-negative", field="target_levels", value=target_levels)
    if not games:
        return []

    source = resolve(random_source)
    if len(games) >= target_levels:
        return shuffle(games, source)[:target_levels]

    output: list[GameRecord] = []
    while len(output) < target_levels:
        output.extend(shuffle(games, source))

    log.debug("Pool repeated to fill levels", pool_size=len(games), target_levels=target_levels)
    return output[:target_levels]


def weighted_game_order(
    games: Sequence[GameRecord],
    random_source: RandomSource | None = None,
) -> list[GameRecord]:
    """Endless-mode order that eases players in.

    Each game is classed as friendly-rated, friendly-new or standard against
    thresholds jittered per game. The first five picks favour the friendly
    pools with falling probability; everything left is shuffled once and
    appended. Every game appears exactly once.
    """
    source = resolve(random_source)

    friendly_rated: list[GameRecord] = []
    friendly_new: list[GameRecord] = []
    standard: list[GameRecord] = []

    for game in games:
        rating_threshold = random_int(*FRIENDLY_RATING_RANGE, source)
        year_threshold = random_int(*FRIENDLY_YEAR_RANGE, source)

        if (game.rating or 0) >= rating_threshold:
            friendly_rated.append(game)
        elif (game.year or 0) >= year_threshold:
            friendly_new.append(game)
        else:
            standard.append(game)

    rated = shuffle(friendly_rated, source)
    new = shuffle(friendly_new, source)
    rest = shuffle(standard, source)

    order: list[GameRecord] = []
    for chance in FRIENDLY_PICK_PROBABILITIES:
        if not (rated or new or rest):
            break

        picked: GameRecord
        if draw(source) < chance and (rated or new):
            use_rated = draw(source) < 0.5
            if use_rated and rated:
                picked = rated.pop()
            elif not use_rated and new:
                picked = new.pop()
            else:
                picked = rated.pop() if rated else new.pop()
        else:
            pool = rest or rated or new
            picked = pool.pop()
        order.append(picked)

    order.extend(shuffle(rated + new + rest, source))

    log.info(
        "Weighted game order generated",
        total=len(order),
        friendly_rated=len(friendly_rated),
        friendly_new=len(friendly_new),
        standard=len(standard),
    )
    return order


def generate_weighted_game_order(
    games: Sequence[GameRecord],
    random_source: RandomSource | None = None,
) -> list[int]:
    """Ids of ``weighted_game_order(games)``."""
    return [game.id for game in weighted_game_order(games, random_source)]
