"""Tests for game pool ordering."""

import random
from collections import Counter

import pytest
from hypothesis import given, strategies as st

from conftest import make_game
from screenguess.services.errors import ValidationError
from screenguess.services.ordering import (
    build_level_order,
    generate_weighted_game_order,
    seeded_game_order,
)


def pool(size: int) -> list:
    return [make_game(i) for i in range(1, size + 1)]


class TestSeededGameOrder:
    """Tests for the shared seeded order."""

    def test_intro_levels_fixed(self) -> None:
        games = pool(80)

        order = seeded_game_order(games, fixed_count=50)

        assert order[:50] == games[:50]
        assert Counter(g.id for g in order) == Counter(g.id for g in games)

    def test_same_for_every_caller(self) -> None:
        games = pool(80)
        assert seeded_game_order(games) == seeded_game_order(list(games))

    def test_tail_is_shuffled(self) -> None:
        games = pool(150)
        assert seeded_game_order(games)[50:] != games[50:]

    def test_seed_changes_order(self) -> None:
        games = pool(150)
        assert seeded_game_order(games, seed=1) != seeded_game_order(games, seed=2)

    def test_small_pool_returned_as_is(self) -> None:
        games = pool(10)
        order = seeded_game_order(games)

        assert order == games
        assert order is not games

    def test_empty_pool(self) -> None:
        assert seeded_game_order([]) == []

    def test_negative_fixed_count(self) -> None:
        with pytest.raises(ValidationError):
            seeded_game_order(pool(5), fixed_count=-1)


class TestBuildLevelOrder:
    """Tests for build_level_order."""

    def test_large_pool_truncated(self, seeded_source) -> None:
        games = pool(150)

        order = build_level_order(games, target_levels=100, random_source=seeded_source)

        assert len(order) == 100
        assert len({g.id for g in order}) == 100

    def test_small_pool_repeated(self, seeded_source) -> None:
        games = pool(30)

        order = build_level_order(games, target_levels=100, random_source=seeded_source)

        assert len(order) == 100
        counts = Counter(g.id for g in order)
        assert set(counts.values()) <= {3, 4}
        # Each pass is a full permutation of the pool
        for start in (0, 30, 60):
            assert {g.id for g in order[start:start + 30]} == {g.id for g in games}

    def test_empty_pool(self) -> None:
        assert build_level_order([]) == []

    def test_negative_target(self) -> None:
        with pytest.raises(ValidationError):
            build_level_order(pool(3), target_levels=-1)


class TestWeightedGameOrder:
    """Tests for the endless-mode weighted order."""

    @given(
        ratings=st.lists(st.one_of(st.none(), st.floats(0, 100)), max_size=40),
        rng=st.randoms(use_true_random=False),
    )
    def test_every_game_once(self, ratings: list[float | None], rng: random.Random) -> None:
        """**Feature: screenguess, Property 8: Weighted order is a permutation of ids**"""
        games = [make_game(i, rating=r, year=1990 + i) for i, r in enumerate(ratings, start=1)]

        order = generate_weighted_game_order(games, rng.random)

        assert sorted(order) == [g.id for g in games]

    def test_first_pick_is_friendly(self, seeded_source) -> None:
        games = [make_game(i, rating=10, year=1995) for i in range(1, 20)]
        games.append(make_game(99, rating=95, year=1995))

        order = generate_weighted_game_order(games, seeded_source)

        assert order[0] == 99

    def test_all_standard_pool(self, seeded_source) -> None:
        games = [make_game(i, rating=None, year=None) for i in range(1, 8)]

        order = generate_weighted_game_order(games, seeded_source)

        assert sorted(order) == list(range(1, 8))

    def test_empty(self) -> None:
        assert generate_weighted_game_order([]) == []
