"""Чистые функции game_core: узор доски, раскладка, путь и помощники."""

import itertools

import pytest

from colorful_birds.game_core import (
    compute_path,
    clamp_target,
    generate_pattern,
    get_winner,
    is_valid_roll,
    place_label,
    rank_players,
    roll_die,
    spiral_layout,
    tile_color,
)
from colorful_birds.game_core import constants as c
from colorful_birds.services.game_state import Player


class TestBoardPattern:
    def test_known_colors_for_default_board(self):
        pattern = generate_pattern(5)

        assert len(pattern) == 25
        assert pattern[0] == c.COLOR_RED
        assert pattern[3] == c.COLOR_PURPLE
        assert pattern[5] == c.COLOR_BLUE
        assert pattern[4] == c.COLOR_RED
        assert pattern[6] == c.COLOR_YELLOW
        assert pattern[24] == c.COLOR_GREEN

    def test_pattern_is_deterministic(self):
        assert generate_pattern(5) == generate_pattern(5)
        assert generate_pattern(7) == generate_pattern(7)

    def test_pattern_is_immutable(self):
        pattern = generate_pattern(3)
        with pytest.raises(TypeError):
            pattern[0] = c.COLOR_BLUE

    def test_formula_holds_for_every_index(self):
        pattern = generate_pattern(6)
        for i, color in enumerate(pattern):
            assert color == c.TILE_COLORS[(i // 3 + i) % 5]

    def test_single_tile_board(self):
        assert generate_pattern(1) == (c.COLOR_RED,)

    @pytest.mark.parametrize("size", [0, -3])
    def test_rejects_non_positive_size(self, size):
        with pytest.raises(ValueError):
            generate_pattern(size)

    def test_purple_never_matches_a_player(self):
        assert c.COLOR_PURPLE not in c.PLAYER_COLORS

    def test_tile_color_lookup_bounds(self):
        pattern = generate_pattern(2)
        assert tile_color(pattern, 3) == c.COLOR_PURPLE
        with pytest.raises(IndexError):
            tile_color(pattern, 4)


class TestSpiralLayout:
    def test_five_by_five_spiral(self):
        assert spiral_layout(5) == [
            [0, 1, 2, 3, 4],
            [15, 16, 17, 18, 5],
            [14, 23, 24, 19, 6],
            [13, 22, 21, 20, 7],
            [12, 11, 10, 9, 8],
        ]

    @pytest.mark.parametrize("size", [1, 2, 3, 4, 6])
    def test_every_index_appears_once(self, size):
        cells = list(itertools.chain.from_iterable(spiral_layout(size)))
        assert sorted(cells) == list(range(size * size))


class TestPathPlanner:
    @pytest.mark.parametrize("start,end", [(0, 0), (0, 3), (5, 2), (10, 24), (7, 6)])
    def test_path_properties(self, start, end):
        path = compute_path(start, end)

        assert path[0] == start
        assert path[-1] == end
        assert len(path) == abs(start - end) + 1
        assert all(abs(b - a) == 1 for a, b in zip(path, path[1:]))

    def test_forward_path(self):
        assert compute_path(3, 5) == [3, 4, 5]

    def test_single_element_path(self):
        assert compute_path(4, 4) == [4]

    def test_clamp_law(self):
        total_tiles = 25
        for position in range(total_tiles):
            for value in range(c.DIE_MIN, c.DIE_MAX + 1):
                target, reached_end = clamp_target(position, value, total_tiles)
                assert target == min(position + value, total_tiles - 1)
                assert target <= total_tiles - 1
                assert reached_end == (position + value >= total_tiles)

    def test_exact_landing_on_last_tile_counts_as_board_end(self):
        assert clamp_target(20, 4, 25) == (24, False)
        assert clamp_target(21, 4, 25) == (24, True)


class TestHelpers:
    def test_roll_die_stays_on_the_die(self):
        for _ in range(200):
            assert c.DIE_MIN <= roll_die() <= c.DIE_MAX

    @pytest.mark.parametrize("value,expected", [
        (1, True), (6, True), (0, False), (7, False), (3.0, False), ("3", False), (True, False), (None, False),
    ])
    def test_is_valid_roll(self, value, expected):
        assert is_valid_roll(value) is expected

    def test_rank_players_is_stable_on_ties(self):
        players = [
            Player(1, 'Red Bird', c.COLOR_RED, score=10),
            Player(2, 'Blue Bird', c.COLOR_BLUE, score=20),
            Player(3, 'Green Bird', c.COLOR_GREEN, score=10),
        ]
        ranked = rank_players(players)
        assert [(place, p.id) for place, p in ranked] == [(1, 2), (2, 1), (3, 3)]

    def test_place_labels(self):
        assert [place_label(i) for i in range(1, 6)] == ['1st', '2nd', '3rd', '4th', '5th']

    def test_get_winner(self):
        players = [Player(1, 'Red Bird', c.COLOR_RED, score=20), Player(2, 'Blue Bird', c.COLOR_BLUE, score=30)]
        assert get_winner(players).id == 2
        assert get_winner(players, winning_score=40) is None
