# colorful_birds/game_core/utils.py

import random
from . import constants as c

PLACE_LABELS = {1: '1st', 2: '2nd', 3: '3rd'}


def roll_die():
    """Бросает один кубик."""
    return random.randint(c.DIE_MIN, c.DIE_MAX)


def is_valid_roll(value):
    """Проверяет, что значение - целое число с грани кубика (bool не считается)."""
    return isinstance(value, int) and not isinstance(value, bool) and c.DIE_MIN <= value <= c.DIE_MAX


def is_color_match(tile_color, player_color):
    """Очки дают только клетки цвета игрока."""
    return tile_color == player_color


def get_winner(players, winning_score=c.WINNING_SCORE):
    """Возвращает первого игрока, набравшего winning_score, или None."""
    for player in players:
        if player.score >= winning_score:
            return player
    return None


def place_label(place):
    return PLACE_LABELS.get(place, f"{place}th")


def rank_players(players):
    """
    Турнирная таблица: по убыванию очков, при равенстве - порядок состава.
    Возвращает список (место, игрок).
    """
    ordered = sorted(players, key=lambda p: -p.score)
    return [(index + 1, player) for index, player in enumerate(ordered)]
