# colorful_birds/game_core/path_planner.py

from typing import List, Tuple


def compute_path(start: int, end: int) -> List[int]:
    """
    Путь фишки от start до end включительно, шаг +-1.
    Каждый элемент пути = один тик анимации.
    """
    step = 1 if end >= start else -1
    return list(range(start, end + step, step))


def clamp_target(position: int, value: int, total_tiles: int) -> Tuple[int, bool]:
    """
    Возвращает (целевая клетка, дошли_до_конца).
    Перелет за последнюю клетку останавливает фишку ровно на ней:
    без переноса на начало и без бонуса.
    """
    raw_target = position + value
    if raw_target >= total_tiles:
        return total_tiles - 1, True
    return raw_target, False
