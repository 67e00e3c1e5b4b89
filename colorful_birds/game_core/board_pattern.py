# colorful_birds/game_core/board_pattern.py

from typing import Sequence, Tuple

from .constants import TILE_COLORS


def generate_pattern(size: int) -> Tuple[str, ...]:
    """
    Строит раскраску доски size x size.
    Цвет клетки i = TILE_COLORS[(i // 3 + i) % 5].
    Возвращает кортеж, чтобы раскраску нельзя было изменить посреди партии.
    """
    if size < 1:
        raise ValueError(f"Размер доски должен быть >= 1, получено {size}")

    total_tiles = size * size
    return tuple(
        TILE_COLORS[(i // 3 + i) % len(TILE_COLORS)]
        for i in range(total_tiles)
    )


def tile_color(pattern: Sequence[str], index: int) -> str:
    """Цвет клетки по линейному индексу."""
    if not 0 <= index < len(pattern):
        raise IndexError(f"Клетка {index} вне доски (всего {len(pattern)})")
    return pattern[index]
