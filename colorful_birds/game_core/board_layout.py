# colorful_birds/game_core/board_layout.py

from typing import List


def spiral_layout(size: int) -> List[List[int]]:
    """
    Раскладывает линейные индексы клеток по сетке size x size спиралью
    по часовой стрелке от левого верхнего угла к центру.

    Нужна только для отрисовки: игровая логика работает с линейными
    индексами и эту сетку не читает.
    """
    if size < 1:
        raise ValueError(f"Размер доски должен быть >= 1, получено {size}")

    grid = [[0] * size for _ in range(size)]
    counter = 0
    start_row, end_row = 0, size - 1
    start_col, end_col = 0, size - 1

    while start_row <= end_row and start_col <= end_col:
        # Верхняя строка
        for col in range(start_col, end_col + 1):
            grid[start_row][col] = counter
            counter += 1
        start_row += 1

        # Правый столбец
        for row in range(start_row, end_row + 1):
            grid[row][end_col] = counter
            counter += 1
        end_col -= 1

        # Нижняя строка
        if start_row <= end_row:
            for col in range(end_col, start_col - 1, -1):
                grid[end_row][col] = counter
                counter += 1
            end_row -= 1

        # Левый столбец
        if start_col <= end_col:
            for row in range(end_row, start_row - 1, -1):
                grid[row][start_col] = counter
                counter += 1
            start_col += 1

    return grid
