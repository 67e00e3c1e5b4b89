# colorful_birds/game_core/constants.py

# === Настройка доски ===
DEFAULT_BOARD_SIZE = 5  # 5x5 клеток
WINNING_SCORE = 30
POINTS_PER_MATCH = 10

# === Цвета ===

# Цвета игроков (определяют, на каких клетках начисляются очки)
COLOR_RED = 'red'
COLOR_BLUE = 'blue'
COLOR_GREEN = 'green'
COLOR_YELLOW = 'yellow'
# Фиолетовый есть только на доске: ни один игрок на нем не набирает очки
COLOR_PURPLE = 'purple'

PLAYER_COLORS = (COLOR_RED, COLOR_BLUE, COLOR_GREEN, COLOR_YELLOW)
TILE_COLORS = (COLOR_RED, COLOR_BLUE, COLOR_GREEN, COLOR_YELLOW, COLOR_PURPLE)

# === Кубик ===
DIE_MIN = 1
DIE_MAX = 6

# === Стартовый состав ===
# Порядок списка = порядок передачи хода.
INITIAL_PLAYERS = (
    {'id': 1, 'name': 'Red Bird', 'color': COLOR_RED},
    {'id': 2, 'name': 'Blue Bird', 'color': COLOR_BLUE},
    {'id': 3, 'name': 'Green Bird', 'color': COLOR_GREEN},
    {'id': 4, 'name': 'Yellow Bird', 'color': COLOR_YELLOW},
)
