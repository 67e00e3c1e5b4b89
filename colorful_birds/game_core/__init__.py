# colorful_birds/game_core/__init__.py

# "Публичный API" игрового ядра
from .constants import (
    DEFAULT_BOARD_SIZE, WINNING_SCORE, POINTS_PER_MATCH,
    PLAYER_COLORS, TILE_COLORS, INITIAL_PLAYERS
)

from .board_pattern import (
    generate_pattern,
    tile_color
)

from .board_layout import (
    spiral_layout
)

from .path_planner import (
    compute_path,
    clamp_target
)

from .utils import (
    roll_die,
    is_valid_roll,
    is_color_match,
    get_winner,
    rank_players,
    place_label
)
