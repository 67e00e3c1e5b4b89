# colorful_birds/config.py

from colorful_birds.game_core import constants as c


class Config:
    """Базовый класс конфигурации (безопасные значения)."""

    LOG_FILE = 'application.log'
    EVENTS_LOG_FILE = 'game_events.log'
    STATS_LOG_FILE = 'match_stats.log'

    # --- Правила ---
    BOARD_SIZE = c.DEFAULT_BOARD_SIZE
    WINNING_SCORE = c.WINNING_SCORE
    POINTS_PER_MATCH = c.POINTS_PER_MATCH
    INITIAL_PLAYERS = c.INITIAL_PLAYERS

    # --- Тайминги анимации (секунды) ---
    MOVE_STEP_DELAY = 0.3       # один тик = одна клетка
    SETTLE_DELAY = 0.2          # пауза после последнего тика
    SCORE_FLASH_DURATION = 1.0  # показ начисленных очков
    TURN_ADVANCE_DELAY = 1.0    # пауза перед авто-передачей хода
    AUTO_ADVANCE = True
    SCHEDULER_TICK = 0.05       # период цикла-драйвера

    # --- Транспорт ---
    TABLE_ROOM = 'table'
    ROLL_RATE_LIMIT = '30 per minute'
    RATELIMIT_STORAGE_URI = 'memory://'
    SOCKETIO_ASYNC_MODE = None  # None = автовыбор (eventlet в проде)
    START_BACKGROUND_WORKERS = True
