# colorful_birds/services/game_factory.py

import uuid
import queue
from typing import Dict, Any, Callable, Optional

from .game_session import GameSession
from .game_player_manager import GamePlayerManager
from .game_turn_manager import GameTurnManager
from .animation_scheduler import AnimationScheduler
from .logging_service import log_match_stats


class GameFactory:
    """Собирает GameSession со всеми зависимостями (DI-контейнер)."""

    def __init__(
        self,
        config: Dict[str, Any],
        log_event: Callable,
        notification_queue: Optional[queue.Queue],
        scheduler: AnimationScheduler,
        log_stats: Callable = log_match_stats
    ):
        self.config = config
        self.log_event = log_event
        self.notification_queue = notification_queue
        self.scheduler = scheduler
        self.log_stats = log_stats

    def create_game(self) -> GameSession:
        """
        Создает новую партию (в состоянии IDLE).
        """
        game_id = str(uuid.uuid4())

        game_turn_manager = GameTurnManager(
            game_id=game_id,
            config=self.config,
            scheduler=self.scheduler,
            notification_queue=self.notification_queue,
            log_event=self.log_event,
            log_stats=self.log_stats
        )

        game_player_manager = GamePlayerManager(
            game_id=game_id,
            initial_players=self.config['INITIAL_PLAYERS'],
            log_event=self.log_event
        )

        session = GameSession(
            game_id=game_id,
            board_size=self.config['BOARD_SIZE'],
            turn_manager=game_turn_manager,
            player_manager=game_player_manager,
            scheduler=self.scheduler,
            log_event=self.log_event
        )

        self.log_event("GAME_CREATED", f"Партия {game_id} создана ({len(game_player_manager)} игроков).", game_id=game_id)
        return session
