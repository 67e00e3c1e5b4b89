# colorful_birds/services/game_player_manager.py

import threading
from typing import Optional, Dict, Any, List, Sequence, Callable

from .game_state import Player


class GamePlayerManager:
    """
    Управляет составом ИГРОКОВ: порядок хода, текущий игрок,
    передача хода по кругу и восстановление стартового состава.
    """
    def __init__(
        self,
        game_id: str,
        initial_players: Sequence[Dict[str, Any]],
        log_event: Callable
    ):
        if not initial_players:
            raise ValueError(f"GamePlayerManager ({game_id}): пустой состав игроков.")

        ids = [p['id'] for p in initial_players]
        if len(set(ids)) != len(ids):
            raise ValueError(f"GamePlayerManager ({game_id}): повторяющиеся id игроков {ids}.")

        self.game_id = game_id
        self.lock = threading.RLock()
        self.log_event = log_event

        # Храним копию, чтобы reset всегда возвращал исходный состав
        self.initial_players = [dict(p) for p in initial_players]
        self.players: List[Player] = []
        self.current_index: int = 0
        self.reset_roster()

    def set_lock(self, lock: threading.RLock):
        """Устанавливает внешний RLock из GameSession."""
        self.lock = lock

    # --- Хелперы ---

    def __len__(self):
        return len(self.players)

    def __iter__(self):
        return iter(self.players)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]

    @property
    def current_player_id(self) -> int:
        return self.current_player.id

    def get_player(self, player_id: Optional[int]) -> Optional[Player]:
        if player_id is None:
            return None
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    # --- Жизненный цикл ---

    def reset_roster(self):
        """Обнуляет очки и позиции, ход переходит к первому игроку."""
        with self.lock:
            self.players = [Player.from_dict(p) for p in self.initial_players]
            self.current_index = 0

    def advance(self) -> Player:
        """Передает ход следующему игроку по кругу."""
        with self.lock:
            previous = self.current_player
            self.current_index = (self.current_index + 1) % len(self.players)
            self.log_event(
                "TURN_ROTATION",
                f"Turn passed from {previous.name} to {self.current_player.name}.",
                game_id=self.game_id
            )
            return self.current_player
