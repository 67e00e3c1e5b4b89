# colorful_birds/services/game_session.py

import threading
from typing import Dict, Any, List, Tuple, Callable

from .game_state import GameState, SessionPhase
from .game_player_manager import GamePlayerManager
from .game_turn_manager import GameTurnManager
from .animation_scheduler import AnimationScheduler
from colorful_birds.game_core import rank_players, place_label
from colorful_birds.api.schemas import GameSnapshotSchema

Notification = Dict[str, Any]

snapshot_schema = GameSnapshotSchema()


class GameSession:
    """
    Представляет ОДНУ партию за столом.
    Является "Фасадом", который координирует работу
    GameState, GamePlayerManager, GameTurnManager и AnimationScheduler.
    Все изменения состояния идут только через его методы.
    """

    def __init__(
        self,
        game_id: str,
        board_size: int,
        turn_manager: GameTurnManager,
        player_manager: GamePlayerManager,
        scheduler: AnimationScheduler,
        log_event: Callable
    ):
        self.id = game_id
        self.log_event = log_event
        self.lock = threading.RLock()

        self.state = GameState(board_size)

        # Присваиваем готовые сервисы
        self.players = player_manager
        self.turn_manager = turn_manager
        self.scheduler = scheduler

        # Настраиваем связи
        self.players.set_lock(self.lock)
        self.turn_manager.set_lock(self.lock)
        self.turn_manager.set_game_session_callback(self)
        self.scheduler.set_epoch_source(lambda: self.state.epoch)

        self.log_event("SESSION_INIT", f"Экземпляр сессии {self.id} (Фасад) создан.", game_id=self.id)

    # --- Жизненный цикл ---

    def start(self) -> Tuple[bool, List[Notification]]:
        with self.lock:
            if self.state.phase != SessionPhase.IDLE:
                self.log_event(
                    "STATE_VIOLATION_BLOCKED",
                    f"start ignored in phase {self.state.phase.value}.",
                    game_id=self.id
                )
                return False, []

            self.state.started = True
            self.state.winner_id = None
            self.state.phase = SessionPhase.AWAITING_ROLL
            self.log_event("STATE_CHANGE", f"State -> {SessionPhase.AWAITING_ROLL.value} (Game started)", game_id=self.id)

            room = self.turn_manager.config['TABLE_ROOM']
            notifications = [
                {'event': 'game_started', 'payload': {'message': 'Game started! Roll the dice to begin.'}, 'room': room},
                self.turn_manager.turn_changed_notification(self.players.current_player),
                self.state_notification()
            ]
            return True, notifications

    def reset(self) -> Tuple[bool, List[Notification]]:
        """
        Сброс из любого состояния. Поколение увеличивается, поэтому все
        отложенные шаги старой партии, даже уже извлеченные из очереди,
        будут отброшены.
        """
        with self.lock:
            dropped = self.scheduler.cancel_all()
            self.state.reset()
            self.players.reset_roster()
            self.log_event(
                "STATE_CHANGE",
                f"State -> {SessionPhase.IDLE.value} (Reset, epoch {self.state.epoch}, dropped {dropped} pending steps)",
                game_id=self.id
            )

            room = self.turn_manager.config['TABLE_ROOM']
            return True, [
                {'event': 'game_reset', 'payload': {'message': 'Game reset. Ready to start a new game!'}, 'room': room},
                self.state_notification()
            ]

    # --- Логика хода (делегируем) ---

    def roll(self, value: int) -> Tuple[bool, List[Notification]]:
        with self.lock:
            accepted, notifications = self.turn_manager.roll(self.state, self.players, value)
            if accepted:
                notifications.append(self.state_notification())
            return accepted, notifications

    def next_player(self) -> Tuple[bool, List[Notification]]:
        with self.lock:
            accepted, notifications = self.turn_manager.next_player(self.state, self.players)
            if accepted:
                notifications.append(self.state_notification())
            return accepted, notifications

    # --- Модель чтения ---

    @property
    def winner(self):
        return self.players.get_player(self.state.winner_id)

    def get_snapshot(self) -> Dict[str, Any]:
        """Полный снимок для слоя отображения (только чтение)."""
        with self.lock:
            state = self.state
            animation = state.animation
            standings = [
                {'place': place, 'label': place_label(place), 'player': player}
                for place, player in rank_players(list(self.players))
            ]
            return snapshot_schema.dump({
                'game_id': self.id,
                'phase': state.phase,
                'started': state.started,
                'players': list(self.players),
                'current_player_id': self.players.current_player_id,
                'current_player_has_rolled': state.current_player_has_rolled,
                'current_roll': state.current_roll,
                'winner': self.winner,
                'animation_in_progress': state.animation_in_progress,
                'moving_player_id': animation.moving_player_id if animation else None,
                'last_position': animation.last_position if animation else None,
                'current_animation_path': animation.path if animation else None,
                'animation_tile': animation.current_tile if animation else None,
                'score_flash_player_id': state.score_flash_player_id,
                'standings': standings,
                'turn_number': state.turn_number,
                'epoch': state.epoch,
                'board': {
                    'size': state.board_size,
                    'total_tiles': state.total_tiles,
                    'pattern': list(state.board_pattern),
                    'layout': state.board_layout
                }
            })

    def state_notification(self) -> Notification:
        return {
            'event': 'game_state',
            'payload': self.get_snapshot(),
            'room': self.turn_manager.config['TABLE_ROOM']
        }
