# colorful_birds/services/game_turn_manager.py

import queue
import threading
from functools import partial
from typing import TYPE_CHECKING, Dict, Any, Optional, Callable, List, Tuple

from colorful_birds.game_core import (
    clamp_target,
    compute_path,
    tile_color,
    is_valid_roll,
    is_color_match,
    get_winner,
    rank_players,
)

from .game_state import SessionPhase, AnimationState

if TYPE_CHECKING:
    from .game_state import GameState, Player
    from .game_player_manager import GamePlayerManager
    from .game_session import GameSession
    from .animation_scheduler import AnimationScheduler

Notification = Dict[str, Any]


class GameTurnManager:
    """
    Управляет логикой одного хода: бросок, покадровое движение фишки,
    подсчет очков, проверка победы и передача хода.

    Все отложенные шаги идут через AnimationScheduler. Каждый шаг
    помнит поколение (epoch) сессии и повторно сверяет его под замком
    сессии: после reset устаревший шаг ничего не меняет.
    """
    def __init__(
        self,
        game_id: str,

        # --- Зависимости, внедренные фабрикой ---
        config: Dict[str, Any],
        scheduler: 'AnimationScheduler',
        notification_queue: Optional[queue.Queue],
        log_event: Callable,
        log_stats: Callable
    ):
        self.game_id = game_id
        self.lock = threading.RLock()

        self.scheduler = scheduler
        self.notification_queue = notification_queue
        self.log_event = log_event
        self.log_stats = log_stats
        self.game_session_callback: Optional['GameSession'] = None

        # --- Извлекаем нужные ключи из внедренного конфига ---
        try:
            self.config = {
                'WINNING_SCORE': config['WINNING_SCORE'],
                'POINTS_PER_MATCH': config['POINTS_PER_MATCH'],
                'MOVE_STEP_DELAY': config['MOVE_STEP_DELAY'],
                'SETTLE_DELAY': config['SETTLE_DELAY'],
                'SCORE_FLASH_DURATION': config['SCORE_FLASH_DURATION'],
                'TURN_ADVANCE_DELAY': config['TURN_ADVANCE_DELAY'],
                'AUTO_ADVANCE': config['AUTO_ADVANCE'],
                'TABLE_ROOM': config['TABLE_ROOM']
            }
        except KeyError as e:
            raise KeyError(f"GameTurnManager ({self.game_id}): отсутствует ключ конфига {e} при внедрении.")

    def set_lock(self, lock: threading.RLock):
        """Устанавливает внешний RLock из GameSession."""
        self.lock = lock

    def set_game_session_callback(self, session: 'GameSession'):
        self.game_session_callback = session

    # --- Уведомления ---

    def _notification(self, event: str, payload: Dict[str, Any]) -> Notification:
        return {'event': event, 'payload': payload, 'room': self.config['TABLE_ROOM']}

    @staticmethod
    def _player_payload(player: 'Player') -> Dict[str, Any]:
        return {'player_id': player.id, 'name': player.name, 'color': player.color}

    def _publish(self, notifications: List[Notification]):
        """Уведомления из отложенных шагов уходят в общую очередь (их читает воркер)."""
        if not self.notification_queue:
            return
        for msg in notifications:
            self.notification_queue.put(msg)

    def _block(self, action: str, reason: str) -> Tuple[bool, List[Notification]]:
        self.log_event(
            "STATE_VIOLATION_BLOCKED",
            f"'{action}' ignored: {reason}",
            game_id=self.game_id
        )
        return False, []

    # --- Планирование шагов ---

    def _schedule(self, game_state: 'GameState', delay: float, name: str, handler: Callable):
        """
        Ставит шаг конвейера. handler(game_state, player_manager) возвращает
        список уведомлений или None (шаг ничего не изменил).
        """
        epoch = game_state.epoch
        self.scheduler.schedule(
            delay,
            name,
            partial(self._run_step, epoch, name, handler),
            epoch=epoch
        )

    def _run_step(self, epoch: int, name: str, handler: Callable):
        session = self.game_session_callback
        if session is None:
            self.log_event("CRITICAL_ERROR", f"Step '{name}' fired without a session.", game_id=self.game_id)
            return

        with self.lock:
            game_state = session.state
            # Повторная проверка под замком: reset мог случиться между
            # извлечением шага из очереди и этим моментом.
            if game_state.epoch != epoch:
                self.log_event(
                    "STALE_STEP_DISCARDED",
                    f"Step '{name}' from epoch {epoch} discarded under lock (current epoch {game_state.epoch}).",
                    game_id=self.game_id
                )
                return

            notifications = handler(game_state, session.players)
            if notifications is None:
                return
            notifications.append(session.state_notification())
            self._publish(notifications)

    # --- Бросок ---

    def roll(self, game_state: 'GameState', player_manager: 'GamePlayerManager', value: int) -> Tuple[bool, List[Notification]]:
        """
        Обрабатывает бросок кубика текущим игроком.

        1. Проверки (игра идет, нет победителя, нет анимации, игрок еще не бросал).
        2. Целевая клетка с упором в конец доски, путь движения.
        3. Переход в ANIMATING и запуск первого тика движения.
        """
        with self.lock:
            # --- 1. Проверки-предохранители ---
            if game_state.phase != SessionPhase.AWAITING_ROLL:
                return self._block("roll", f"phase is {game_state.phase.value}")

            if game_state.current_player_has_rolled:
                return self._block("roll", "current player has already rolled this turn")

            if not is_valid_roll(value):
                self.log_event("INVALID_ROLL_VALUE", f"Roll value {value!r} ignored.", game_id=self.game_id)
                return False, []

            # --- 2. Расчет движения ---
            player = player_manager.current_player
            target, reached_end = clamp_target(player.position, value, game_state.total_tiles)
            path = compute_path(player.position, target)

            # --- 3. Commit ---
            game_state.current_roll = value
            game_state.current_player_has_rolled = True
            game_state.animation = AnimationState(
                moving_player_id=player.id,
                last_position=player.position,
                target=target,
                path=path
            )
            game_state.phase = SessionPhase.ANIMATING

            self.log_event(
                "DICE_ROLL",
                f"{player.name} rolled {value}: {player.position} -> {target}.",
                game_id=self.game_id,
                extra_data={'path': path}
            )

            notifications = [
                self._notification('dice_rolled', {**self._player_payload(player), 'value': value})
            ]
            if reached_end:
                notifications.append(self._notification('board_end_reached', {
                    **self._player_payload(player),
                    'message': f"{player.name} reached the end of the board!"
                }))

            self._schedule(game_state, self.config['MOVE_STEP_DELAY'], "move_tick:0", partial(self._on_move_tick, 0))
            return True, notifications

    # --- Шаги конвейера анимации ---

    def _on_move_tick(self, index: int, game_state: 'GameState', player_manager: 'GamePlayerManager') -> List[Notification]:
        """Один тик = одна клетка пути."""
        animation = game_state.animation
        animation.path_index = index

        if index + 1 < len(animation.path):
            self._schedule(
                game_state,
                self.config['MOVE_STEP_DELAY'],
                f"move_tick:{index + 1}",
                partial(self._on_move_tick, index + 1)
            )
        else:
            self._schedule(game_state, self.config['SETTLE_DELAY'], "settle", self._on_settle)
        return []

    def _on_settle(self, game_state: 'GameState', player_manager: 'GamePlayerManager') -> List[Notification]:
        """Фиксирует позицию, начисляет очки и проверяет победу."""
        animation = game_state.animation
        player = player_manager.get_player(animation.moving_player_id)
        player.position = animation.target

        color = tile_color(game_state.board_pattern, player.position)
        notifications = [self._notification('token_landed', {
            **self._player_payload(player),
            'position': player.position,
            'tile_color': color
        })]

        scored = is_color_match(color, player.color)
        if scored:
            points = self.config['POINTS_PER_MATCH']
            player.score += points
            game_state.score_flash_player_id = player.id
            self.log_event(
                "POINTS_AWARDED",
                f"{player.name} landed on {color} tile {player.position}: +{points} (total {player.score}).",
                game_id=self.game_id
            )
            notifications.append(self._notification('points_awarded', {
                **self._player_payload(player),
                'points': points,
                'score': player.score,
                'message': f"{player.name} gained {points} points! Total: {player.score}"
            }))

        flash_delay = self.config['SCORE_FLASH_DURATION'] if scored else 0

        victory_notifications, game_ended = self._check_and_handle_victory(game_state, player_manager)
        notifications.extend(victory_notifications)

        if game_ended:
            # Движение закончено, остается только вспышка очков
            game_state.animation = None
            if scored:
                self._schedule(game_state, flash_delay, "score_flash_end", self._on_score_flash_end)
        else:
            self._schedule(game_state, flash_delay, "animation_end", self._on_animation_end)
        return notifications

    def _on_score_flash_end(self, game_state: 'GameState', player_manager: 'GamePlayerManager') -> List[Notification]:
        game_state.score_flash_player_id = None
        return []

    def _on_animation_end(self, game_state: 'GameState', player_manager: 'GamePlayerManager') -> List[Notification]:
        """Конец анимации: снова AWAITING_ROLL, затем передача хода."""
        advance_requested = game_state.animation.advance_requested
        game_state.clear_transient()
        game_state.phase = SessionPhase.AWAITING_ROLL

        if advance_requested:
            return self._advance_turn(game_state, player_manager)

        if self.config['AUTO_ADVANCE']:
            self._schedule(
                game_state,
                self.config['TURN_ADVANCE_DELAY'],
                "auto_advance",
                partial(self._on_auto_advance, game_state.turn_number)
            )
        return []

    def _on_auto_advance(self, turn_number: int, game_state: 'GameState', player_manager: 'GamePlayerManager') -> Optional[List[Notification]]:
        # Ход могли передать вручную во время паузы
        if (game_state.turn_number != turn_number
                or game_state.phase != SessionPhase.AWAITING_ROLL
                or not game_state.current_player_has_rolled):
            self.log_event(
                "AUTO_ADVANCE_SKIPPED",
                f"Auto-advance for turn {turn_number} skipped (turn {game_state.turn_number}, phase {game_state.phase.value}).",
                game_id=self.game_id
            )
            return None
        return self._advance_turn(game_state, player_manager)

    # --- Передача хода ---

    def next_player(self, game_state: 'GameState', player_manager: 'GamePlayerManager') -> Tuple[bool, List[Notification]]:
        """
        Ручная передача хода. Во время анимации запрос запоминается
        и выполняется сразу по ее окончании.
        """
        with self.lock:
            if game_state.phase in (SessionPhase.IDLE, SessionPhase.FINISHED):
                return self._block("next_player", f"phase is {game_state.phase.value}")

            if not game_state.current_player_has_rolled:
                return self._block("next_player", "current player has not rolled yet")

            if game_state.phase == SessionPhase.ANIMATING:
                game_state.animation.advance_requested = True
                self.log_event("ADVANCE_QUEUED", "Turn advance requested during animation.", game_id=self.game_id)
                return True, [self._notification('advance_queued', self._player_payload(player_manager.current_player))]

            return True, self._advance_turn(game_state, player_manager)

    def _advance_turn(self, game_state: 'GameState', player_manager: 'GamePlayerManager') -> List[Notification]:
        player = player_manager.advance()
        game_state.current_player_has_rolled = False
        game_state.current_roll = None
        game_state.turn_number += 1
        game_state.phase = SessionPhase.AWAITING_ROLL
        return [self.turn_changed_notification(player)]

    def turn_changed_notification(self, player: 'Player') -> Notification:
        return self._notification('turn_changed', {
            **self._player_payload(player),
            'message': f"{player.name}'s turn!"
        })

    # --- Победа ---

    def _check_and_handle_victory(self, game_state: 'GameState', player_manager: 'GamePlayerManager') -> Tuple[List[Notification], bool]:
        """Первый, кто набрал WINNING_SCORE, побеждает сразу: ходы строго по очереди, ничьих нет."""
        winner = get_winner(player_manager, self.config['WINNING_SCORE'])
        if winner is None:
            return [], False

        game_state.winner_id = winner.id
        game_state.phase = SessionPhase.FINISHED

        self.log_event(
            "GAME_WON",
            f"{winner.name} wins with {winner.score} points.",
            game_id=self.game_id
        )
        self.log_stats({
            'game_id': self.game_id,
            'epoch': game_state.epoch,
            'winner': winner.name,
            'winner_color': winner.color,
            'turns': game_state.turn_number + 1,
            'standings': [
                {'place': place, 'name': p.name, 'score': p.score}
                for place, p in rank_players(list(player_manager))
            ]
        })

        return [self._notification('game_won', {
            **self._player_payload(winner),
            'score': winner.score,
            'message': f"{winner.name} wins the game!"
        })], True
