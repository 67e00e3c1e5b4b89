# colorful_birds/services/game_state.py

from enum import Enum
from typing import List, Optional, Tuple, Dict, Any

from colorful_birds.game_core import generate_pattern, spiral_layout


class SessionPhase(str, Enum):
    """Фазы партии (явный тег вместо комбинаций nullable-полей)."""
    # Партия не начата
    IDLE = "IDLE"
    # Текущий игрок может бросать кубик
    AWAITING_ROLL = "AWAITING_ROLL"
    # Фишка движется / идет подсчет очков, новые броски не принимаются
    ANIMATING = "ANIMATING"
    # Есть победитель, до reset ничего не меняется
    FINISHED = "FINISHED"


class Player:
    """Игрок: фишка, цвет и очки."""
    def __init__(self, player_id: int, name: str, color: str, score: int = 0, position: int = 0):
        self.id = player_id
        self.name = name
        self.color = color
        self.score = score
        self.position = position

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        return cls(
            player_id=data['id'],
            name=data['name'],
            color=data['color'],
            score=data.get('score', 0),
            position=data.get('position', 0)
        )

    def __repr__(self):
        return f"Player(id={self.id}, color={self.color}, score={self.score}, position={self.position})"


class AnimationState:
    """
    Полезная нагрузка фазы ANIMATING.
    Существует только пока фишка движется, затем сбрасывается в None.
    """
    def __init__(self, moving_player_id: int, last_position: int, target: int, path: List[int]):
        self.moving_player_id = moving_player_id
        self.last_position = last_position
        self.target = target
        self.path = path
        # Индекс в path, показанный последним тиком (-1 = тиков еще не было)
        self.path_index = -1
        # nextPlayer пришел во время анимации
        self.advance_requested = False

    @property
    def current_tile(self) -> int:
        if self.path_index < 0:
            return self.last_position
        return self.path[self.path_index]


class GameState:
    """
    Хранилище (DTO) всего состояния одной партии. Не содержит логики:
    все изменения идут через GameSession / GameTurnManager.
    """
    def __init__(self, board_size: int):
        self.board_size: int = board_size
        self.total_tiles: int = board_size * board_size
        self.board_pattern: Tuple[str, ...] = generate_pattern(board_size)
        self.board_layout: List[List[int]] = spiral_layout(board_size)

        self.phase: SessionPhase = SessionPhase.IDLE
        self.started: bool = False
        self.current_player_has_rolled: bool = False
        self.current_roll: Optional[int] = None
        self.winner_id: Optional[int] = None
        self.turn_number: int = 0
        # Поколение: растет на каждом reset, устаревшие отложенные шаги отбрасываются
        self.epoch: int = 0

        self.animation: Optional[AnimationState] = None
        self.score_flash_player_id: Optional[int] = None

    @property
    def animation_in_progress(self) -> bool:
        return self.phase == SessionPhase.ANIMATING

    def clear_transient(self):
        """Сбрасывает эфемерные поля анимации."""
        self.animation = None
        self.score_flash_player_id = None

    def reset(self):
        """Полный сброс к начальному состоянию (поколение увеличивается)."""
        self.board_pattern = generate_pattern(self.board_size)
        self.phase = SessionPhase.IDLE
        self.started = False
        self.current_player_has_rolled = False
        self.current_roll = None
        self.winner_id = None
        self.turn_number = 0
        self.epoch += 1
        self.clear_transient()
