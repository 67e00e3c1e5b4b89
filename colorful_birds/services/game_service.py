# colorful_birds/services/game_service.py

import queue
from typing import Optional, Dict, Any, List, Tuple

from colorful_birds.game_core import roll_die
from .game_session import GameSession
from .game_factory import GameFactory

Notification = Dict[str, Any]


class GameService:
    """
    Фасад для транспортного слоя (REST и SocketIO).
    Владеет единственной партией за столом и очередью уведомлений.
    """

    def __init__(self,
                 factory: GameFactory,
                 notification_queue: Optional[queue.Queue]):
        """
        Инициализируется через Внедрение Зависимостей (Dependency Injection).
        Партия создается сразу, в состоянии IDLE.
        """
        self.factory = factory
        self.notification_queue = notification_queue
        self.session: GameSession = factory.create_game()

    ### Публичный API (прокси к сессии) ###

    def start_game(self) -> Tuple[bool, List[Notification]]:
        return self.session.start()

    def reset_game(self) -> Tuple[bool, List[Notification]]:
        return self.session.reset()

    def next_player(self) -> Tuple[bool, List[Notification]]:
        return self.session.next_player()

    def roll_dice(self, value: Optional[int] = None) -> Tuple[bool, List[Notification]]:
        """Бросок. Если клиент не прислал значение - бросаем кубик на сервере."""
        if value is None:
            value = roll_die()
        return self.session.roll(value)

    def get_state(self) -> Dict[str, Any]:
        return self.session.get_snapshot()

    ### Рассылка ###

    def dispatch(self, notifications: List[Notification]) -> None:
        """Кладет уведомления в очередь (их отправит фоновый воркер)."""
        if not self.notification_queue:
            return
        for msg in notifications:
            self.notification_queue.put(msg)
