"""
Общие фикстуры pytest.

Игровые фикстуры собирают GameSession через GameFactory с ручными часами,
поэтому конвейер анимации двигают сами тесты, а не фоновый цикл-драйвер.
"""

import queue

import pytest

from colorful_birds.game_core import constants as c
from colorful_birds.services.animation_scheduler import AnimationScheduler
from colorful_birds.services.game_factory import GameFactory


# Двоично-точные задержки: время пробуждения без накопления ошибки float.
MOVE_STEP_DELAY = 0.25
SETTLE_DELAY = 0.5
SCORE_FLASH_DURATION = 1.0
TURN_ADVANCE_DELAY = 2.0


class FakeClock:
    """Монотонные часы, которые двигают вручную."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class EventRecorder:
    """Подмена log_event: сохраняет все события для проверок."""

    def __init__(self):
        self.events = []

    def __call__(self, event_type, message, game_id=None, extra_data=None):
        self.events.append((event_type, message))

    def types(self):
        return [event_type for event_type, _ in self.events]


def make_config(**overrides):
    config = {
        'BOARD_SIZE': c.DEFAULT_BOARD_SIZE,
        'WINNING_SCORE': c.WINNING_SCORE,
        'POINTS_PER_MATCH': c.POINTS_PER_MATCH,
        'INITIAL_PLAYERS': c.INITIAL_PLAYERS,
        'MOVE_STEP_DELAY': MOVE_STEP_DELAY,
        'SETTLE_DELAY': SETTLE_DELAY,
        'SCORE_FLASH_DURATION': SCORE_FLASH_DURATION,
        'TURN_ADVANCE_DELAY': TURN_ADVANCE_DELAY,
        'AUTO_ADVANCE': True,
        'TABLE_ROOM': 'table',
    }
    config.update(overrides)
    return config


class GameHarness:
    """Сессия и соседние объекты, которые нужны тесту."""

    def __init__(self, **config_overrides):
        self.clock = FakeClock()
        self.events = EventRecorder()
        self.stats = []
        self.queue = queue.Queue()
        self.scheduler = AnimationScheduler(clock=self.clock, log_event=self.events)
        self.factory = GameFactory(
            config=make_config(**config_overrides),
            log_event=self.events,
            notification_queue=self.queue,
            scheduler=self.scheduler,
            log_stats=self.stats.append
        )
        self.session = self.factory.create_game()

    @property
    def state(self):
        return self.session.state

    @property
    def players(self):
        return self.session.players

    def advance(self, seconds: float):
        """Сдвигает часы и запускает все созревшие шаги."""
        self.clock.advance(seconds)
        return self.scheduler.run_pending()

    def settle(self):
        """Прогоняет весь отложенный конвейер до конца."""
        return self.advance(1000.0)

    def drain_queue(self):
        messages = []
        while not self.queue.empty():
            messages.append(self.queue.get_nowait())
        return messages

    def queued_events(self):
        return [msg['event'] for msg in self.drain_queue()]

    def play_turn(self, value: int):
        """Бросок и полный прогон конвейера (включая авто-передачу хода)."""
        accepted, _ = self.session.roll(value)
        assert accepted, f"roll({value}) was not accepted in phase {self.state.phase}"
        self.settle()


@pytest.fixture
def game():
    harness = GameHarness()
    return harness


@pytest.fixture
def started_game():
    harness = GameHarness()
    accepted, _ = harness.session.start()
    assert accepted
    return harness


@pytest.fixture
def manual_game():
    """Авто-передача выключена: ход передается только через next_player()."""
    harness = GameHarness(AUTO_ADVANCE=False)
    harness.session.start()
    return harness
