# colorful_birds/services/animation_scheduler.py

import heapq
import itertools
import logging
import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class StepOutcome(str, Enum):
    APPLIED = "APPLIED"
    # Поколение сменилось (был reset): шаг отброшен, состояние не тронуто
    CANCELLED = "CANCELLED"


class ScheduledStep:
    """Один отложенный шаг конвейера анимации."""
    __slots__ = ('wake_time', 'seq', 'epoch', 'name', 'callback')

    def __init__(self, wake_time: float, seq: int, epoch: int, name: str, callback: Callable[[], None]):
        self.wake_time = wake_time
        self.seq = seq
        self.epoch = epoch
        self.name = name
        self.callback = callback

    def __lt__(self, other: 'ScheduledStep') -> bool:
        return (self.wake_time, self.seq) < (other.wake_time, other.seq)

    def __repr__(self):
        return f"ScheduledStep({self.name}, wake={self.wake_time:.3f}, epoch={self.epoch})"


class AnimationScheduler:
    """
    Очередь отложенных шагов вместо "пирамиды таймаутов".

    - Шаги срабатывают строго по (wake_time, seq).
    - Шаг, запланированный изнутри выполняющегося шага, отсчитывается
      от wake_time родителя: цепочка - детерминированная временная шкала.
    - Каждый шаг запоминает поколение сессии; если к моменту срабатывания
      поколение сменилось, шаг отбрасывается (CANCELLED).

    Сам планировщик ничего не ждет: его крутит один цикл-драйвер
    (см. workers.start_animation_driver) или тест с ручными часами.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, log_event: Optional[Callable] = None):
        self.clock = clock
        self.log_event = log_event or (lambda *args, **kwargs: None)
        self.lock = threading.RLock()
        self._queue: List[ScheduledStep] = []
        self._counter = itertools.count()
        # wake_time шага, выполняемого в текущем потоке
        self._local = threading.local()
        self._epoch_source: Callable[[], int] = lambda: 0

    def set_epoch_source(self, epoch_source: Callable[[], int]):
        """Устанавливает источник текущего поколения (GameSession)."""
        self._epoch_source = epoch_source

    def current_epoch(self) -> int:
        return self._epoch_source()

    def schedule(self, delay: float, name: str, callback: Callable[[], None], epoch: Optional[int] = None) -> ScheduledStep:
        """Ставит шаг в очередь через delay секунд."""
        if delay < 0:
            raise ValueError(f"Задержка не может быть отрицательной: {delay}")

        with self.lock:
            running_wake_time = getattr(self._local, "wake_time", None)
            base = running_wake_time if running_wake_time is not None else self.clock()
            step = ScheduledStep(
                wake_time=base + delay,
                seq=next(self._counter),
                epoch=self.current_epoch() if epoch is None else epoch,
                name=name,
                callback=callback
            )
            heapq.heappush(self._queue, step)
            return step

    def cancel_all(self) -> int:
        """Снимает все ожидающие шаги. Возвращает их количество."""
        with self.lock:
            dropped = len(self._queue)
            self._queue.clear()
        if dropped:
            logger.debug(f"Снято {dropped} ожидающих шагов.")
        return dropped

    def pending(self) -> List[str]:
        """Имена ожидающих шагов в порядке срабатывания."""
        with self.lock:
            return [step.name for step in sorted(self._queue)]

    def next_wake_time(self) -> Optional[float]:
        with self.lock:
            return self._queue[0].wake_time if self._queue else None

    def _pop_due(self, now: float) -> Optional[ScheduledStep]:
        with self.lock:
            if self._queue and self._queue[0].wake_time <= now:
                return heapq.heappop(self._queue)
            return None

    def run_pending(self) -> List[Tuple[str, StepOutcome]]:
        """
        Выполняет все шаги, чье время наступило (включая те, что
        поставлены выполненными шагами и тоже уже "созрели").
        Возвращает журнал [(имя, исход), ...].
        """
        now = self.clock()
        results = []

        while True:
            step = self._pop_due(now)
            if step is None:
                break

            if step.epoch != self.current_epoch():
                self.log_event(
                    "STALE_STEP_DISCARDED",
                    f"Step '{step.name}' from epoch {step.epoch} discarded (current epoch {self.current_epoch()})."
                )
                results.append((step.name, StepOutcome.CANCELLED))
                continue

            self._local.wake_time = step.wake_time
            try:
                step.callback()
            finally:
                self._local.wake_time = None
            results.append((step.name, StepOutcome.APPLIED))

        return results
