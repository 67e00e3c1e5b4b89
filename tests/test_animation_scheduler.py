"""AnimationScheduler: порядок шагов, временная шкала и защита эпохой."""

import pytest

from colorful_birds.services.animation_scheduler import AnimationScheduler, StepOutcome

from conftest import FakeClock, EventRecorder


@pytest.fixture
def clock():
    return FakeClock(start=0.0)


@pytest.fixture
def scheduler(clock):
    return AnimationScheduler(clock=clock, log_event=EventRecorder())


def test_steps_fire_in_wake_time_order(scheduler, clock):
    fired = []
    scheduler.schedule(2.0, "late", lambda: fired.append("late"))
    scheduler.schedule(1.0, "early", lambda: fired.append("early"))

    clock.advance(5.0)
    results = scheduler.run_pending()

    assert fired == ["early", "late"]
    assert results == [("early", StepOutcome.APPLIED), ("late", StepOutcome.APPLIED)]


def test_equal_wake_times_keep_scheduling_order(scheduler, clock):
    fired = []
    for name in ("a", "b", "c"):
        scheduler.schedule(1.0, name, lambda name=name: fired.append(name))

    clock.advance(1.0)
    scheduler.run_pending()

    assert fired == ["a", "b", "c"]


def test_nothing_fires_before_wake_time(scheduler, clock):
    fired = []
    scheduler.schedule(1.0, "step", lambda: fired.append(1))

    clock.advance(0.5)
    assert scheduler.run_pending() == []
    assert fired == []
    assert scheduler.pending() == ["step"]
    assert scheduler.next_wake_time() == 1.0


def test_chained_steps_are_timed_from_parent_wake_time(scheduler, clock):
    fired = []

    def first():
        fired.append(("first", clock()))
        scheduler.schedule(1.0, "second", lambda: fired.append(("second", clock())))

    scheduler.schedule(1.0, "first", first)

    # Один большой скачок прогоняет всю цепочку: second назначен на 2.0, а не на 11.0.
    clock.advance(10.0)
    scheduler.run_pending()

    assert [name for name, _ in fired] == ["first", "second"]


def test_chained_step_not_yet_due_stays_pending(scheduler, clock):
    def first():
        scheduler.schedule(5.0, "second", lambda: None)

    scheduler.schedule(1.0, "first", first)
    clock.advance(2.0)
    scheduler.run_pending()

    assert scheduler.pending() == ["second"]
    assert scheduler.next_wake_time() == 6.0


def test_step_from_old_epoch_is_cancelled(scheduler, clock):
    epoch = {'value': 0}
    scheduler.set_epoch_source(lambda: epoch['value'])
    fired = []

    scheduler.schedule(1.0, "stale", lambda: fired.append("stale"))
    epoch['value'] = 1
    scheduler.schedule(1.0, "fresh", lambda: fired.append("fresh"))

    clock.advance(1.0)
    results = scheduler.run_pending()

    assert fired == ["fresh"]
    assert results == [("stale", StepOutcome.CANCELLED), ("fresh", StepOutcome.APPLIED)]
    assert "STALE_STEP_DISCARDED" in scheduler.log_event.types()


def test_cancel_all_drops_pending_steps(scheduler, clock):
    fired = []
    scheduler.schedule(1.0, "a", lambda: fired.append("a"))
    scheduler.schedule(2.0, "b", lambda: fired.append("b"))

    assert scheduler.cancel_all() == 2
    clock.advance(5.0)

    assert scheduler.run_pending() == []
    assert fired == []
    assert scheduler.next_wake_time() is None


def test_negative_delay_is_rejected(scheduler):
    with pytest.raises(ValueError):
        scheduler.schedule(-0.1, "bad", lambda: None)


def test_failing_step_does_not_leak_parent_wake_time(scheduler, clock):
    def boom():
        raise RuntimeError("boom")

    scheduler.schedule(1.0, "boom", boom)
    clock.advance(1.0)
    with pytest.raises(RuntimeError):
        scheduler.run_pending()

    # Новые шаги снова отсчитываются от часов, а не от упавшего шага.
    clock.advance(10.0)
    step = scheduler.schedule(1.0, "after", lambda: None)
    assert step.wake_time == clock() + 1.0
