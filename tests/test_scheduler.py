from mindspan.engine.scheduler import TimerGroup


def test_timer_group_cancel_all_stops_every_timer(scheduler):
    calls = []
    group = TimerGroup(scheduler, "t")
    group.every(100, lambda: calls.append("tick"))
    group.later(250, lambda: calls.append("once"))

    scheduler.advance(200)
    assert calls == ["tick", "tick"]

    group.cancel_all()
    scheduler.advance(1000)
    assert calls == ["tick", "tick"]
    assert scheduler.pending() == 0


def test_stale_callback_is_dropped_after_cancel(scheduler):
    calls = []
    group = TimerGroup(scheduler, "t")

    captured = []

    class Capture:
        def call_later(self, delay_ms, fn):
            captured.append(fn)
            return scheduler.call_later(delay_ms, lambda: None)

    group.scheduler = Capture()
    group.later(100, lambda: calls.append("stale"))
    group.cancel_all()

    # a callback that was already queued before the cancel still arrives
    captured[0]()
    assert calls == []
    assert group.epoch == 1
