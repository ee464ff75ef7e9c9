from mindspan.gaze.handle import GazeHandle
from mindspan.gaze.sim_gaze import SimGazeStream

from conftest import FakeGazeStream


def test_handle_swallows_init_failure():
    stream = FakeGazeStream(fail=True)
    handle = GazeHandle(stream)
    assert handle.acquire() is False
    assert not handle.available
    assert handle.last_error is not None
    assert handle.subscribe(lambda x, y: None) is False
    handle.release()
    assert stream.ended == 0


def test_handle_single_subscriber_and_release():
    stream = FakeGazeStream()
    seen = []
    with GazeHandle(stream) as handle:
        assert handle.subscribe(lambda x, y: seen.append((x, y)))
        assert not handle.subscribe(lambda x, y: None)
        stream.emit(1, 2)
    assert seen == [(1, 2)]
    assert stream.listener is None
    assert stream.ended == 1

    handle.release()
    assert stream.ended == 1


def test_sim_stream_emits_samples_inside_viewport(scheduler):
    samples = []
    stream = SimGazeStream(scheduler, lambda: (800, 600), rate_hz=50, seed=42)
    stream.set_gaze_listener(lambda x, y: samples.append((x, y)))
    assert stream.status()["ready"] is False

    stream.begin()
    assert stream.status()["ready"] is True
    scheduler.advance(1000)

    assert len(samples) == 50
    assert all(0 <= x <= 800 and 0 <= y <= 600 for x, y in samples)

    stream.end()
    scheduler.advance(1000)
    assert len(samples) == 50


def test_sim_stream_mostly_on_target(scheduler):
    hits = []
    stream = SimGazeStream(scheduler, lambda: (1000, 1000), rate_hz=100, on_target=0.9, seed=1)
    stream.set_gaze_listener(lambda x, y: hits.append(250 <= x <= 750 and 250 <= y <= 750))
    stream.begin()
    scheduler.advance(5000)
    assert sum(hits) / len(hits) > 0.4


def test_describe_reports_failure_then_stream_status():
    stream = FakeGazeStream(fail=True)
    handle = GazeHandle(stream)
    assert handle.describe() == "Gaze device idle"

    handle.acquire()
    assert handle.describe() == "Gaze device unavailable: no camera"

    stream.fail = False
    assert handle.acquire() is True
    assert handle.last_error is None
    assert handle.describe() == "fake"

    handle.release()
    assert handle.describe() == "Gaze device idle"


def test_describe_uses_sim_stream_message(scheduler):
    stream = SimGazeStream(scheduler, lambda: (800, 600), seed=1)
    with GazeHandle(stream) as handle:
        assert handle.describe() == "Simulated gaze"
