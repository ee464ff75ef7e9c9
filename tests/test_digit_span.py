from mindspan.engine.digit_span import DigitSpanTest


def make_test(scheduler, rng, **kwargs):
    events = []
    t = DigitSpanTest(
        scheduler,
        rng=rng,
        on_start=lambda: events.append("start"),
        on_score=lambda s: events.append(("score", s)),
        on_stop=lambda: events.append("stop"),
        **kwargs,
    )
    return t, events


def show_all(scheduler, test):
    scheduler.advance((len(test.sequence) + 1) * test.symbol_interval_ms)
    assert test.stage == "input"


def answer(test, correct, backward=False):
    seq = list(reversed(test.sequence)) if backward else list(test.sequence)
    text = "".join(seq)
    if not correct:
        text = text[:-1]
    return test.submit(text)


def test_symbols_are_shown_one_per_interval(scheduler, rng):
    shown = []
    t, _ = make_test(scheduler, rng)
    t.on_symbol = lambda s, i: shown.append((s, i))
    t.start()

    assert t.stage == "show"
    assert len(t.sequence) == 3
    scheduler.advance(1000)
    assert shown == [(t.sequence[0], 0)]
    scheduler.advance(2000)
    assert [s for s, _ in shown] == t.sequence
    assert t.stage == "show"
    scheduler.advance(1000)
    assert t.stage == "input"
    assert scheduler.pending() == 0


def test_both_phases_correct_scores_100(scheduler, rng):
    t, events = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    answer(t, True)

    assert t.phase == "backward"
    assert len(t.sequence) == 3
    show_all(scheduler, t)
    answer(t, True, backward=True)

    assert t.stage == "done"
    assert t.score == 100
    assert events == ["start", ("score", 100), "stop"]


def test_forward_correct_backward_wrong_scores_50(scheduler, rng):
    t, events = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    answer(t, True)
    show_all(scheduler, t)
    answer(t, False, backward=True)
    assert events[-2:] == [("score", 50), "stop"]
    assert t.attempts == 2
    assert t.correct_count == 1


def test_both_wrong_scores_0(scheduler, rng):
    t, events = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    answer(t, False)
    show_all(scheduler, t)
    answer(t, False, backward=True)
    assert ("score", 0) in events


def test_backward_phase_expects_reverse_order(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    answer(t, True)
    show_all(scheduler, t)
    t.sequence = ["1", "2", "3"]
    # the forward order is wrong in the backward phase
    t.submit("123")
    assert t.records[-1].correct is False
    assert t.records[-1].expected == ("3", "2", "1")


def test_input_filter_rejects_non_digits(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    assert t.set_input("12") is False  # still showing
    show_all(scheduler, t)

    assert t.set_input("12") is True
    assert t.set_input("12a") is False
    assert t.input_text == "12"
    assert t.set_input("") is True
    assert t.input_text == ""


def test_input_filter_accepts_ascii_digits_only(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)

    fullwidth = "".join(chr(ord("\uff10") + int(d)) for d in t.sequence)
    arabic_indic = "\u0661\u0662\u0663"
    assert t.set_input(fullwidth) is False
    assert t.set_input(arabic_indic) is False
    assert t.input_text == ""

    assert t.set_input("".join(t.sequence)) is True
    assert t.submit() is True
    assert t.records[0].correct is True


def test_malformed_submission_scores_incorrect(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    assert t.submit("x!") is True
    assert t.records[0].correct is False
    assert t.phase == "backward"


def test_submit_uses_buffered_input(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    t.set_input("".join(t.sequence))
    t.submit()
    assert t.correct_count == 1


def test_submit_outside_input_stage_is_ignored(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    assert t.submit("123") is False
    t.start()
    assert t.submit("".join(t.sequence)) is False
    assert t.attempts == 0


def test_restart_cancels_pending_show(scheduler, rng):
    shown = []
    t, events = make_test(scheduler, rng)
    t.on_symbol = lambda s, i: shown.append(i)
    t.start()
    scheduler.advance(1500)
    t.start()
    scheduler.advance(4000)
    # one symbol from the first run, then a clean 0..2 from the second
    assert shown == [0, 0, 1, 2]
    assert t.stage == "input"
    assert events == ["start", "start"]


def test_cancel_returns_to_instructions(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    scheduler.advance(1000)
    t.cancel()
    assert t.stage == "instructions"
    assert scheduler.pending() == 0


def test_spans_per_phase(scheduler, rng):
    t, _ = make_test(scheduler, rng)
    t.start()
    show_all(scheduler, t)
    answer(t, True)
    show_all(scheduler, t)
    answer(t, False, backward=True)
    assert t.spans == {"forward": 3, "backward": 2}


def test_correct_answer_lengthens_next_attempt_in_same_phase(scheduler, rng):
    t, events = make_test(scheduler, rng, attempts_per_phase=2, max_length=4)
    t.start()
    show_all(scheduler, t)
    answer(t, True)
    assert t.phase == "forward"
    assert len(t.sequence) == 4

    show_all(scheduler, t)
    answer(t, True)
    # backward restarts at its own starting length
    assert t.phase == "backward"
    assert len(t.sequence) == 3

    show_all(scheduler, t)
    answer(t, False, backward=True)
    assert len(t.sequence) == 3
    show_all(scheduler, t)
    answer(t, True, backward=True)

    assert t.attempts == 4
    assert events[-2:] == [("score", 75), "stop"]
    assert t.spans == {"forward": 4, "backward": 3}


def test_reports_result_to_connected_listeners(scheduler, rng):
    results = []
    t, _ = make_test(scheduler, rng)
    t.connect_result(results.append)
    t.start()
    show_all(scheduler, t)
    answer(t, True)
    show_all(scheduler, t)
    answer(t, True, backward=True)
    assert results == [100]
