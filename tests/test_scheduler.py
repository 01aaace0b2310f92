from falling_blocks.game.scheduler import SimulatedClock, poll


def test_first_poll_arms_mark():
    assert poll(None, 123.0, 800) == (False, 123.0)


def test_poll_waits_for_full_interval():
    assert poll(100.0, 899.0, 800) == (False, 100.0)
    assert poll(100.0, 900.0, 800) == (True, 900.0)


def test_poll_takes_single_step_after_long_gap():
    due, mark = poll(0.0, 10_000.0, 800)
    assert due
    # No catch-up: the next poll at the same time is not due
    assert poll(mark, 10_000.0, 800) == (False, mark)


def test_simulated_clock():
    clock = SimulatedClock(step_ms=50)
    assert clock.advance() == 50
    assert clock.advance(3) == 200
    assert clock.reset() == 0

