import time

from hpcgbench.timer import mytimer


def test_timer_is_non_negative():
    assert mytimer() >= 0.0


def test_timer_is_monotonic():
    readings = [mytimer() for _ in range(100)]
    assert readings == sorted(readings)


def test_timer_advances_with_sleep():
    start = mytimer()
    time.sleep(0.02)
    end = mytimer()
    assert end - start >= 0.015