import pytest

from printer_queue.clock import Clock, format_time_of_day, parse_time_of_day, tm_to_ms
from printer_queue.errors import InvalidConfiguration


def test_advance_scales_real_time_by_speed():
    clock = Clock(speed_multiplier=300)
    clock.advance(0.5)
    assert clock.simulated_ms == pytest.approx(150_000)
    assert clock.elapsed_ms == pytest.approx(150_000)


def test_tick_fires_once_per_simulated_second():
    clock = Clock(speed_multiplier=1)
    clock.advance(0.5)
    assert not clock.second_elapsed_since_last_tick()
    clock.advance(0.5)
    assert clock.second_elapsed_since_last_tick()
    assert clock.last_tick_ms == 1000
    assert not clock.second_elapsed_since_last_tick()


def test_drain_ticks_catches_up_one_second_at_a_time():
    clock = Clock(speed_multiplier=1)
    clock.advance(3.5)
    assert list(clock.drain_ticks()) == [1000, 2000, 3000]
    assert list(clock.drain_ticks()) == []
    clock.advance(0.5)
    assert list(clock.drain_ticks()) == [4000]


def test_ticks_are_anchored_at_start_time():
    start = tm_to_ms(9, 0, 0)
    clock = Clock(speed_multiplier=2, start_ms=start)
    clock.advance(1.0)
    assert list(clock.drain_ticks()) == [start + 1000, start + 2000]


def test_sync_uses_real_time_anchor():
    clock = Clock(speed_multiplier=2, real_time_anchor=10.0)
    delta = clock.sync(10.5)
    assert delta == pytest.approx(0.5)
    assert clock.real_time_anchor == 10.5
    assert clock.elapsed_ms == pytest.approx(1000)


def test_time_goes_forward_only():
    clock = Clock(speed_multiplier=1)
    with pytest.raises(ValueError):
        clock.advance(-1.0)


@pytest.mark.parametrize("speed", [0, -5, float("nan"), float("inf"), float("-inf")])
def test_speed_must_be_positive_and_finite(speed):
    with pytest.raises(InvalidConfiguration):
        Clock(speed_multiplier=speed)


def test_time_of_day_formatting_wraps_at_midnight():
    assert format_time_of_day(0) == "00:00:00"
    assert format_time_of_day(tm_to_ms(23, 59, 59)) == "23:59:59"
    assert format_time_of_day(tm_to_ms(23, 59, 59) + 1000) == "00:00:00"
    assert format_time_of_day(tm_to_ms(7, 5, 3) + 999) == "07:05:03"

    clock = Clock(speed_multiplier=1, start_ms=tm_to_ms(23, 59, 59))
    clock.advance(2)
    assert clock.formatted_time_of_day() == "00:00:01"


def test_parse_time_of_day():
    assert parse_time_of_day("09:30:15") == tm_to_ms(9, 30, 15)
    for bad in ["25:00:00", "12:60:00", "noon", "12:00"]:
        with pytest.raises(InvalidConfiguration):
            parse_time_of_day(bad)
