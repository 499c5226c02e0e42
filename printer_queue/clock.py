"""
Simulated clock.

Simulated time is kept in milliseconds. It starts at a time-of-day offset
(`start_ms`) and advances by `real_elapsed * speed_multiplier` for every real
second fed in. The driver consumes it one simulated second at a time through
`drain_ticks()`.
"""
from __future__ import annotations

import math
import time
from typing import Iterator, Optional

from .errors import InvalidConfiguration

MS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MS_PER_MINUTE = MS_PER_SECOND * SECONDS_PER_MINUTE
MS_PER_HOUR = MS_PER_MINUTE * MINUTES_PER_HOUR
MS_PER_DAY = MS_PER_HOUR * HOURS_PER_DAY


def format_time_of_day(t_ms: float) -> str:
    today_ms = int(t_ms) % MS_PER_DAY
    hours, rest = divmod(today_ms, MS_PER_HOUR)
    minutes, rest = divmod(rest, MS_PER_MINUTE)
    seconds = rest // MS_PER_SECOND
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_time_of_day(value: str) -> int:
    """Parse `HH:MM:SS` into milliseconds since midnight."""
    try:
        hours, minutes, seconds = (int(part) for part in value.split(":"))
    except (AttributeError, ValueError):
        raise InvalidConfiguration(f"start_time must be HH:MM:SS, got {value!r}") from None
    if not (0 <= hours < HOURS_PER_DAY and 0 <= minutes < MINUTES_PER_HOUR and 0 <= seconds < SECONDS_PER_MINUTE):
        raise InvalidConfiguration(f"start_time out of range: {value!r}")
    return tm_to_ms(hours, minutes, seconds)


class Clock:
    def __init__(self, speed_multiplier: float, start_ms: int = 0, real_time_anchor: float = 0.0) -> None:
        if not math.isfinite(speed_multiplier) or speed_multiplier <= 0:
            raise InvalidConfiguration(f"speed multiplier must be a finite number > 0, got {speed_multiplier}")
        self.speed_multiplier = float(speed_multiplier)
        self.start_ms = int(start_ms)
        self.simulated_ms: float = float(start_ms)
        # Timestamp of the most recent simulated second handed out
        self.last_tick_ms: int = int(start_ms)
        # Last sampled real time (seconds), used by sync()
        self.real_time_anchor = float(real_time_anchor)

    @property
    def elapsed_ms(self) -> float:
        return self.simulated_ms - self.start_ms

    def advance(self, real_elapsed: float) -> None:
        if real_elapsed < 0:
            raise ValueError(f"real time went backwards by {-real_elapsed}s")
        self.simulated_ms += real_elapsed * MS_PER_SECOND * self.speed_multiplier

    def sync(self, real_now: float) -> float:
        """Advance by the real time elapsed since the previous sample. Returns the delta."""
        delta = real_now - self.real_time_anchor
        self.advance(delta)
        self.real_time_anchor = real_now
        return delta

    def second_elapsed_since_last_tick(self) -> bool:
        if self.simulated_ms - self.last_tick_ms >= MS_PER_SECOND:
            self.last_tick_ms += MS_PER_SECOND
            return True
        return False

    def drain_ticks(self) -> Iterator[int]:
        # One tick per elapsed simulated second, even after a large jump
        while self.second_elapsed_since_last_tick():
            yield self.last_tick_ms

    def formatted_time_of_day(self, t_ms: Optional[float] = None) -> str:
        return format_time_of_day(self.simulated_ms if t_ms is None else t_ms)


def current_time_of_day_ms() -> int:
    lt = time.localtime()
    return tm_to_ms(lt.tm_hour, lt.tm_min, lt.tm_sec)


def tm_to_ms(hours: int, minutes: int, seconds: int) -> int:
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND
