"""
Print jobs and the four-tier random job-size model.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import InvalidPages


class SizeTier(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    VERY_LARGE = "very_large"


def size_tier_for(pages: int) -> SizeTier:
    if pages <= 10:
        return SizeTier.SMALL
    if pages <= 25:
        return SizeTier.MEDIUM
    if pages <= 50:
        return SizeTier.LARGE
    return SizeTier.VERY_LARGE


@dataclass(frozen=True)
class Job:
    id: int
    pages: int

    @property
    def size_tier(self) -> SizeTier:
        return size_tier_for(self.pages)

    def __str__(self) -> str:
        return f"Job {self.id} ({self.pages} Pages)"


class JobFactory:
    """Hands out jobs with sequential ids, starting at `first_id`."""

    def __init__(self, first_id: int = 0) -> None:
        self._next_id = first_id

    @property
    def jobs_created(self) -> int:
        return self._next_id

    def create_job(self, pages: int) -> Job:
        # bool is an int subclass; reject it along with floats/strings
        if isinstance(pages, bool) or not isinstance(pages, (int, np.integer)) or pages < 1:
            raise InvalidPages(f"job needs a positive integer page count, got {pages!r}")
        job = Job(id=self._next_id, pages=int(pages))
        self._next_id += 1
        return job


def random_page_count(rng: np.random.Generator) -> int:
    """Draw a job size. Small jobs are the most likely.

    40% -> 1-10 pages, 30% -> 11-25, 20% -> 26-50, 10% -> 51-99.
    """
    r = int(rng.integers(0, 10))
    if r <= 3:
        return int(rng.integers(1, 11))
    if r <= 6:
        return int(rng.integers(11, 26))
    if r <= 8:
        return int(rng.integers(26, 51))
    return int(rng.integers(51, 100))
