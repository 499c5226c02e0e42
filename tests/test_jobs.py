import dataclasses

import numpy as np
import pytest

from printer_queue.errors import InvalidPages
from printer_queue.jobs import Job, JobFactory, SizeTier, random_page_count


def test_ids_are_sequential_per_factory():
    factory = JobFactory()
    jobs = [factory.create_job(5) for _ in range(3)]
    assert [j.id for j in jobs] == [0, 1, 2]
    assert factory.jobs_created == 3

    # A second simulation gets its own sequence
    assert JobFactory().create_job(1).id == 0


@pytest.mark.parametrize("pages", [0, -3, 2.5, "7", True])
def test_rejects_invalid_page_counts(pages):
    factory = JobFactory()
    with pytest.raises(InvalidPages):
        factory.create_job(pages)
    # Failed creation does not consume an id
    assert factory.create_job(1).id == 0


def test_invalid_pages_is_a_value_error():
    with pytest.raises(ValueError):
        JobFactory().create_job(0)


def test_accepts_numpy_integers():
    job = JobFactory().create_job(np.int64(12))
    assert job.pages == 12
    assert type(job.pages) is int


@pytest.mark.parametrize(
    "pages,tier",
    [
        (1, SizeTier.SMALL),
        (10, SizeTier.SMALL),
        (11, SizeTier.MEDIUM),
        (25, SizeTier.MEDIUM),
        (26, SizeTier.LARGE),
        (50, SizeTier.LARGE),
        (51, SizeTier.VERY_LARGE),
        (99, SizeTier.VERY_LARGE),
    ],
)
def test_size_tier_boundaries(pages, tier):
    assert Job(id=0, pages=pages).size_tier is tier


def test_job_is_immutable_and_renders():
    job = Job(id=3, pages=12)
    assert str(job) == "Job 3 (12 Pages)"
    with pytest.raises(dataclasses.FrozenInstanceError):
        job.pages = 4


def test_page_count_distribution():
    rng = np.random.default_rng(1234)
    n = 100_000
    pages = np.array([random_page_count(rng) for _ in range(n)])

    assert pages.min() == 1
    assert pages.max() == 99
    assert np.mean(pages <= 10) == pytest.approx(0.40, abs=0.01)
    assert np.mean((pages >= 11) & (pages <= 25)) == pytest.approx(0.30, abs=0.01)
    assert np.mean((pages >= 26) & (pages <= 50)) == pytest.approx(0.20, abs=0.01)
    assert np.mean(pages >= 51) == pytest.approx(0.10, abs=0.01)
