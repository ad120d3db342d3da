import math

from vacancy_map.config import PALETTE
from vacancy_map.rates import PALEST, ColorBucket, bucket, color_for, compute_rate


def test_compute_rate_rounds_to_one_decimal():
    assert compute_rate(100, 10) == 10.0
    assert compute_rate(3, 1) == 33.3
    assert compute_rate(400, 100) == 25.0


def test_compute_rate_zero_total():
    assert compute_rate(0, 0) == 0.0
    assert compute_rate(0, 25) == 0.0


def test_compute_rate_never_negative():
    for total in (0, 1, 7, 100, 12345):
        for vacant in (0, 1, 5, 100):
            assert compute_rate(total, vacant) >= 0


def test_bucket_lower_bounds_are_inclusive():
    assert bucket(0) == PALEST
    assert bucket(2.49) == ColorBucket.LOWEST
    assert bucket(2.5) == ColorBucket.VERY_LOW
    assert bucket(5) == ColorBucket.LOW
    assert bucket(7.5) == ColorBucket.MODERATE
    assert bucket(10) == ColorBucket.ELEVATED
    assert bucket(15) == ColorBucket.HIGH
    assert bucket(20) == ColorBucket.HIGHEST
    assert bucket(95.0) == ColorBucket.HIGHEST
    assert bucket(math.inf) == ColorBucket.HIGHEST


def test_bucket_handles_nan():
    assert bucket(float("nan")) == PALEST


def test_bucket_is_monotonic():
    rates = [i / 10 for i in range(0, 400)]
    buckets = [bucket(r) for r in rates]
    assert buckets == sorted(buckets)


def test_palette_runs_pale_to_dark():
    assert len(PALETTE) == len(ColorBucket) == 7
    assert ColorBucket.LOWEST.color == PALETTE[0]
    assert ColorBucket.HIGHEST.color == PALETTE[-1]
    assert color_for(12.0) == ColorBucket.ELEVATED.color
