import math
from bisect import bisect_right
from enum import IntEnum

from .config import BUCKET_BOUNDS, PALETTE


class ColorBucket(IntEnum):
    LOWEST = 0
    VERY_LOW = 1
    LOW = 2
    MODERATE = 3
    ELEVATED = 4
    HIGH = 5
    HIGHEST = 6

    @property
    def color(self):
        return PALETTE[self]

    @property
    def lower_bound(self):
        return BUCKET_BOUNDS[self]


PALEST = ColorBucket.LOWEST


def compute_rate(total, vacant):
    """Vacant share of all housing units in percent, one decimal.

    Zero (or missing) totals give 0.0 whatever the vacant count is.
    """
    if not total or total <= 0:
        return 0.0
    vacant = max(vacant or 0, 0)
    return round(vacant / total * 100, 1)


def bucket(rate_pct):
    if rate_pct is None or math.isnan(rate_pct) or rate_pct <= BUCKET_BOUNDS[0]:
        return PALEST
    return ColorBucket(bisect_right(BUCKET_BOUNDS, rate_pct) - 1)


def color_for(rate_pct):
    return bucket(rate_pct).color
