import logging
from dataclasses import dataclass

from .errors import IdentifierError
from .geography import GeographyLevel, boundary_id, boundary_name, statistic_id, statistic_values
from .rates import PALEST, ColorBucket, bucket, compute_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionStat:
    name: str
    geo_id: str
    level: GeographyLevel
    total_units: int
    vacant_units: int
    vacancy_rate_pct: float
    color_bucket: ColorBucket

    @property
    def color(self):
        return self.color_bucket.color


def parse_count(value):
    """Census counts arrive as strings; anything unparseable or negative is 0."""
    try:
        n = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0
    return n if n > 0 else 0


def index_statistics(level, statistics):
    """Map identifier -> (name, total, vacant); the first row for an id wins."""
    index = {}
    for row in statistics:
        try:
            geo_id = statistic_id(row, level)
            name, total, vacant = statistic_values(row)
        except IdentifierError as e:
            logger.warning("Skipping statistics row: %s", e)
            continue
        if geo_id in index:
            logger.debug("Duplicate statistics row for %s ignored", geo_id)
            continue
        index[geo_id] = (name, parse_count(total), parse_count(vacant))
    return index


def join(level, boundaries, statistics):
    """Join boundary features with statistic rows, one RegionStat per boundary.

    Output order follows ``boundaries``. Boundaries without a matching row
    (or without a usable identifier) get zero counts and the palest bucket;
    rows without a matching boundary are dropped.
    """
    level = GeographyLevel(level)
    index = index_statistics(level, statistics)

    regions = []
    unmatched = 0
    for feature in boundaries:
        try:
            geo_id = boundary_id(feature, level)
        except IdentifierError as e:
            logger.warning("Boundary without identifier drawn unmatched: %s", e)
            geo_id = ""

        match = index.get(geo_id.strip()) if geo_id else None
        if match is None:
            unmatched += 1
            regions.append(RegionStat(
                name=boundary_name(feature) or geo_id,
                geo_id=geo_id,
                level=level,
                total_units=0,
                vacant_units=0,
                vacancy_rate_pct=0.0,
                color_bucket=PALEST,
            ))
            continue

        name, total, vacant = match
        rate = compute_rate(total, vacant)
        regions.append(RegionStat(
            name=name or boundary_name(feature) or geo_id,
            geo_id=geo_id,
            level=level,
            total_units=total,
            vacant_units=vacant,
            vacancy_rate_pct=rate,
            color_bucket=bucket(rate),
        ))

    if unmatched:
        logger.info("%d of %d %s boundaries had no statistics", unmatched, len(regions), level.api_name)
    return regions
