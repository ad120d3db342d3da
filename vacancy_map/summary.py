from dataclasses import dataclass, field

from .config import TOP_N


@dataclass(frozen=True)
class AggregateSummary:
    avg_vacancy_rate_pct: float = 0.0
    total_vacant_units: int = 0
    ranked_regions: tuple = field(default_factory=tuple)

    def top(self, n=TOP_N):
        return self.ranked_regions[:n]

    def full_table(self):
        return self.ranked_regions


def summarize(regions):
    """Headline figures and the ranking for one set of joined regions.

    The average is weighted by housing units (all vacant over all units),
    not the mean of the per-region rates. Ranking is by rate, highest first,
    with ties kept in input order.
    """
    regions = list(regions)
    total_units = sum(r.total_units for r in regions)
    total_vacant = sum(r.vacant_units for r in regions)
    avg = round(total_vacant / total_units * 100, 1) if total_units > 0 else 0.0

    # sorted() is stable, reverse=True keeps equal rates in input order
    ranked = tuple(sorted(regions, key=lambda r: r.vacancy_rate_pct, reverse=True))
    return AggregateSummary(avg, total_vacant, ranked)
