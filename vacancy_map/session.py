import logging
from dataclasses import dataclass, field

from .join import join
from .navigator import HierarchyNavigator
from .summary import AggregateSummary, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    scope: object
    boundaries: list = field(default_factory=list)
    statistics: list = field(default_factory=list)


@dataclass(frozen=True)
class QueryResult:
    scope: object
    boundaries: list
    regions: list
    summary: AggregateSummary


class DrillDownSession:
    """Navigator + data source + the one live result set.

    Fetch results are stamped with the scope they were requested for and
    only joined if that scope is still current. A failed fetch leaves the
    previous result in place.
    """

    def __init__(self, source, navigator=None):
        self.source = source
        self.navigator = navigator or HierarchyNavigator()
        self._current = None

    @property
    def current(self):
        return self._current

    def scope(self):
        return self.navigator.current_scope()

    def select_state(self, state_id):
        return self.navigator.select_state(state_id)

    def select_county(self, county_id, level=None):
        return self.navigator.select_county(county_id, level)

    def select_level(self, level):
        return self.navigator.select_level(level)

    def reset(self):
        return self.navigator.reset()

    def fetch(self, scope=None):
        scope = scope or self.scope()
        boundaries = self.source.fetch_boundaries(scope.level, scope)
        statistics = self.source.fetch_statistics(scope.level, scope)
        return FetchResult(scope, boundaries, statistics)

    def apply(self, result):
        if result.scope != self.scope():
            logger.info("Discarding stale result for %s (current %s)", result.scope, self.scope())
            return None

        regions = join(result.scope.level, result.boundaries, result.statistics)
        self._current = QueryResult(result.scope, list(result.boundaries), regions, summarize(regions))
        return self._current

    def refresh(self):
        try:
            result = self.fetch()
        except Exception:
            logger.exception("Fetch for %s failed; keeping previous result", self.scope())
            raise
        return self.apply(result)
