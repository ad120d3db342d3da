import pytest

from vacancy_map.sources import DataSource


def square(x, y, size=1.0):
    return {
        "type": "Polygon",
        "coordinates": [[[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]],
    }


def feature(name="Region", geometry=None, **props):
    return {
        "type": "Feature",
        "properties": {"NAME": name, **props},
        "geometry": geometry or square(0, 0),
    }


class FakeSource(DataSource):
    """In-memory data source keyed by (level, state, county)."""

    def __init__(self, boundaries=None, statistics=None):
        self.boundaries = boundaries or {}
        self.statistics = statistics or {}
        self.calls = []
        self.fail_with = None

    def _key(self, level, scope):
        return (level, scope.state, scope.county)

    def fetch_boundaries(self, level, scope):
        self.calls.append(("boundaries", level, scope))
        if self.fail_with is not None:
            raise self.fail_with
        return self.boundaries.get(self._key(level, scope), [])

    def fetch_statistics(self, level, scope):
        self.calls.append(("statistics", level, scope))
        if self.fail_with is not None:
            raise self.fail_with
        return self.statistics.get(self._key(level, scope), [])

    def fetch_state_list(self):
        return [{"id": "01", "name": "Alabama"}, {"id": "02", "name": "Alaska"}]

    def fetch_county_list(self, state_id):
        return [{"id": "001", "name": "Autauga County"}]


@pytest.fixture
def fake_source():
    return FakeSource()
