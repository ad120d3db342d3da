import pytest

from vacancy_map.errors import NetworkError
from vacancy_map.geography import GeographyLevel
from vacancy_map.session import DrillDownSession

from conftest import FakeSource, feature

STATE, COUNTY = GeographyLevel.STATE, GeographyLevel.COUNTY


@pytest.fixture
def source():
    return FakeSource(
        boundaries={
            (STATE, None, None): [feature("Alabama", STATE="01"), feature("Alaska", STATE="02")],
            (COUNTY, "01", None): [feature("Autauga", STATE="01", COUNTY="001")],
        },
        statistics={
            (STATE, None, None): [["Alabama", "100", "10", "01"], ["Alaska", "300", "90", "02"]],
            (COUNTY, "01", None): [["Autauga County, Alabama", "200", "30", "01", "001"]],
        },
    )


def test_refresh_joins_current_scope(source):
    session = DrillDownSession(source)
    result = session.refresh()

    assert result is session.current
    assert [r.geo_id for r in result.regions] == ["01", "02"]
    assert result.summary.avg_vacancy_rate_pct == 25.0
    assert result.summary.ranked_regions[0].name == "Alaska"
    assert len(result.boundaries) == 2


def test_drill_into_counties(source):
    session = DrillDownSession(source)
    session.select_state("01")
    session.select_level(COUNTY)

    result = session.refresh()
    assert result.scope.level == COUNTY
    assert result.regions[0].geo_id == "01001"
    assert result.regions[0].vacancy_rate_pct == 15.0


def test_stale_result_is_discarded(source):
    session = DrillDownSession(source)
    first = session.refresh()

    stale = session.fetch()
    session.select_state("01")
    session.select_level(COUNTY)

    assert session.apply(stale) is None
    assert session.current is first


def test_failed_fetch_keeps_previous_result(source):
    session = DrillDownSession(source)
    first = session.refresh()

    session.select_state("01")
    session.select_level(COUNTY)
    source.fail_with = NetworkError("connection reset")
    with pytest.raises(NetworkError):
        session.refresh()

    assert session.current is first


def test_fetch_requests_both_sources_for_scope(source):
    session = DrillDownSession(source)
    session.select_state("01")
    session.select_level(COUNTY)
    session.fetch()
    kinds = [(kind, level, scope.state) for kind, level, scope in source.calls]
    assert kinds == [("boundaries", COUNTY, "01"), ("statistics", COUNTY, "01")]


def test_reset_returns_to_national_view(source):
    session = DrillDownSession(source)
    session.select_state("01")
    session.select_level(COUNTY)
    assert session.refresh().scope.level == COUNTY

    assert session.reset().level == STATE
    result = session.refresh()
    assert result.scope.level == STATE
    assert result.scope.state is None
    assert [r.geo_id for r in result.regions] == ["01", "02"]
