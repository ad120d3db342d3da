import pytest

from vacancy_map.errors import InvalidTransition
from vacancy_map.geography import GeographyLevel, Scope
from vacancy_map.navigator import HierarchyNavigator


@pytest.fixture
def nav():
    return HierarchyNavigator()


def test_starts_in_national_view(nav):
    assert nav.current_scope() == Scope(GeographyLevel.STATE)


def test_select_state_clears_county(nav):
    nav.select_state("06")
    nav.select_county("001")
    scope = nav.select_state("48")
    assert scope == Scope(GeographyLevel.STATE, "48", None)


def test_select_county_needs_state(nav):
    with pytest.raises(InvalidTransition):
        nav.select_county("001")
    assert nav.current_scope() == Scope(GeographyLevel.STATE)


def test_select_county_defaults_to_county_level(nav):
    nav.select_state("06")
    assert nav.select_county("001") == Scope(GeographyLevel.COUNTY, "06", "001")


def test_select_county_can_go_straight_to_tracts(nav):
    nav.select_state("06")
    assert nav.select_county("001", GeographyLevel.TRACT).level == GeographyLevel.TRACT
    with pytest.raises(InvalidTransition):
        nav.select_county("003", GeographyLevel.STATE)
    assert nav.current_scope() == Scope(GeographyLevel.TRACT, "06", "001")


def test_tract_level_needs_county(nav):
    nav.select_state("06")
    with pytest.raises(InvalidTransition):
        nav.select_level(GeographyLevel.TRACT)
    with pytest.raises(InvalidTransition):
        nav.select_level(GeographyLevel.BLOCK_GROUP)
    assert nav.current_scope() == Scope(GeographyLevel.STATE, "06")


def test_county_level_needs_state(nav):
    with pytest.raises(InvalidTransition):
        nav.select_level(GeographyLevel.COUNTY)
    assert nav.select_level(GeographyLevel.STATE) == Scope(GeographyLevel.STATE)


def test_level_changes_keep_selection(nav):
    nav.select_state("06")
    nav.select_county("001")
    assert nav.select_level(GeographyLevel.BLOCK_GROUP) == Scope(GeographyLevel.BLOCK_GROUP, "06", "001")
    assert nav.select_level(GeographyLevel.COUNTY) == Scope(GeographyLevel.COUNTY, "06", "001")


def test_empty_identifiers_are_rejected(nav):
    with pytest.raises(InvalidTransition):
        nav.select_state("  ")
    nav.select_state("06")
    with pytest.raises(InvalidTransition):
        nav.select_county("")


def test_reset(nav):
    nav.select_state("06")
    nav.select_county("001")
    assert nav.reset() == Scope(GeographyLevel.STATE)
