"""Geography levels, selection scopes and the identifier codec.

Boundary records are GeoJSON features (dicts with ``properties`` and
``geometry``) as served by TIGERweb. Statistic records are raw Census API
rows: ``[NAME, total, vacant, <geo components...>]`` where the trailing
components run from the state inward, so the last one is the code of
the queried level itself.

Identifiers are built the same way on both sides: the level's components
concatenated from the state down, i.e. the full GEOID (``"06"``,
``"06001"``, ``"06001400100"``, ``"060014001001"``). Comparison is exact
string equality after trimming; no zero-padding or numeric normalisation
is attempted.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import IntEnum

from .errors import InvalidTransition, MalformedRow, MissingIdentifierField


class GeographyLevel(IntEnum):
    STATE = 0
    COUNTY = 1
    TRACT = 2
    BLOCK_GROUP = 3

    @property
    def api_name(self):
        # name used by the Census API "for" clause and the TIGERweb layer table
        return _API_NAMES[self]

    @property
    def label(self):
        return _LABELS[self]

    @property
    def depth(self):
        # number of identifier components (state, county, tract, block group)
        return int(self) + 1

    @classmethod
    def from_api_name(cls, name):
        for level, api_name in _API_NAMES.items():
            if api_name == name:
                return level
        raise ValueError(f"unknown geography level '{name}'")


_API_NAMES = {
    GeographyLevel.STATE: "state",
    GeographyLevel.COUNTY: "county",
    GeographyLevel.TRACT: "tract",
    GeographyLevel.BLOCK_GROUP: "block group",
}

_LABELS = {
    GeographyLevel.STATE: "State",
    GeographyLevel.COUNTY: "County",
    GeographyLevel.TRACT: "Census Tract",
    GeographyLevel.BLOCK_GROUP: "Block Group",
}


# ==============================================================================
# SELECTION PATH & SCOPE
# ==============================================================================

@dataclass(frozen=True)
class SelectionPath:
    state: str | None = None
    county: str | None = None

    def __post_init__(self):
        if self.county and not self.state:
            raise InvalidTransition("a county cannot be selected without a state")


@dataclass(frozen=True)
class Scope:
    """What the active query covers: the level plus its parent selection."""
    level: GeographyLevel
    state: str | None = None
    county: str | None = None

    def validate(self):
        if self.level >= GeographyLevel.TRACT and not (self.state and self.county):
            raise InvalidTransition(f"{self.level.label} level needs a state and a county")
        if self.level == GeographyLevel.COUNTY and not self.state:
            raise InvalidTransition("County level needs a state")
        return self


# ==============================================================================
# IDENTIFIER CODEC
# ==============================================================================

# Candidate property names per component, outermost first
BOUNDARY_FIELDS = (
    ("STATE", "STATEFP"),
    ("COUNTY", "COUNTYFP"),
    ("TRACT", "TRACTCE"),
    ("BLKGRP", "BLKGRPCE"),
)

# Leading columns of a statistics row; geo components follow
STAT_NAME, STAT_TOTAL, STAT_VACANT = 0, 1, 2
STAT_LEADING_COLUMNS = 3


def boundary_id(feature, level):
    if not isinstance(feature, Mapping):
        raise MissingIdentifierField(f"boundary is not a feature: {feature!r}", level=level)
    props = _properties(feature)
    parts = []
    for candidates in BOUNDARY_FIELDS[:level.depth]:
        value = next((str(props[c]).strip() for c in candidates
                      if props.get(c) is not None and str(props[c]).strip()), None)
        if value is None:
            raise MissingIdentifierField(
                f"boundary has none of {candidates} for {level.label} level", level=level)
        parts.append(value)
    return "".join(parts)


def statistic_id(row, level):
    if not isinstance(row, Sequence) or isinstance(row, (str, bytes)):
        raise MalformedRow(f"statistics row is not a list: {row!r}", level=level)
    required = STAT_LEADING_COLUMNS + level.depth
    if len(row) < required:
        raise MalformedRow(
            f"row has {len(row)} columns, {level.label} level needs {required}", level=level)

    # last element is the level's own code, parents run outward before it
    parts = [row[len(row) - 1 - i] for i in range(level.depth)]
    if any(p is None or str(p).strip() == "" for p in parts):
        raise MalformedRow(f"row has an empty geography component: {row!r}", level=level)
    return "".join(str(p).strip() for p in reversed(parts))


def extract_id(record, level):
    if isinstance(record, Mapping):
        return boundary_id(record, level)
    return statistic_id(record, level)


def ids_equal(a, b):
    if a is None or b is None:
        return False
    return a.strip() == b.strip()


def statistic_values(row):
    """(name, raw total, raw vacant) of a statistics row."""
    if len(row) < STAT_LEADING_COLUMNS:
        raise MalformedRow(f"row has {len(row)} columns, expected name, total and vacant")
    return row[STAT_NAME], row[STAT_TOTAL], row[STAT_VACANT]


def _properties(feature):
    props = feature.get("properties") if isinstance(feature, Mapping) else None
    return props if isinstance(props, Mapping) else {}


def boundary_name(feature):
    props = _properties(feature)
    for key in ("NAME", "BASENAME", "name"):
        if props.get(key):
            return str(props[key])
    return None
