import logging

from .errors import InvalidTransition
from .geography import GeographyLevel, Scope, SelectionPath

logger = logging.getLogger(__name__)


class HierarchyNavigator:
    """Owns the selection path and the active level.

    Starts in the national view (State level, nothing selected). Every
    transition either fully applies or raises InvalidTransition leaving
    the previous state untouched.
    """

    def __init__(self):
        self._path = SelectionPath()
        self._level = GeographyLevel.STATE

    @property
    def path(self):
        return self._path

    @property
    def level(self):
        return self._level

    def current_scope(self):
        return Scope(self._level, self._path.state, self._path.county)

    def select_state(self, state_id):
        state_id = _clean(state_id, "state")
        self._path = SelectionPath(state_id)
        self._level = GeographyLevel.STATE
        logger.debug("Selected state %s", state_id)
        return self.current_scope()

    def select_county(self, county_id, level=None):
        if not self._path.state:
            raise InvalidTransition("select a state before selecting a county")
        level = GeographyLevel.COUNTY if level is None else GeographyLevel(level)
        if level == GeographyLevel.STATE:
            raise InvalidTransition("selecting a county cannot move to State level")

        county_id = _clean(county_id, "county")
        self._path = SelectionPath(self._path.state, county_id)
        self._level = level
        logger.debug("Selected county %s (%s level)", county_id, level.label)
        return self.current_scope()

    def select_level(self, level):
        level = GeographyLevel(level)
        if level != GeographyLevel.STATE and not self._path.state:
            raise InvalidTransition(f"{level.label} level needs a selected state")
        if level >= GeographyLevel.TRACT and not self._path.county:
            raise InvalidTransition(f"{level.label} level needs a selected county")
        self._level = level
        return self.current_scope()

    def reset(self):
        self._path = SelectionPath()
        self._level = GeographyLevel.STATE
        return self.current_scope()


def _clean(value, what):
    if value is None or not str(value).strip():
        raise InvalidTransition(f"empty {what} identifier")
    return str(value).strip()
