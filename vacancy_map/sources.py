"""Data sources for boundaries and statistics.

``DataSource`` is the contract the engine depends on; ``CensusDataSource``
implements it against the ACS 5-year API (statistics, state and county
lists) and TIGERweb ArcGIS REST services (boundaries).
"""

import logging
from abc import ABC, abstractmethod

import requests

from . import config
from .errors import DecodeError, NetworkError
from .geography import GeographyLevel, Scope

logger = logging.getLogger(__name__)


class DataSource(ABC):

    @abstractmethod
    def fetch_boundaries(self, level, scope):
        """GeoJSON features for ``level`` under ``scope``."""

    @abstractmethod
    def fetch_statistics(self, level, scope):
        """Raw statistics rows for ``level`` under ``scope``."""

    @abstractmethod
    def fetch_state_list(self):
        """[{'id': ..., 'name': ...}] for every state."""

    @abstractmethod
    def fetch_county_list(self, state_id):
        """[{'id': ..., 'name': ...}] for the counties of one state."""


def http_session():
    s = requests.Session()
    s.headers.update({"User-Agent": config.USER_AGENT})
    return s


def redact(s, key):
    return s.replace(key, '***CENSUS_API_KEY***') if key else s


def _scope_for(level, scope):
    level = GeographyLevel(level)
    if scope is None:
        scope = Scope(level)
    # the level argument wins over whatever level the scope carries
    return Scope(level, scope.state, scope.county).validate()


class CensusDataSource(DataSource):

    def __init__(self, session=None, year=None, api_key=None, timeout=None):
        self.session = session or http_session()
        self.year = year or config.ACS_YEAR
        self.api_key = config.census_key() if api_key is None else api_key
        self.timeout = timeout or config.HTTP_TIMEOUT

    # --------------------------------------------------------------------------
    # Transport
    # --------------------------------------------------------------------------

    def _get_json(self, url, params):
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.error("Request to %s failed: %s", url, redact(str(e), self.api_key))
            raise NetworkError(redact(str(e), self.api_key), url=url) from e

        # Census API answers an empty selection with 204 and no body
        if r.status_code == 204 or not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"response from {url} is not JSON: {e}", url=url) from e

    def _acs(self, params):
        params = dict(params)
        if self.api_key:
            params['key'] = self.api_key
        url = config.acs_base_url(self.year)
        logger.info("ACS %s for=%s in=%s", self.year, params.get('for'), params.get('in', '-'))
        data = self._get_json(url, params)
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
            raise DecodeError(f"unexpected ACS payload from {url}", url=url)
        # first row is the header
        return data[1:]

    # --------------------------------------------------------------------------
    # Statistics
    # --------------------------------------------------------------------------

    def fetch_statistics(self, level, scope):
        scope = _scope_for(level, scope)
        params = {
            'get': ','.join(['NAME', config.ACS_VARIABLES['total_housing'], config.ACS_VARIABLES['vacant']]),
            'for': f"{scope.level.api_name}:*",
        }
        within = acs_within(scope)
        if within:
            params['in'] = within
        return self._acs(params)

    def fetch_state_list(self):
        rows = self._acs({'get': 'NAME', 'for': 'state:*'})
        states = [{'id': row[-1], 'name': row[0]} for row in rows if len(row) >= 2]
        return sorted(states, key=lambda s: s['name'])

    def fetch_county_list(self, state_id):
        rows = self._acs({'get': 'NAME', 'for': 'county:*', 'in': f"state:{state_id}"})
        # "Autauga County, Alabama" -> "Autauga County"
        counties = [{'id': row[-1], 'name': row[0].split(',')[0]} for row in rows if len(row) >= 3]
        return sorted(counties, key=lambda c: c['name'])

    # --------------------------------------------------------------------------
    # Boundaries
    # --------------------------------------------------------------------------

    def fetch_boundaries(self, level, scope):
        scope = _scope_for(level, scope)
        url = f"{config.TIGERWEB_URL}/{config.TIGERWEB_LAYERS[scope.level.api_name]}/query"
        params = {
            'where': tigerweb_where(scope),
            'outFields': '*',
            'outSR': 4326,
            'returnGeometry': 'true',
            'f': 'geojson',
        }
        logger.info("TIGERweb %s where %s", scope.level.api_name, params['where'])
        data = self._get_json(url, params)
        if data is None:
            return []
        if not isinstance(data, dict):
            raise DecodeError(f"unexpected TIGERweb payload from {url}", url=url)
        if 'error' in data:
            raise DecodeError(f"TIGERweb error: {data['error']}", url=url)
        features = data.get('features')
        if not isinstance(features, list):
            raise DecodeError(f"TIGERweb payload from {url} has no feature list", url=url)
        return features


def acs_within(scope):
    if scope.level == GeographyLevel.STATE:
        return None
    if scope.level == GeographyLevel.COUNTY:
        return f"state:{scope.state}"
    if scope.level == GeographyLevel.BLOCK_GROUP:
        # block groups are only addressable within a tract
        return f"state:{scope.state} county:{scope.county} tract:*"
    return f"state:{scope.state} county:{scope.county}"


def tigerweb_where(scope):
    if scope.level == GeographyLevel.STATE:
        return "1=1"
    clause = f"STATE='{scope.state}'"
    if scope.level >= GeographyLevel.TRACT:
        clause += f" AND COUNTY='{scope.county}'"
    return clause
