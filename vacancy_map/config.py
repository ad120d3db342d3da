import os

# ==============================================================================
# CENSUS ACS (STATISTICS)
# ==============================================================================

ACS_YEAR = int(os.environ.get('ACS_YEAR', '2022'))

ACS_VARIABLES = {
    "total_housing": "B25002_001E",  # Total housing units
    "vacant": "B25002_003E",         # Vacant units
}


def acs_base_url(year):
    return f"https://api.census.gov/data/{year}/acs/acs5"


def census_key():
    return os.environ.get('CENSUS_API_KEY', '').strip()


# ==============================================================================
# TIGERWEB (BOUNDARIES)
# ==============================================================================

TIGERWEB_URL = "https://tigerweb.geo.census.gov/arcgis/rest/services/TIGERweb"

# ArcGIS layer per geography level (keyed by GeographyLevel.value)
TIGERWEB_LAYERS = {
    "state": os.environ.get('TIGERWEB_STATE_LAYER', "State_County/MapServer/0"),
    "county": os.environ.get('TIGERWEB_COUNTY_LAYER', "State_County/MapServer/1"),
    "tract": os.environ.get('TIGERWEB_TRACT_LAYER', "Tracts_Blocks/MapServer/0"),
    "block group": os.environ.get('TIGERWEB_BLOCK_GROUP_LAYER', "Tracts_Blocks/MapServer/1"),
}

# ==============================================================================
# HTTP
# ==============================================================================

HTTP_TIMEOUT = float(os.environ.get('HTTP_TIMEOUT', '60'))
USER_AGENT = "vacancy-map/1.0"

# ==============================================================================
# COLOURS & VIEWS
# ==============================================================================

# Inclusive lower bound of each bucket, in percent
BUCKET_BOUNDS = (0.0, 2.5, 5.0, 7.5, 10.0, 15.0, 20.0)

# Pale yellow to dark red
PALETTE = ('#FFEDA0', '#FED976', '#FEB24C', '#FD8D3C', '#FC4E2A', '#E31A1C', '#800026')

TOP_N = 5

DEFAULT_MAP_CENTER = [37.8, -96]
DEFAULT_ZOOM = 4
