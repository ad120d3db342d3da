from collections.abc import Mapping

import geopandas as gpd
import pandas as pd

from .config import TOP_N

REGION_COLUMNS = ['name', 'geo_id', 'level', 'total_units', 'vacant_units',
                  'vacancy_rate_pct', 'color_bucket', 'color']


def regions_frame(regions):
    rows = [
        {
            'name': r.name,
            'geo_id': r.geo_id,
            'level': r.level.api_name,
            'total_units': r.total_units,
            'vacant_units': r.vacant_units,
            'vacancy_rate_pct': r.vacancy_rate_pct,
            'color_bucket': int(r.color_bucket),
            'color': r.color,
        }
        for r in regions
    ]
    return pd.DataFrame(rows, columns=REGION_COLUMNS)


def regions_geoframe(boundaries, regions):
    """Boundary geometry with the joined statistics attached, row for row."""
    df = regions_frame(regions)
    if not boundaries:
        return gpd.GeoDataFrame(df, geometry=gpd.GeoSeries([]), crs="EPSG:4326")
    if len(boundaries) != len(regions):
        raise ValueError(f"{len(boundaries)} boundaries but {len(regions)} regions")

    # keep only geometry from the boundary properties
    features = [{'type': 'Feature', 'properties': {}, 'geometry': f.get('geometry') if isinstance(f, Mapping) else None}
                for f in boundaries]
    shapes = gpd.GeoDataFrame.from_features(features, crs="EPSG:4326")
    return gpd.GeoDataFrame(df, geometry=shapes.geometry.values, crs="EPSG:4326")


def top_table(summary, level, n=TOP_N):
    return pd.DataFrame({
        level.label: [r.name for r in summary.top(n)],
        'Vacancy Rate': [f"{r.vacancy_rate_pct:.1f}%" for r in summary.top(n)],
        'Vacant Units': [f"{r.vacant_units:,}" for r in summary.top(n)],
    })


def full_table(summary, level):
    ranked = summary.full_table()
    return pd.DataFrame({
        level.label: [r.name for r in ranked],
        'Total Units': [f"{r.total_units:,}" for r in ranked],
        'Vacant Units': [f"{r.vacant_units:,}" for r in ranked],
        'Vacancy Rate': [f"{r.vacancy_rate_pct:.1f}%" for r in ranked],
    })
