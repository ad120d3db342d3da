from .errors import (
    DataSourceError,
    DecodeError,
    IdentifierError,
    InvalidTransition,
    MalformedRow,
    MissingIdentifierField,
    NetworkError,
    VacancyMapError,
)
from .geography import GeographyLevel, Scope, SelectionPath, extract_id, ids_equal
from .join import RegionStat, join
from .navigator import HierarchyNavigator
from .rates import ColorBucket, bucket, compute_rate
from .session import DrillDownSession
from .sources import CensusDataSource, DataSource
from .summary import AggregateSummary, summarize

__version__ = "0.1.0"
