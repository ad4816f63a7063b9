"""Models package - entities and the data file schema."""

from .entities import (
    Commit,
    DateRange,
    FetchPlan,
    MergeResult,
    RangeTotals,
    DashboardTotals,
    AggregatedView,
)
from .schema import load_data, save_data, data_exists, RecordSet

__all__ = [
    "Commit",
    "DateRange",
    "FetchPlan",
    "MergeResult",
    "RangeTotals",
    "DashboardTotals",
    "AggregatedView",
    "load_data",
    "save_data",
    "data_exists",
    "RecordSet",
]
