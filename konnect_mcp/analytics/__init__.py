"""
API request analytics: time windows, filters, record normalization and
aggregation.
"""

from .aggregation import CONSUMER, METHOD, ROUTE, SERVICE, STATUS_CODE, Dimension, GroupedAggregate, group_by
from .filters import FilterArgs, FilterField, FilterOperator, FilterPredicate, build_filters
from .records import CanonicalRecord, normalize, normalize_all
from .stats import ScalarStatistics, compute
from .time_window import RelativeTimeWindow, TimeWindowDescriptor, resolve

__all__ = [
    # Time windows
    "RelativeTimeWindow",
    "TimeWindowDescriptor",
    "resolve",
    # Filters
    "FilterArgs",
    "FilterField",
    "FilterOperator",
    "FilterPredicate",
    "build_filters",
    # Records
    "CanonicalRecord",
    "normalize",
    "normalize_all",
    # Aggregation
    "Dimension",
    "GroupedAggregate",
    "group_by",
    "STATUS_CODE",
    "CONSUMER",
    "SERVICE",
    "ROUTE",
    "METHOD",
    # Statistics
    "ScalarStatistics",
    "compute",
]
