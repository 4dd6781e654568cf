"""
Grouped distributions over canonical request records.

Every distribution is sorted by count, descending. Ties are broken explicitly:
numeric keys (status codes) ascend by value, identifier keys keep the order in
which they first appeared in the record sequence. Caps are applied after
sorting.
"""

from dataclasses import dataclass
from typing import Any

import pandas as pd

from konnect_mcp.analytics.records import UNKNOWN_ROUTE, CanonicalRecord, to_frame
from konnect_mcp.utils import percentage

UNKNOWN_METHOD = "UNKNOWN"


@dataclass(frozen=True)
class Dimension:
    """One grouping axis: output key name, canonical column, key kind."""

    name: str
    column: str
    numeric: bool = False
    placeholder: Any = None


STATUS_CODE = Dimension("statusCode", "status_code", numeric=True)
CONSUMER = Dimension("consumerId", "consumer_id")
SERVICE = Dimension("serviceId", "service_id")
ROUTE = Dimension("routeId", "route_id", placeholder=UNKNOWN_ROUTE)
METHOD = Dimension("httpMethod", "http_method", placeholder=UNKNOWN_METHOD)


@dataclass(frozen=True)
class StatusCodeCount:
    status_code: int
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "count": self.count}


@dataclass(frozen=True)
class GroupedAggregate:
    dimension: Dimension
    key: Any
    count: int
    percentage: float
    nested: tuple[StatusCodeCount, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            self.dimension.name: self.key,
            "count": self.count,
            "percentage": self.percentage,
        }
        if self.nested is not None:
            out["statusCodeBreakdown"] = [n.to_dict() for n in self.nested]
        return out


def _plain(value: Any) -> Any:
    """Unwrap numpy scalars so results stay JSON-serializable."""
    return value.item() if hasattr(value, "item") else value


def _group_keys(frame: "pd.DataFrame", dimension: Dimension) -> "pd.Series":
    keys = frame[dimension.column]
    if dimension.placeholder is not None:
        keys = keys.where(keys.notna(), dimension.placeholder)
    if dimension.numeric:
        keys = keys.astype("int64")
    return keys.reset_index(drop=True)


def _ranked_counts(keys: "pd.Series", numeric: bool) -> list[tuple[Any, int]]:
    """Count keys and rank them: count desc, then key asc or first appearance."""
    if keys.empty:
        return []

    tagged = pd.DataFrame({"key": keys.to_numpy(), "position": range(len(keys))})
    summary = (
        tagged.groupby("key")
        .agg(count=("position", "size"), first_seen=("position", "min"))
        .reset_index()
    )
    tiebreak = "key" if numeric else "first_seen"
    summary = summary.sort_values(["count", tiebreak], ascending=[False, True])

    return [(_plain(key), int(count)) for key, count in zip(summary["key"], summary["count"])]


def group_by(
    records: list[CanonicalRecord],
    dimension: Dimension,
    nested: bool = False,
    limit: int | None = None,
) -> list[GroupedAggregate]:
    """Distribution of records over one dimension.

    Args:
        records: Canonical records, in backend order.
        dimension: Grouping axis (STATUS_CODE, CONSUMER, SERVICE, ROUTE, METHOD).
        nested: Attach a per-group status code breakdown.
        limit: Keep only the first N groups after sorting.

    Returns:
        Sorted aggregates; empty when there are no records. Percentages are
        relative to the full record count, not to the returned groups.
    """
    total = len(records)
    if total == 0:
        return []

    frame = to_frame(records)
    keys = _group_keys(frame, dimension)
    ranked = _ranked_counts(keys, numeric=dimension.numeric)
    if limit is not None:
        ranked = ranked[:limit]

    codes = _group_keys(frame, STATUS_CODE) if nested else None

    aggregates = []
    for key, count in ranked:
        breakdown = None
        if codes is not None:
            breakdown = tuple(
                StatusCodeCount(status_code=code, count=n)
                for code, n in _ranked_counts(codes[keys == key], numeric=True)
            )
        aggregates.append(
            GroupedAggregate(
                dimension=dimension,
                key=key,
                count=count,
                percentage=percentage(count, total),
                nested=breakdown,
            )
        )
    return aggregates


def distribution(
    records: list[CanonicalRecord],
    dimension: Dimension,
    nested: bool = False,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """group_by() rendered as report dicts."""
    return [agg.to_dict() for agg in group_by(records, dimension, nested=nested, limit=limit)]
