"""
Filter predicates for API request analytics queries.

Predicates are ANDed by the backend; their order only matters for the audit
trail echoed back to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

SUCCESS_BUCKETS = ["2XX"]
FAILURE_BUCKETS = ["4XX", "5XX"]


class FilterField(str, Enum):
    STATUS_CODE = "status_code"
    HTTP_METHOD = "http_method"
    CONSUMER = "consumer"
    GATEWAY_SERVICE = "gateway_service"
    ROUTE = "route"
    STATUS_CODE_GROUPED = "status_code_grouped"


class FilterOperator(str, Enum):
    IN = "in"
    NOT_IN = "not_in"


def _plain(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return list(value)
    return value


@dataclass(frozen=True)
class FilterPredicate:
    field: FilterField
    operator: FilterOperator
    value: Any

    def to_wire(self) -> dict[str, Any]:
        """Predicate as sent in the query body."""
        return {"field": self.field.value, "operator": self.operator.value, "value": _plain(self.value)}

    def to_audit(self) -> dict[str, Any]:
        """Predicate as reported back to the caller."""
        return {"field": self.field.value, "operator": self.operator.name, "value": _plain(self.value)}


@dataclass
class FilterArgs:
    """Optional filter inputs collected from tool arguments."""

    status_codes: Sequence[int] | None = None
    exclude_status_codes: Sequence[int] | None = None
    http_methods: Sequence[str] | None = None
    consumer_ids: Sequence[str] | None = None
    service_ids: Sequence[str] | None = None
    route_ids: Sequence[str] | None = None
    success_only: bool = False
    failure_only: bool = False


def build_filters(args: FilterArgs) -> list[FilterPredicate]:
    """Translate filter arguments into an ordered list of predicates.

    Empty lists are treated like absent ones. If both success_only and
    failure_only are set, only the success predicate is emitted; rejecting
    that combination is up to the caller.
    """
    filters: list[FilterPredicate] = []

    if args.status_codes:
        filters.append(FilterPredicate(FilterField.STATUS_CODE, FilterOperator.IN, list(args.status_codes)))

    if args.exclude_status_codes:
        filters.append(FilterPredicate(FilterField.STATUS_CODE, FilterOperator.NOT_IN, list(args.exclude_status_codes)))

    if args.http_methods:
        filters.append(FilterPredicate(FilterField.HTTP_METHOD, FilterOperator.IN, list(args.http_methods)))

    if args.consumer_ids:
        filters.append(FilterPredicate(FilterField.CONSUMER, FilterOperator.IN, list(args.consumer_ids)))

    if args.service_ids:
        filters.append(FilterPredicate(FilterField.GATEWAY_SERVICE, FilterOperator.IN, list(args.service_ids)))

    if args.route_ids:
        filters.append(FilterPredicate(FilterField.ROUTE, FilterOperator.IN, list(args.route_ids)))

    if args.success_only:
        filters.append(FilterPredicate(FilterField.STATUS_CODE_GROUPED, FilterOperator.IN, list(SUCCESS_BUCKETS)))
    elif args.failure_only:
        filters.append(FilterPredicate(FilterField.STATUS_CODE_GROUPED, FilterOperator.IN, list(FAILURE_BUCKETS)))

    return filters


def filters_to_wire(filters: Sequence[FilterPredicate]) -> list[dict[str, Any]]:
    return [f.to_wire() for f in filters]


def filters_to_audit(filters: Sequence[FilterPredicate]) -> list[dict[str, Any]]:
    return [f.to_audit() for f in filters]
