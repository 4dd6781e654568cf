"""Unit tests for the aggregation engine."""

import pytest

from conftest import raw_request
from konnect_mcp.analytics.aggregation import (
    CONSUMER,
    METHOD,
    ROUTE,
    SERVICE,
    STATUS_CODE,
    distribution,
    group_by,
)
from konnect_mcp.analytics.records import normalize_all


def records_with(**columns):
    """Build canonical records from parallel lists of raw field values."""
    length = len(next(iter(columns.values())))
    raws = [raw_request(**{field: values[i] for field, values in columns.items()}) for i in range(length)]
    return normalize_all(raws)


class TestStatusCodeDistribution:
    """Numeric keys: count descending, ties ascending by code."""

    def test_ties_break_ascending(self):
        records = records_with(status_code=[404, 404, 500, 200])
        assert distribution(records, STATUS_CODE) == [
            {"statusCode": 404, "count": 2, "percentage": 50.0},
            {"statusCode": 200, "count": 1, "percentage": 25.0},
            {"statusCode": 500, "count": 1, "percentage": 25.0},
        ]

    def test_ascending_tie_break_ignores_arrival_order(self):
        records = records_with(status_code=[503, 502, 200])
        assert [a.key for a in group_by(records, STATUS_CODE)] == [200, 502, 503]

    def test_keys_are_plain_ints(self):
        records = records_with(status_code=[200])
        assert type(group_by(records, STATUS_CODE)[0].key) is int

    def test_missing_status_groups_under_zero(self):
        records = records_with(status_code=[None, 200, None])
        assert distribution(records, STATUS_CODE)[0] == {"statusCode": 0, "count": 2, "percentage": 66.67}


class TestIdentifierDistribution:
    """Identifier keys: count descending, ties by first appearance."""

    def test_ties_break_by_first_appearance(self):
        records = records_with(consumer=["b", "a", "b", "a", "c"])
        aggregates = group_by(records, CONSUMER)
        assert [(a.key, a.count) for a in aggregates] == [("b", 2), ("a", 2), ("c", 1)]
        assert [a.percentage for a in aggregates] == [40.0, 40.0, 20.0]

    def test_not_alphabetical(self):
        records = records_with(gateway_service=["zeta", "alpha", "mid"])
        assert [a.key for a in group_by(records, SERVICE)] == ["zeta", "alpha", "mid"]

    def test_anonymous_and_unknown_are_real_groups(self):
        records = records_with(consumer=[None, "a", None], gateway_service=[None, None, "s"])
        assert distribution(records, CONSUMER) == [
            {"consumerId": "anonymous", "count": 2, "percentage": 66.67},
            {"consumerId": "a", "count": 1, "percentage": 33.33},
        ]
        assert [a.key for a in group_by(records, SERVICE)] == ["unknown", "s"]

    def test_route_and_method_placeholders(self):
        records = records_with(route=[None, "r1"], http_method=[None, "POST"])
        assert [a.key for a in group_by(records, ROUTE)] == ["unknown", "r1"]
        assert [a.key for a in group_by(records, METHOD)] == ["UNKNOWN", "POST"]


class TestLimit:
    def test_cap_applies_after_sorting(self):
        records = records_with(consumer=["x", "y", "y", "y", "z", "z"])
        top = group_by(records, CONSUMER, limit=2)
        assert [(a.key, a.count) for a in top] == [("y", 3), ("z", 2)]

    def test_percentages_use_full_total(self):
        records = records_with(consumer=["x", "y", "y", "y"])
        assert group_by(records, CONSUMER, limit=1)[0].percentage == 75.0


class TestNestedBreakdown:
    def test_status_codes_within_each_group(self):
        records = records_with(
            gateway_service=["s1", "s1", "s2", "s1", "s1"],
            status_code=[500, 200, 200, 500, 404],
        )
        assert distribution(records, SERVICE, nested=True) == [
            {
                "serviceId": "s1",
                "count": 4,
                "percentage": 80.0,
                "statusCodeBreakdown": [
                    {"statusCode": 500, "count": 2},
                    {"statusCode": 200, "count": 1},
                    {"statusCode": 404, "count": 1},
                ],
            },
            {
                "serviceId": "s2",
                "count": 1,
                "percentage": 20.0,
                "statusCodeBreakdown": [{"statusCode": 200, "count": 1}],
            },
        ]

    def test_no_breakdown_unless_requested(self):
        records = records_with(gateway_service=["s1"])
        assert "statusCodeBreakdown" not in distribution(records, SERVICE)[0]

    def test_nested_counts_sum_to_parent(self):
        records = records_with(
            consumer=["a", "b", "a", "c", "a", "b"],
            status_code=[200, 401, 429, 200, 429, 500],
        )
        for aggregate in group_by(records, CONSUMER, nested=True):
            assert sum(n.count for n in aggregate.nested) == aggregate.count


class TestTotals:
    def test_empty_input(self):
        assert group_by([], STATUS_CODE) == []
        assert distribution([], CONSUMER, nested=True, limit=5) == []

    @pytest.mark.parametrize(
        "consumers",
        [
            ["a", "b", "c"],
            ["a", "a", "b", "c", "c", "c", "d"],
            ["only"],
            ["a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k"],
        ],
    )
    def test_counts_and_percentages_add_up(self, consumers):
        records = records_with(consumer=consumers)
        aggregates = group_by(records, CONSUMER)
        assert sum(a.count for a in aggregates) == len(records)
        assert abs(sum(a.percentage for a in aggregates) - 100.0) <= len(aggregates) * 0.005 + 1e-9

    def test_percentages_round_half_up(self):
        # 1/32 = 3.125% and 31/32 = 96.875%
        records = records_with(status_code=[404] + [200] * 31)
        assert [a.percentage for a in group_by(records, STATUS_CODE)] == [96.88, 3.13]
