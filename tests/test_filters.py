"""Unit tests for the filter builder."""

from konnect_mcp.analytics.filters import (
    FilterArgs,
    FilterField,
    FilterOperator,
    FilterPredicate,
    build_filters,
    filters_to_audit,
    filters_to_wire,
)


class TestBuildFilters:
    """Test cases for build_filters()."""

    def test_no_arguments_no_filters(self):
        assert build_filters(FilterArgs()) == []

    def test_status_codes_audit_form(self):
        filters = build_filters(FilterArgs(status_codes=[200, 201]))
        assert filters_to_audit(filters) == [{"field": "status_code", "operator": "IN", "value": [200, 201]}]

    def test_wire_form_uses_backend_operators(self):
        filters = build_filters(FilterArgs(status_codes=[200], exclude_status_codes=[500]))
        assert filters_to_wire(filters) == [
            {"field": "status_code", "operator": "in", "value": [200]},
            {"field": "status_code", "operator": "not_in", "value": [500]},
        ]

    def test_fixed_order(self):
        filters = build_filters(
            FilterArgs(
                route_ids=["r1"],
                service_ids=["s1"],
                consumer_ids=["c1"],
                http_methods=["GET"],
                exclude_status_codes=[404],
                status_codes=[200],
                failure_only=True,
            )
        )
        assert [(f.field, f.operator) for f in filters] == [
            (FilterField.STATUS_CODE, FilterOperator.IN),
            (FilterField.STATUS_CODE, FilterOperator.NOT_IN),
            (FilterField.HTTP_METHOD, FilterOperator.IN),
            (FilterField.CONSUMER, FilterOperator.IN),
            (FilterField.GATEWAY_SERVICE, FilterOperator.IN),
            (FilterField.ROUTE, FilterOperator.IN),
            (FilterField.STATUS_CODE_GROUPED, FilterOperator.IN),
        ]

    def test_empty_lists_are_ignored(self):
        filters = build_filters(
            FilterArgs(
                status_codes=[],
                exclude_status_codes=[],
                http_methods=[],
                consumer_ids=[],
                service_ids=[],
                route_ids=[],
            )
        )
        assert filters == []

    def test_success_only(self):
        filters = build_filters(FilterArgs(consumer_ids=["c1"], success_only=True))
        assert filters[-1] == FilterPredicate(FilterField.STATUS_CODE_GROUPED, FilterOperator.IN, ["2XX"])

    def test_failure_only(self):
        filters = build_filters(FilterArgs(consumer_ids=["c1"], failure_only=True))
        assert filters[-1].to_audit() == {"field": "status_code_grouped", "operator": "IN", "value": ["4XX", "5XX"]}

    def test_both_outcome_flags_prefer_success(self):
        filters = build_filters(FilterArgs(success_only=True, failure_only=True))
        assert len(filters) == 1
        assert filters[0].value == ["2XX"]

    def test_values_are_copied(self):
        codes = [500]
        filters = build_filters(FilterArgs(status_codes=codes))
        codes.append(502)
        assert filters[0].value == [500]

    def test_tuple_values_serialize_as_lists(self):
        predicate = FilterPredicate(FilterField.HTTP_METHOD, FilterOperator.IN, ("GET", "POST"))
        assert predicate.to_wire()["value"] == ["GET", "POST"]
