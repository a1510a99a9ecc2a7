from decimal import Decimal

from storefront.core.application.ports import Filter, OrderBy, Query
from storefront.infrastructure.drivers.postgrest.postgrest_query_builder import (
    condition,
    filters_json,
    literal,
    query_params,
    to_json,
)


class TestConditions:
    def test_scalar_operators(self):
        assert condition(Filter.eq("state", "active")) == "eq.active"
        assert condition(Filter.gte("price", Decimal("50000"))) == "gte.50000"
        assert condition(Filter.eq("category_id", None)) == "is.null"

    def test_in_list_quotes_reserved_characters(self):
        assert condition(Filter.is_in("id", ["a", "b,c"])) == 'in.(a,"b,c")'

    def test_text_search_wraps_wildcards(self):
        assert condition(Filter.contains_text("title", "camisa")) == "ilike.*camisa*"
        assert condition(Filter.contains_text("title", "camisa roja")) == 'ilike."*camisa roja*"'

    def test_literals(self):
        assert literal(True) == "true"
        assert literal('say "hi"') == '"say \\"hi\\""'


class TestQueryParams:
    def test_full_query(self):
        query = Query(
            filters=(Filter.eq("state", "active"),),
            any_of=((Filter.contains_text("title", "gorra"), Filter.contains_text("description", "gorra")),),
            order_by=(OrderBy("created_at", descending=True),),
            limit=20,
        )

        assert query_params(query) == [
            ("select", "*"),
            ("state", "eq.active"),
            ("or", "(title.ilike.*gorra*,description.ilike.*gorra*)"),
            ("order", "created_at.desc.nullslast"),
            ("limit", "20"),
        ]

    def test_several_or_groups_are_anded(self):
        query = Query(any_of=((Filter.eq("a", 1), Filter.eq("b", 2)), (Filter.eq("c", 3),)))

        assert query_params(query)[-1] == ("and", "(or(a.eq.1,b.eq.2),or(c.eq.3))")

    def test_no_query_selects_everything(self):
        assert query_params(None) == [("select", "*")]


class TestJson:
    def test_decimals_become_strings(self):
        assert to_json({"price": Decimal("10.50"), "tags": ("a",)}) == {"price": "10.50", "tags": ["a"]}

    def test_filters_for_rpc(self):
        assert filters_json((Filter.is_in("id", ["p1"]),)) == [{"column": "id", "op": "in", "value": ["p1"]}]
