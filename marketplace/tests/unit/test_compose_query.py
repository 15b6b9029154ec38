import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.contrib.auth.models import AnonymousUser
from django.db.models import Q

from marketplace.catalog.domain.services.search_service import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    SORT_ORDERS,
    GigQuery,
    SearchPage,
    compose_query,
    parse_limit,
    parse_page,
    parse_price,
    parse_sort,
    visibility_condition,
)


ACTIVE_ONLY = Q(status="active")


def viewer(role="buyer", is_superuser=False):
    return SimpleNamespace(id=uuid.uuid4(), role=role, is_superuser=is_superuser, is_authenticated=True)


@pytest.mark.unit
class TestParsers:
    @pytest.mark.parametrize("value,expected", [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-3", 1), ("4", 4), (2, 2)])
    def test_parse_page(self, value, expected):
        assert parse_page(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, DEFAULT_LIMIT),
            ("", DEFAULT_LIMIT),
            ("x", DEFAULT_LIMIT),
            ("0", 1),
            ("-5", 1),
            ("25", 25),
            ("500", MAX_LIMIT),
        ],
    )
    def test_parse_limit(self, value, expected):
        assert parse_limit(value) == expected

    def test_parse_limit_custom_default(self):
        assert parse_limit(None, default=20) == 20

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12.5", Decimal("12.5")),
            (" 7 ", Decimal("7")),
            ("-10", Decimal("0")),
            ("cheap", None),
            ("NaN", None),
            ("Infinity", None),
            (True, None),
            (None, None),
        ],
    )
    def test_parse_price(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("price_asc", "price_asc"),
            ("priceAsc", "price_asc"),
            ("priceDesc", "price_desc"),
            ("oldest", "oldest"),
            ("rating", "newest"),
            (None, "newest"),
            (["price_asc"], "newest"),
        ],
    )
    def test_parse_sort(self, value, expected):
        assert parse_sort(value) == expected


@pytest.mark.unit
class TestComposeQuery:
    def test_defaults(self):
        query = compose_query({}, AnonymousUser())

        assert query == GigQuery(conditions=(ACTIVE_ONLY,), order_by=SORT_ORDERS["newest"], page=1, limit=10)
        assert query.offset == 0

    def test_every_ordering_has_a_tiebreaker(self):
        for order_by in SORT_ORDERS.values():
            assert order_by[-1].lstrip("-") == "id"

    def test_filters_are_combined(self):
        seller_id = uuid.uuid4()

        query = compose_query(
            {
                "seller": str(seller_id),
                "category": "Programming",
                "min_price": "10",
                "max_price": "100",
                "search": "  django  ",
                "sort": "price_desc",
                "page": "3",
                "limit": "5",
            }
        )

        assert query.conditions == (
            Q(seller_id=seller_id),
            Q(category="Programming"),
            Q(price__gte=Decimal("10")),
            Q(price__lte=Decimal("100")),
            Q(title__icontains="django") | Q(description__icontains="django"),
            ACTIVE_ONLY,
        )
        assert query.order_by == SORT_ORDERS["price_desc"]
        assert (query.page, query.limit, query.offset) == (3, 5, 10)

    def test_camel_case_aliases(self):
        seller_id = uuid.uuid4()

        query = compose_query({"userId": str(seller_id), "minPrice": "5", "maxPrice": "9", "sort": "priceAsc"})

        assert Q(seller_id=seller_id) in query.conditions
        assert Q(price__gte=Decimal("5")) in query.conditions
        assert Q(price__lte=Decimal("9")) in query.conditions
        assert query.order_by == SORT_ORDERS["price_asc"]

    @pytest.mark.parametrize(
        "params",
        [
            {"seller": "not-a-uuid"},
            {"category": "Cooking"},
            {"category": "design"},
            {"min_price": "100", "max_price": "10"},
        ],
    )
    def test_impossible_filters_match_nothing(self, params):
        assert compose_query(params).empty is True

    def test_invalid_prices_are_ignored(self):
        query = compose_query({"min_price": "abc", "max_price": ""})

        assert query.conditions == (ACTIVE_ONLY,)
        assert not query.empty

    def test_search_is_truncated(self):
        query = compose_query({"search": "a" * 150})

        term = "a" * 100
        assert query.conditions[0] == Q(title__icontains=term) | Q(description__icontains=term)

    def test_blank_search_is_ignored(self):
        assert compose_query({"search": "   "}).conditions == (ACTIVE_ONLY,)

    def test_injection_attempts_stay_plain_lookups(self):
        payload = "'; DROP TABLE marketplace_gig; --"

        query = compose_query({"search": payload})

        assert query.conditions[0] == Q(title__icontains=payload) | Q(description__icontains=payload)


@pytest.mark.unit
class TestVisibility:
    def test_anonymous_sees_active(self):
        assert visibility_condition(AnonymousUser()) == ACTIVE_ONLY
        assert visibility_condition(None) == ACTIVE_ONLY

    def test_user_sees_active_and_own(self):
        user = viewer()

        assert visibility_condition(user) == ACTIVE_ONLY | Q(seller_id=user.id)

    def test_admin_sees_everything(self):
        assert visibility_condition(viewer(role="admin")) is None
        assert visibility_condition(viewer(is_superuser=True)) is None


@pytest.mark.unit
class TestSearchPage:
    def test_pagination_block(self):
        page = SearchPage.build(items=["a", "b"], total=12, page=2, limit=5)

        assert page.pagination() == {"current": 2, "total": 3, "count": 2, "total_results": 12, "limit": 5}

    def test_empty_result(self):
        page = SearchPage.build(items=[], total=0, page=1, limit=10)

        assert page.total_pages == 0
        assert page.pagination()["count"] == 0
