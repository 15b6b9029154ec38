"""
SearchService - Gig Search & Filtering

Query composition is pure: ``compose_query`` turns raw request parameters into
a ``GigQuery`` without touching the database, so malformed input can never
reach the ORM as anything but a plain equality or ``icontains`` lookup. The
service then runs the count and the page fetch inside one transaction.

Accepted parameters (snake_case, or the camelCase names older clients send):
    seller / userId     -- UUID of the owning seller
    category            -- one of Gig.CATEGORIES, case-sensitive
    min_price / minPrice, max_price / maxPrice
    search              -- matched against title and description
    sort                -- newest | oldest | price_asc | price_desc
    page, limit
"""

import math
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.db.models import Q

from marketplace.catalog.domain.models import Gig
from marketplace.infra.observability import metrics
from utils.rbac import Action, PolicyViolation, authorize, is_admin, is_authenticated
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MAX_SEARCH_LENGTH = 100
DEFAULT_SORT = "newest"

# Every ordering ends on the primary key so pages never overlap
SORT_ORDERS = {
    "newest": ("-created_at", "-id"),
    "oldest": ("created_at", "id"),
    "price_asc": ("price", "id"),
    "price_desc": ("-price", "-id"),
}
SORT_ALIASES = {"priceAsc": "price_asc", "priceDesc": "price_desc"}

GIG_NOT_FOUND_MESSAGE = "Gig not found"


@dataclass(frozen=True)
class GigQuery:
    conditions: Tuple[Q, ...] = ()
    order_by: Tuple[str, ...] = SORT_ORDERS[DEFAULT_SORT]
    page: int = 1
    limit: int = DEFAULT_LIMIT
    # Set when the filters can match nothing (bad seller id, unknown category, min > max)
    empty: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def apply(self, queryset):
        if self.empty:
            return queryset.none()
        for condition in self.conditions:
            queryset = queryset.filter(condition)
        return queryset.order_by(*self.order_by)


@dataclass
class SearchPage:
    items: List[Any]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items, total, page, limit):
        return cls(items=items, total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))

    def pagination(self) -> dict:
        return {
            "current": self.page,
            "total": self.total_pages,
            "count": len(self.items),
            "total_results": self.total,
            "limit": self.limit,
        }


def _param(params, *names):
    for name in names:
        value = params.get(name)
        if value is not None and value != "":
            return value
    return None


def parse_page(value) -> int:
    try:
        page = int(str(value).strip())
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def parse_limit(value, default=DEFAULT_LIMIT) -> int:
    if value is None or value == "":
        return default
    try:
        limit = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return min(max(limit, 1), MAX_LIMIT)


def parse_price(value) -> Optional[Decimal]:
    """Non-numeric prices are ignored; negatives count as 0."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite():
        return None
    return max(price, Decimal("0"))


def parse_sort(value) -> str:
    if not isinstance(value, str):
        return DEFAULT_SORT
    value = SORT_ALIASES.get(value, value)
    return value if value in SORT_ORDERS else DEFAULT_SORT


def visibility_condition(viewer) -> Optional[Q]:
    """Active gigs for everyone, plus the viewer's own gigs; admins see all."""
    if is_admin(viewer):
        return None
    if is_authenticated(viewer):
        return Q(status=Gig.STATUS_ACTIVE) | Q(seller_id=viewer.id)
    return Q(status=Gig.STATUS_ACTIVE)


def compose_query(params, viewer=None) -> GigQuery:
    params = params or {}
    page = parse_page(params.get("page"))
    limit = parse_limit(params.get("limit"))
    order_by = SORT_ORDERS[parse_sort(params.get("sort"))]
    conditions = []

    def nothing():
        return GigQuery(order_by=order_by, page=page, limit=limit, empty=True)

    seller = _param(params, "seller", "userId")
    if seller is not None:
        try:
            conditions.append(Q(seller_id=uuid.UUID(str(seller))))
        except ValueError:
            return nothing()

    category = params.get("category")
    if category is not None and category != "":
        if category not in Gig.CATEGORIES:
            return nothing()
        conditions.append(Q(category=category))

    min_price = parse_price(_param(params, "min_price", "minPrice"))
    max_price = parse_price(_param(params, "max_price", "maxPrice"))
    if min_price is not None and max_price is not None and min_price > max_price:
        return nothing()
    if min_price is not None:
        conditions.append(Q(price__gte=min_price))
    if max_price is not None:
        conditions.append(Q(price__lte=max_price))

    search = params.get("search")
    if isinstance(search, str):
        search = search.strip()[:MAX_SEARCH_LENGTH]
        if search:
            conditions.append(Q(title__icontains=search) | Q(description__icontains=search))

    visibility = visibility_condition(viewer)
    if visibility is not None:
        conditions.append(visibility)

    return GigQuery(conditions=tuple(conditions), order_by=order_by, page=page, limit=limit)


class SearchService(BaseService):
    """
    Service for gig discovery.

    Responsibilities:
    - Filtered, sorted, paginated search
    - Single gig lookup with visibility rules
    - A seller's gig list
    """

    @BaseService.log_performance
    def search(self, params, viewer=None) -> ServiceResult[SearchPage]:
        """
        Search gigs.

        Returns:
            ServiceResult with a SearchPage; an impossible filter combination
            or a page past the last one is an empty page, not an error

        Example:
            >>> result = search_service.search({"category": "Design", "min_price": "10", "sort": "price_asc"})
            >>> if result.ok:
            ...     gigs = result.value.items
        """
        query = compose_query(params, viewer)
        try:
            with metrics.search_duration.time():
                with transaction.atomic():
                    queryset = query.apply(Gig.objects.select_related("seller"))
                    total = queryset.count()
                    items = list(queryset[query.offset : query.offset + query.limit]) if query.offset < total else []
        except DatabaseError as exc:
            return self.store_unavailable("search", exc)

        metrics.search_results.observe(total)
        self.logger.debug(f"Search matched {total} gigs (page={query.page}, limit={query.limit})")
        return service_ok(SearchPage.build(items, total, query.page, query.limit))

    def get_gig(self, gig_id, viewer=None) -> ServiceResult[Gig]:
        """Inactive gigs are reported as missing to everyone but their owner and admins."""
        try:
            gig = find_gig(gig_id)
        except DatabaseError as exc:
            return self.store_unavailable("get_gig", exc)
        if gig is None:
            return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
        try:
            authorize(viewer, Action.VIEW_GIG, gig)
        except PolicyViolation:
            return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
        return service_ok(gig)

    def list_seller_gigs(self, seller_id, viewer=None) -> ServiceResult[List[Gig]]:
        try:
            seller_uuid = uuid.UUID(str(seller_id))
        except ValueError:
            return service_ok([])

        queryset = Gig.objects.select_related("seller").filter(seller_id=seller_uuid)
        visibility = visibility_condition(viewer)
        if visibility is not None:
            queryset = queryset.filter(visibility)
        try:
            gigs = list(queryset.order_by(*SORT_ORDERS["newest"]))
        except DatabaseError as exc:
            return self.store_unavailable("list_seller_gigs", exc)
        return service_ok(gigs)


def find_gig(gig_id, for_update=False) -> Optional[Gig]:
    """Look a gig up by id; malformed ids are treated as missing."""
    queryset = Gig.objects.select_related("seller")
    if for_update:
        queryset = Gig.objects.select_for_update()
    try:
        return queryset.filter(pk=gig_id).first()
    except (DjangoValidationError, ValueError):
        return None
