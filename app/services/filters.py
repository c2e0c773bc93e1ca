"""Query-string filter builders for the catalog list endpoints.

Each builder maps raw query parameters onto a MongoDB filter plus pagination
and sort. Coercion is lenient: a parameter that does not parse is ignored (or
falls back to its default) instead of failing the request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bson import ObjectId
from pydantic.alias_generators import to_snake
from pymongo import ASCENDING, DESCENDING

MAX_LIMIT = 1000
# BSON integers are signed 64-bit
MAX_INT64 = 2**63 - 1
MAX_PAGE = MAX_INT64 // MAX_LIMIT

CAR_SORT_FIELDS = frozenset(
    {
        "id", "createdAt", "updatedAt", "name", "brand", "model", "year",
        "mileage", "dailyPrice", "discountedPrice", "featured", "available",
    }
)
BRAND_SORT_FIELDS = frozenset({"id", "createdAt", "updatedAt", "name", "slug", "featured"})
CATEGORY_SORT_FIELDS = frozenset(
    {"id", "createdAt", "updatedAt", "name", "slug", "type", "featured"}
)
REVIEW_SORT_FIELDS = frozenset(
    {"id", "createdAt", "updatedAt", "rating", "userName", "isApproved", "isFeatured"}
)
VIDEO_TESTIMONIAL_SORT_FIELDS = frozenset(
    {"id", "createdAt", "updatedAt", "userName", "title", "duration", "isFeatured"}
)


@dataclass
class ListQuery:
    filter: Dict[str, Any] = field(default_factory=dict)
    page: int = 1
    limit: int = 20
    sort: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None or value == "":
        return None
    return value == "true"


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if not -MAX_INT64 - 1 <= number <= MAX_INT64:
        return None
    return number


def parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # float() accepts "nan" and "inf", neither is a usable bound
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def parse_object_id(value: Optional[str]) -> Optional[ObjectId]:
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def contains(value: str) -> Dict[str, str]:
    """Case-insensitive substring match."""
    return {"$regex": re.escape(value), "$options": "i"}


def _range(low: Optional[float], high: Optional[float]) -> Dict[str, float]:
    bounds: Dict[str, float] = {}
    if low is not None:
        bounds["$gte"] = low
    if high is not None:
        bounds["$lte"] = high
    return bounds


def build_page(
    params: Mapping[str, str],
    default_limit: int,
    default_sort_by: str,
    default_sort_order: str,
    sortable: frozenset = frozenset(),
) -> ListQuery:
    """Parse the page/limit/sortBy/sortOrder parameters shared by every list.

    A `sortBy` outside `sortable` falls back to the default sort field.
    """
    page = parse_int(params.get("page"))
    if page is None or page < 1:
        page = 1
    page = min(page, MAX_PAGE)

    limit = parse_int(params.get("limit"))
    if limit is None or limit < 1:
        limit = default_limit
    limit = min(limit, MAX_LIMIT)

    sort_by = params.get("sortBy")
    if sort_by not in sortable:
        sort_by = default_sort_by
    sort_order = params.get("sortOrder") or default_sort_order
    direction = DESCENDING if sort_order == "desc" else ASCENDING

    # The API speaks camelCase, documents are stored snake_case
    sort_field = "_id" if sort_by == "id" else to_snake(sort_by)
    return ListQuery(page=page, limit=limit, sort=[(sort_field, direction)])


def build_car_query(params: Mapping[str, str]) -> ListQuery:
    query = build_page(
        params,
        default_limit=12,
        default_sort_by="createdAt",
        default_sort_order="desc",
        sortable=CAR_SORT_FIELDS,
    )
    conditions: Dict[str, Any] = {}

    if params.get("brand"):
        conditions["brand"] = contains(params["brand"])

    brand_id = parse_object_id(params.get("brandId"))
    if brand_id:
        conditions["brand_id"] = brand_id

    category_id = parse_object_id(params.get("categoryId"))
    if category_id:
        conditions["category_id"] = category_id

    if params.get("category"):
        conditions["category"] = params["category"]
    if params.get("transmission"):
        conditions["transmission"] = params["transmission"]
    if params.get("fuel"):
        conditions["fuel"] = params["fuel"]
    if params.get("tag"):
        conditions["tags"] = params["tag"]

    available = parse_bool(params.get("available"))
    if available is not None:
        conditions["available"] = available

    featured = parse_bool(params.get("featured"))
    if featured is not None:
        conditions["featured"] = featured

    year = _range(parse_int(params.get("minYear")), parse_int(params.get("maxYear")))
    if year:
        conditions["year"] = year

    and_clauses: List[Dict[str, Any]] = []

    price = _range(parse_float(params.get("minPrice")), parse_float(params.get("maxPrice")))
    if price:
        # Discounted price wins over the daily rate when one is set
        and_clauses.append(
            {
                "$or": [
                    {"discounted_price": {"$ne": None, **price}},
                    {"discounted_price": None, "daily_price": price},
                ]
            }
        )

    if params.get("search"):
        pattern = contains(params["search"])
        and_clauses.append(
            {"$or": [{"name": pattern}, {"brand": pattern}, {"model": pattern}]}
        )

    if and_clauses:
        conditions["$and"] = and_clauses

    query.filter = conditions
    return query


def build_brand_query(params: Mapping[str, str]) -> ListQuery:
    query = build_page(
        params,
        default_limit=20,
        default_sort_by="name",
        default_sort_order="asc",
        sortable=BRAND_SORT_FIELDS,
    )
    featured = parse_bool(params.get("featured"))
    if featured is not None:
        query.filter["featured"] = featured
    if params.get("search"):
        query.filter["name"] = contains(params["search"])
    return query


def build_category_query(params: Mapping[str, str]) -> ListQuery:
    query = build_page(
        params,
        default_limit=20,
        default_sort_by="name",
        default_sort_order="asc",
        sortable=CATEGORY_SORT_FIELDS,
    )
    if params.get("type"):
        query.filter["type"] = params["type"]
    featured = parse_bool(params.get("featured"))
    if featured is not None:
        query.filter["featured"] = featured
    if params.get("search"):
        query.filter["name"] = contains(params["search"])
    return query


def build_review_query(
    params: Mapping[str, str], include_unapproved: bool = False
) -> ListQuery:
    query = build_page(
        params,
        default_limit=20,
        default_sort_by="createdAt",
        default_sort_order="desc",
        sortable=REVIEW_SORT_FIELDS,
    )

    car_id = params.get("carId")
    if car_id:
        # Stored ids are ObjectIds, so a raw string that fails to parse matches nothing
        query.filter["car_id"] = parse_object_id(car_id) or car_id

    featured = parse_bool(params.get("featured"))
    if featured is not None:
        query.filter["is_featured"] = featured

    if not include_unapproved:
        query.filter["is_approved"] = True
    else:
        approved = parse_bool(params.get("approved"))
        if approved is not None:
            query.filter["is_approved"] = approved

    rating = parse_int(params.get("rating"))
    if rating is not None:
        query.filter["rating"] = rating
    else:
        bounds = _range(
            parse_int(params.get("minRating")), parse_int(params.get("maxRating"))
        )
        if bounds:
            query.filter["rating"] = bounds

    return query


def build_video_testimonial_query(params: Mapping[str, str]) -> ListQuery:
    query = build_page(
        params,
        default_limit=100,
        default_sort_by="createdAt",
        default_sort_order="desc",
        sortable=VIDEO_TESTIMONIAL_SORT_FIELDS,
    )
    featured = parse_bool(params.get("featured"))
    if featured is not None:
        query.filter["is_featured"] = featured
    if params.get("company"):
        query.filter["user_company"] = params["company"]
    if params.get("search"):
        pattern = contains(params["search"])
        query.filter["$or"] = [
            {"user_name": pattern},
            {"user_company": pattern},
            {"title": pattern},
        ]
    return query
