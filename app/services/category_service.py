import logging
from typing import Any, Dict, List, Mapping

from fastapi import HTTPException, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.dtos import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryStatsResponse,
    CategoryUpdateRequest,
    PageResponse,
)
from app.models.entities.category import Category, CategoryType
from app.repositories import CarRepository, CategoryRepository
from app.services.car_service import clean_updates
from app.services.filters import build_category_query, contains

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY = "A category with this slug already exists"


def _serialize_category(category: Category, car_count: int | None = None) -> CategoryResponse:
    return CategoryResponse.model_validate({**category.model_dump(), "car_count": car_count})


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")


def car_count_query(category: Category) -> Dict[str, Any]:
    """Which available cars belong to a category depends on its type."""
    pattern = contains(category.name)
    if category.type == CategoryType.CAR_TYPE.value:
        match: Dict[str, Any] = {
            "$or": [{"category_id": category.id}, {"category": pattern}]
        }
    elif category.type == CategoryType.FUEL_TYPE.value:
        match = {"fuel": pattern}
    else:
        match = {"tags": pattern}
    return {**match, "available": True}


class CategoryService:
    def __init__(self, db: Database):
        self.db = db
        self.category_repo = CategoryRepository(db)
        self.car_repo = CarRepository(db)

    def list_categories(self, params: Mapping[str, str]) -> PageResponse[CategoryResponse]:
        query = build_category_query(params)
        categories, total = self.category_repo.paginate(query)
        return PageResponse[CategoryResponse].build(
            [_serialize_category(c) for c in categories], total, query.page, query.limit
        )

    def list_with_car_counts(self) -> List[CategoryResponse]:
        return [
            _serialize_category(c, self.car_repo.count(car_count_query(c)))
            for c in self.category_repo.list_by_type_then_name()
        ]

    def get_category(self, category_id: str) -> CategoryResponse:
        category = self.category_repo.find_by_id(category_id)
        if not category:
            raise _not_found()
        return _serialize_category(category)

    def get_category_by_slug(self, slug: str) -> CategoryResponse:
        category = self.category_repo.find_by_slug(slug)
        if not category:
            raise _not_found()
        return _serialize_category(category)

    def create_category(self, payload: CategoryCreateRequest) -> CategoryResponse:
        try:
            category = self.category_repo.insert_one(Category(**payload.model_dump()))
        except DuplicateKeyError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_CATEGORY)
        logger.info("Created %s category %s (%s)", category.type, category.id, category.slug)
        return _serialize_category(category)

    def update_category(
        self, category_id: str, payload: CategoryUpdateRequest
    ) -> CategoryResponse:
        updates = clean_updates(
            payload.model_dump(exclude_unset=True), {"image", "description"}
        )
        try:
            category = self.category_repo.update_one(category_id, updates)
        except DuplicateKeyError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_CATEGORY)
        if not category:
            raise _not_found()
        return _serialize_category(category)

    def delete_category(self, category_id: str) -> None:
        if not self.category_repo.delete_one(category_id):
            raise _not_found()
        logger.info("Deleted category %s", category_id)

    def get_stats(self) -> CategoryStatsResponse:
        categories = self.category_repo.find_many({})
        by_type = {t.value: 0 for t in CategoryType}
        for category in categories:
            by_type[category.type] = by_type.get(category.type, 0) + 1
        return CategoryStatsResponse(
            total=len(categories),
            featured=sum(1 for c in categories if c.featured),
            by_type=by_type,
            categories_with_cars=sum(
                1 for c in categories if self.car_repo.count(car_count_query(c)) > 0
            ),
        )
