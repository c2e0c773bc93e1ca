import logging
from typing import Mapping

from fastapi import HTTPException, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.dtos import (
    BrandCreateRequest,
    BrandResponse,
    BrandStatsResponse,
    BrandUpdateRequest,
    PageResponse,
)
from app.models.entities.brand import Brand
from app.repositories import BrandRepository, CarRepository
from app.services.car_service import clean_updates
from app.services.filters import build_brand_query

logger = logging.getLogger(__name__)

DUPLICATE_BRAND = "A brand with this name or slug already exists"


def _serialize_brand(brand: Brand) -> BrandResponse:
    return BrandResponse.model_validate(brand.model_dump())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")


class BrandService:
    def __init__(self, db: Database):
        self.db = db
        self.brand_repo = BrandRepository(db)
        self.car_repo = CarRepository(db)

    def list_brands(self, params: Mapping[str, str]) -> PageResponse[BrandResponse]:
        query = build_brand_query(params)
        brands, total = self.brand_repo.paginate(query)
        return PageResponse[BrandResponse].build(
            [_serialize_brand(b) for b in brands], total, query.page, query.limit
        )

    def get_brand(self, brand_id: str) -> BrandResponse:
        brand = self.brand_repo.find_by_id(brand_id)
        if not brand:
            raise _not_found()
        return _serialize_brand(brand)

    def get_brand_by_slug(self, slug: str) -> BrandResponse:
        brand = self.brand_repo.find_by_slug(slug)
        if not brand:
            raise _not_found()
        return _serialize_brand(brand)

    def create_brand(self, payload: BrandCreateRequest) -> BrandResponse:
        try:
            brand = self.brand_repo.insert_one(Brand(**payload.model_dump()))
        except DuplicateKeyError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_BRAND)
        logger.info("Created brand %s (%s)", brand.id, brand.slug)
        return _serialize_brand(brand)

    def update_brand(self, brand_id: str, payload: BrandUpdateRequest) -> BrandResponse:
        updates = clean_updates(payload.model_dump(exclude_unset=True), set())
        try:
            brand = self.brand_repo.update_one(brand_id, updates)
        except DuplicateKeyError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_BRAND)
        if not brand:
            raise _not_found()
        return _serialize_brand(brand)

    def delete_brand(self, brand_id: str) -> None:
        if not self.brand_repo.delete_one(brand_id):
            raise _not_found()
        logger.info("Deleted brand %s", brand_id)

    def get_stats(self) -> BrandStatsResponse:
        # Cars reference their brand by id, or by name on older documents
        with_cars = {
            "$or": [
                {"_id": {"$in": self.car_repo.distinct_brand_ids()}},
                {"name": {"$in": self.car_repo.distinct_brands()}},
            ]
        }
        return BrandStatsResponse(
            total=self.brand_repo.count(),
            featured=self.brand_repo.count({"featured": True}),
            brands_with_cars=self.brand_repo.count(with_cars),
        )
