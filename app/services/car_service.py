import logging
from typing import Any, Dict, List, Mapping

from bson import ObjectId
from fastapi import HTTPException, status
from pymongo.database import Database

from app.dtos import (
    CarCreateRequest,
    CarResponse,
    CarStatsResponse,
    CarUpdateRequest,
    PageResponse,
)
from app.models.entities.car import Car
from app.repositories import CarRepository
from app.services.filters import build_car_query

logger = logging.getLogger(__name__)

# Fields an update may explicitly clear by sending null
CLEARABLE_FIELDS = {
    "brand_id",
    "discounted_price",
    "description",
    "category",
    "category_id",
    "engine",
    "power",
    "seater",
}
REFERENCE_FIELDS = ("brand_id", "category_id")


def _serialize_car(car: Car) -> CarResponse:
    return CarResponse.model_validate(car.model_dump())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Car not found")


def clean_updates(values: Dict[str, Any], clearable: set) -> Dict[str, Any]:
    """Drop nulls sent for fields that may not be cleared."""
    return {
        key: value
        for key, value in values.items()
        if value is not None or key in clearable
    }


class CarService:
    def __init__(self, db: Database):
        self.db = db
        self.car_repo = CarRepository(db)

    def list_cars(self, params: Mapping[str, str]) -> PageResponse[CarResponse]:
        query = build_car_query(params)
        cars, total = self.car_repo.paginate(query)
        return PageResponse[CarResponse].build(
            [_serialize_car(car) for car in cars], total, query.page, query.limit
        )

    def list_all_cars(self, limit: int = 1000) -> List[CarResponse]:
        return [_serialize_car(car) for car in self.car_repo.list_all(limit)]

    def get_car(self, car_id: str) -> CarResponse:
        car = self.car_repo.find_by_id(car_id)
        if not car:
            raise _not_found()
        return _serialize_car(car)

    def create_car(self, payload: CarCreateRequest) -> CarResponse:
        car = Car(**payload.model_dump())
        created = self.car_repo.insert_one(car)
        logger.info("Created car %s (%s %s)", created.id, created.brand, created.model)
        return _serialize_car(created)

    def update_car(self, car_id: str, payload: CarUpdateRequest) -> CarResponse:
        existing = self.car_repo.find_by_id(car_id)
        if not existing:
            raise _not_found()

        updates = clean_updates(payload.model_dump(exclude_unset=True), CLEARABLE_FIELDS)
        daily_price = updates.get("daily_price", existing.daily_price)
        discounted_price = updates.get("discounted_price", existing.discounted_price)
        if discounted_price is not None and discounted_price >= daily_price:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Discounted price must be less than the daily price",
            )

        for field in REFERENCE_FIELDS:
            if updates.get(field) is not None:
                updates[field] = ObjectId(updates[field])

        car = self.car_repo.update_one(existing.id, updates)
        if not car:
            raise _not_found()
        logger.info("Updated car %s fields=%s", car.id, sorted(updates))
        return _serialize_car(car)

    def delete_car(self, car_id: str) -> None:
        if not self.car_repo.delete_one(car_id):
            raise _not_found()
        logger.info("Deleted car %s", car_id)

    def get_stats(self) -> CarStatsResponse:
        return CarStatsResponse(
            total=self.car_repo.count(),
            available=self.car_repo.count({"available": True}),
            featured=self.car_repo.count({"featured": True}),
            brands=self.car_repo.distinct_brands(),
        )
