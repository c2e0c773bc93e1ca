from typing import List

from fastapi import APIRouter, Depends, Request, status
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import (
    CarCreateRequest,
    CarResponse,
    CarStatsResponse,
    CarUpdateRequest,
    Envelope,
    MessageResponse,
    PageResponse,
)
from app.middleware.auth import require_admin
from app.services.car_service import CarService

router = APIRouter(prefix="/cars", tags=["Cars"])


@router.get("", response_model=PageResponse[CarResponse])
def list_cars(request: Request, db: Database = Depends(get_db)):
    """Filter, sort and paginate the catalog."""
    return CarService(db).list_cars(request.query_params)


@router.post(
    "",
    response_model=CarResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_car(payload: CarCreateRequest, db: Database = Depends(get_db)):
    return CarService(db).create_car(payload)


# Static paths must be registered before /{car_id}
@router.get("/list", response_model=Envelope[List[CarResponse]])
def list_all_cars(db: Database = Depends(get_db)):
    """Unpaginated catalog for dropdowns and selectors."""
    return Envelope[List[CarResponse]](data=CarService(db).list_all_cars())


@router.get(
    "/stats",
    response_model=CarStatsResponse,
    dependencies=[Depends(require_admin)],
)
def car_stats(db: Database = Depends(get_db)):
    return CarService(db).get_stats()


@router.get("/{car_id}", response_model=CarResponse)
def get_car(car_id: str, db: Database = Depends(get_db)):
    return CarService(db).get_car(car_id)


@router.put(
    "/{car_id}",
    response_model=CarResponse,
    dependencies=[Depends(require_admin)],
)
def update_car(car_id: str, payload: CarUpdateRequest, db: Database = Depends(get_db)):
    return CarService(db).update_car(car_id, payload)


@router.delete(
    "/{car_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_car(car_id: str, db: Database = Depends(get_db)):
    CarService(db).delete_car(car_id)
    return MessageResponse(message="Car deleted successfully")
