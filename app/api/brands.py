from fastapi import APIRouter, Depends, Request, status
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import (
    BrandCreateRequest,
    BrandResponse,
    BrandStatsResponse,
    BrandUpdateRequest,
    MessageResponse,
    PageResponse,
)
from app.middleware.auth import require_admin
from app.services.brand_service import BrandService

router = APIRouter(prefix="/brands", tags=["Brands"])


@router.get("", response_model=PageResponse[BrandResponse])
def list_brands(request: Request, db: Database = Depends(get_db)):
    return BrandService(db).list_brands(request.query_params)


@router.post(
    "",
    response_model=BrandResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_brand(payload: BrandCreateRequest, db: Database = Depends(get_db)):
    return BrandService(db).create_brand(payload)


@router.get(
    "/stats",
    response_model=BrandStatsResponse,
    dependencies=[Depends(require_admin)],
)
def brand_stats(db: Database = Depends(get_db)):
    return BrandService(db).get_stats()


@router.get("/slug/{slug}", response_model=BrandResponse)
def get_brand_by_slug(slug: str, db: Database = Depends(get_db)):
    return BrandService(db).get_brand_by_slug(slug)


@router.get("/{brand_id}", response_model=BrandResponse)
def get_brand(brand_id: str, db: Database = Depends(get_db)):
    return BrandService(db).get_brand(brand_id)


@router.put(
    "/{brand_id}",
    response_model=BrandResponse,
    dependencies=[Depends(require_admin)],
)
def update_brand(
    brand_id: str, payload: BrandUpdateRequest, db: Database = Depends(get_db)
):
    return BrandService(db).update_brand(brand_id, payload)


@router.delete(
    "/{brand_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_brand(brand_id: str, db: Database = Depends(get_db)):
    BrandService(db).delete_brand(brand_id)
    return MessageResponse(message="Brand deleted successfully")
