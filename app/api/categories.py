from typing import List, Union

from fastapi import APIRouter, Depends, Request, status
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryStatsResponse,
    CategoryUpdateRequest,
    DataResponse,
    MessageResponse,
    PageResponse,
)
from app.middleware.auth import require_admin
from app.services.category_service import CategoryService
from app.services.filters import parse_bool

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=Union[PageResponse[CategoryResponse], DataResponse[List[CategoryResponse]]],
    response_model_exclude_none=True,
)
def list_categories(request: Request, db: Database = Depends(get_db)):
    """Paginated categories, or every category with live car counts
    when `withCarCounts=true`."""
    service = CategoryService(db)
    if parse_bool(request.query_params.get("withCarCounts")):
        return DataResponse[List[CategoryResponse]](data=service.list_with_car_counts())
    return service.list_categories(request.query_params)


@router.post(
    "",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: CategoryCreateRequest, db: Database = Depends(get_db)):
    return CategoryService(db).create_category(payload)


@router.get(
    "/stats",
    response_model=CategoryStatsResponse,
    dependencies=[Depends(require_admin)],
)
def category_stats(db: Database = Depends(get_db)):
    return CategoryService(db).get_stats()


@router.get(
    "/slug/{slug}", response_model=CategoryResponse, response_model_exclude_none=True
)
def get_category_by_slug(slug: str, db: Database = Depends(get_db)):
    return CategoryService(db).get_category_by_slug(slug)


@router.get(
    "/{category_id}", response_model=CategoryResponse, response_model_exclude_none=True
)
def get_category(category_id: str, db: Database = Depends(get_db)):
    return CategoryService(db).get_category(category_id)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def update_category(
    category_id: str, payload: CategoryUpdateRequest, db: Database = Depends(get_db)
):
    return CategoryService(db).update_category(category_id, payload)


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_category(category_id: str, db: Database = Depends(get_db)):
    CategoryService(db).delete_category(category_id)
    return MessageResponse(message="Category deleted successfully")
