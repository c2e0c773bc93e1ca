from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import (
    Envelope,
    PageResponse,
    ReviewActionRequest,
    ReviewCreateRequest,
    ReviewResponse,
    ReviewStatsResponse,
    ReviewUpdateRequest,
)
from app.middleware.auth import get_current_user, require_admin
from app.services.filters import parse_bool
from app.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])

ACTION_MESSAGES = {
    "approve": "Review approved successfully",
    "reject": "Review rejected and deleted",
    "toggleFeatured": "Review featured status updated",
    "delete": "Review deleted successfully",
}


@router.get("", response_model=PageResponse[ReviewResponse])
def list_reviews(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: Database = Depends(get_db),
):
    """Approved reviews only, unless an admin asks for `includeUnapproved=true`."""
    include_unapproved = bool(parse_bool(request.query_params.get("includeUnapproved")))
    if include_unapproved:
        require_admin(get_current_user(authorization, db))
    return ReviewService(db).list_reviews(
        request.query_params, include_unapproved=include_unapproved
    )


@router.post(
    "",
    response_model=Envelope[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_review(payload: ReviewCreateRequest, db: Database = Depends(get_db)):
    review = ReviewService(db).create_review(payload)
    return Envelope[ReviewResponse](
        data=review,
        message="Review submitted successfully. It will be visible after approval.",
    )


@router.get("/stats/{car_id}", response_model=Envelope[ReviewStatsResponse])
def review_stats(car_id: str, db: Database = Depends(get_db)):
    return Envelope[ReviewStatsResponse](data=ReviewService(db).get_stats(car_id))


@router.put(
    "/{review_id}",
    response_model=Envelope[ReviewResponse],
    dependencies=[Depends(require_admin)],
)
def update_review(
    review_id: str, payload: ReviewUpdateRequest, db: Database = Depends(get_db)
):
    review = ReviewService(db).update_review(review_id, payload)
    return Envelope[ReviewResponse](data=review, message="Review updated successfully")


@router.patch(
    "/{review_id}",
    response_model=Envelope[ReviewResponse],
    dependencies=[Depends(require_admin)],
)
def moderate_review(
    review_id: str, payload: ReviewActionRequest, db: Database = Depends(get_db)
):
    review = ReviewService(db).apply_action(review_id, payload.action)
    return Envelope[ReviewResponse](data=review, message=ACTION_MESSAGES[payload.action])


@router.delete(
    "/{review_id}",
    response_model=Envelope[ReviewResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def delete_review(review_id: str, db: Database = Depends(get_db)):
    ReviewService(db).delete_review(review_id)
    return Envelope[ReviewResponse](message="Review deleted successfully")
