import logging
from typing import Mapping, Optional

from fastapi import HTTPException, status
from pymongo.database import Database

from app.dtos import (
    PageResponse,
    ReviewCreateRequest,
    ReviewResponse,
    ReviewStatsResponse,
    ReviewUpdateRequest,
)
from app.models.entities.review import Review
from app.repositories import CarRepository, ReviewRepository
from app.services.filters import build_review_query, parse_object_id

logger = logging.getLogger(__name__)

RATINGS = range(1, 6)


def _serialize_review(review: Review) -> ReviewResponse:
    return ReviewResponse.model_validate(review.model_dump())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")


class ReviewService:
    def __init__(self, db: Database):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.car_repo = CarRepository(db)

    def list_reviews(
        self, params: Mapping[str, str], include_unapproved: bool = False
    ) -> PageResponse[ReviewResponse]:
        query = build_review_query(params, include_unapproved=include_unapproved)
        reviews, total = self.review_repo.paginate(query)
        return PageResponse[ReviewResponse].build(
            [_serialize_review(r) for r in reviews], total, query.page, query.limit
        )

    def create_review(self, payload: ReviewCreateRequest) -> ReviewResponse:
        """Public submission: always stored unapproved and unfeatured."""
        if not self.car_repo.find_by_id(payload.car_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Car not found")

        review = Review(
            **payload.model_dump(),
            is_approved=False,
            is_featured=False,
            is_admin_created=False,
        )
        created = self.review_repo.insert_one(review)
        logger.info("Review %s submitted for car %s", created.id, created.car_id)
        return _serialize_review(created)

    def update_review(self, review_id: str, payload: ReviewUpdateRequest) -> ReviewResponse:
        review = self.review_repo.update_one(review_id, payload.model_dump())
        if not review:
            raise _not_found()
        return _serialize_review(review)

    def approve_review(self, review_id: str) -> ReviewResponse:
        review = self.review_repo.update_one(review_id, {"is_approved": True})
        if not review:
            raise _not_found()
        logger.info("Review %s approved", review_id)
        return _serialize_review(review)

    def toggle_featured(self, review_id: str) -> ReviewResponse:
        existing = self.review_repo.find_by_id(review_id)
        if not existing:
            raise _not_found()
        review = self.review_repo.update_one(
            existing.id, {"is_featured": not existing.is_featured}
        )
        if not review:
            raise _not_found()
        return _serialize_review(review)

    def delete_review(self, review_id: str) -> None:
        if not self.review_repo.delete_one(review_id):
            raise _not_found()
        logger.info("Review %s deleted", review_id)

    def apply_action(self, review_id: str, action: str) -> Optional[ReviewResponse]:
        """Moderation entry point; reject and delete both remove the review."""
        if action == "approve":
            return self.approve_review(review_id)
        if action == "toggleFeatured":
            return self.toggle_featured(review_id)
        self.delete_review(review_id)
        return None

    def get_stats(self, car_id: str) -> ReviewStatsResponse:
        distribution = {rating: 0 for rating in RATINGS}
        identifier = parse_object_id(car_id)
        if identifier is not None:
            for rating, count in self.review_repo.rating_distribution(identifier).items():
                if rating in distribution:
                    distribution[rating] = count

        total = sum(distribution.values())
        average = 0.0
        if total:
            average = round(sum(r * c for r, c in distribution.items()) / total, 1)
        return ReviewStatsResponse(
            average_rating=average,
            total_reviews=total,
            rating_distribution=distribution,
        )
