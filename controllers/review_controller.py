from typing import Dict, Any, Optional
import logging
from bson import ObjectId
from beanie import PydanticObjectId
from database.models import Review
from middleware.errors import (
    InvalidParameter,
    ValidationFailure,
    NotFound,
    PersistenceFailure,
)
from services import query_builder
from services.validators import ReviewValidator
from config import variable

logger = logging.getLogger("craftcode.reviews")

SEARCH_FIELDS = ("name", "email", "subject", "message", "userType", "rankAndPosition")


class ReviewController:
    """Controller for review listing, submission and moderation"""

    def __init__(self):
        self.validator = ReviewValidator()

    async def list_reviews(
        self,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Filtered, paginated reviews, newest first"""
        page_number, page_size = query_builder.parse_pagination(
            page, limit, default_limit=variable.DEFAULT_PAGE_LIMIT
        )
        query = query_builder.build_filter(
            search, SEARCH_FIELDS, status=query_builder.parse_status(status)
        )

        try:
            total_reviews = await Review.find(query).count()
            reviews = await (
                Review.find(query)
                .sort("-createdAt")
                .skip(query_builder.skip_for(page_number, page_size))
                .limit(page_size)
                .to_list()
            )
        except Exception:
            logger.exception(f"Get reviews error (query={query})")
            raise PersistenceFailure("Failed to fetch reviews")

        return {
            "reviews": [review.to_response() for review in reviews],
            "totalPages": query_builder.total_pages(total_reviews, page_size),
        }

    def debug_echo(self, payload: Any) -> Optional[Dict[str, Any]]:
        """
        Echo the payload back instead of saving it, when REVIEWS_DEBUG_ECHO is on
        and the caller asked for it with ``debug: true`` plus an email.

        Returns None when the request should go through normal validation.
        """
        if not isinstance(payload, dict) or "debug" not in payload:
            return None
        debug = payload.pop("debug")
        if variable.REVIEWS_DEBUG_ECHO and debug is True and payload.get("email"):
            logger.warning(f"Debug echo for review payload from {payload.get('email')}")
            return {"debug": True, "received": payload}
        return None

    async def create_review(self, payload: Any) -> Dict[str, Any]:
        """Validate and insert a review"""
        data = self.validator.validate(payload)

        review = Review(**data.model_dump())
        try:
            await review.insert()
        except Exception:
            logger.exception(f"Review submission error for {data.email}")
            raise PersistenceFailure("Failed to submit review")

        if review.id is None:
            logger.error(f"Review insert for {data.email} returned no id")
            raise PersistenceFailure("Failed to submit review")

        logger.info(f"Review {review.id} submitted by {data.email} ({data.user_type.value})")
        return {
            "success": True,
            "message": "Review submitted successfully",
            "id": str(review.id),
        }

    async def update_status(self, review_id: str, field: Any, value: Any) -> Dict[str, Any]:
        """Set the moderation flag of one review"""
        if not review_id or not ObjectId.is_valid(review_id):
            raise InvalidParameter("Invalid review ID")

        if field != "status" or not isinstance(value, bool):
            raise ValidationFailure(
                'Invalid field or value: field must be "status" and value must be a boolean'
            )

        try:
            review = await Review.get(PydanticObjectId(review_id))
            if review is not None:
                review.status = value
                await review.save()
        except Exception:
            logger.exception(f"Update review error for id={review_id}")
            raise PersistenceFailure("Failed to update review")

        if review is None:
            raise NotFound("Review not found")

        logger.info(f"Review {review_id} status set to {value}")
        return {
            "success": True,
            "message": "Review status updated successfully",
            "review": review.to_response(),
        }
