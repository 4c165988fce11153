"""
Business logic for reviews.

Reviews are append-only.  The public listing is the latest ten by
insertion order, newest first, with the author's username attached.
"""

import logging
from typing import Any, Dict, List

from ..core.errors import ValidationFailed
from ..core.store import get_ledger
from ..models import Review
from ..schemas.review import ReviewCreate, ReviewRead

logger = logging.getLogger(__name__)

PUBLIC_REVIEW_LIMIT = 10


class ReviewService:
    """Service for customer reviews."""

    @classmethod
    async def create_review(cls, data: ReviewCreate, current_user: Dict[str, Any]) -> Review:
        """Store a review by ``current_user``.

        Raises ``ValidationFailed`` if the rating is outside 1 to 5.
        """
        if not 1 <= data.rating <= 5:
            raise ValidationFailed("Rating must be between 1 and 5")
        review = get_ledger().add_review(
            user_id=current_user["id"],
            rating=data.rating,
            comment=data.comment,
            order_id=data.order_id,
        )
        logger.info("Review %s added by user %s (rating %s)", review.id, review.user_id, review.rating)
        return review

    @classmethod
    async def list_recent(cls, limit: int = PUBLIC_REVIEW_LIMIT) -> List[ReviewRead]:
        ledger = get_ledger()
        result = []
        for review in ledger.recent_reviews(limit):
            user = ledger.get_user(review.user_id)
            result.append(ReviewRead(**review.model_dump(), username=user.username if user else None))
        return result
