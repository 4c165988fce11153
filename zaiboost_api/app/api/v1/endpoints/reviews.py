"""
Review endpoints for API v1.

Anyone can read the latest reviews; posting one requires a token.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from zaiboost_api.app.core.security import get_current_user
from zaiboost_api.app.schemas.review import ReviewCreate, ReviewCreated, ReviewRead
from zaiboost_api.app.services.review_service import ReviewService

router = APIRouter()


@router.get("", response_model=List[ReviewRead])
async def list_reviews() -> List[ReviewRead]:
    """The ten most recent reviews, newest first."""
    return await ReviewService.list_recent()


@router.post("", response_model=ReviewCreated, status_code=status.HTTP_201_CREATED)
async def create_review(
    data: ReviewCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> ReviewCreated:
    review = await ReviewService.create_review(data, current_user)
    return ReviewCreated(id=review.id)
