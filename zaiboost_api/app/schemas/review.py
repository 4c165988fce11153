"""
Pydantic schemas for customer reviews.

Any signed-in user may leave a review, optionally tied to one of their
orders.  The public listing shows the latest reviews with the author's
username.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ReviewCreate(BaseModel):
    """Schema for creating a new review.

    The 1 to 5 rating range is enforced by ``ReviewService``.
    """

    order_id: Optional[int] = Field(None, description="Order the review refers to")
    rating: int = Field(..., description="Rating from 1 to 5")
    comment: str = Field(..., min_length=1, description="Review text")

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v: str) -> str:
        """Trim whitespace from the comment and enforce a maximum length."""
        v = v.strip()
        if len(v) > 1000:
            raise ValueError("Comment must be 1000 characters or fewer")
        return v


class ReviewCreated(BaseModel):
    id: int


class ReviewRead(BaseModel):
    id: int
    order_id: Optional[int]
    user_id: int
    rating: int
    comment: str
    created_at: str
    username: Optional[str] = None
