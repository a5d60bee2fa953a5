"""
Pydantic schemas for product reviews
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class ReviewCreate(BaseModel):
    """Schema for submitting a review"""
    product_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=3, description="At least 3 characters")


class ReviewAuthor(BaseModel):
    id: int
    name: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    """Schema for review response"""
    id: int
    product_id: int
    user_id: int
    rating: int
    comment: str
    created_at: datetime
    updated_at: datetime
    user: Optional[ReviewAuthor] = None

    model_config = ConfigDict(from_attributes=True)


class ProductReviewsResponse(BaseModel):
    """Reviews of one product with aggregate rating"""
    reviews: List[ReviewResponse]
    total_reviews: int
    average_rating: float
