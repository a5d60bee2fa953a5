"""
Review API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.database import get_db
from storefront.exceptions import NotFoundError
from storefront.models.user import User
from storefront.services.review_service import ReviewService
from storefront.schemas.review import ReviewCreate, ReviewResponse, ProductReviewsResponse

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency to get ReviewService instance"""
    return ReviewService(db)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED, summary="Submit review")
def submit_review(
    review_data: ReviewCreate,
    response: Response,
    user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """
    Review a product

    A second review of the same product by the same user replaces the
    first one and returns 200.

    - **product_id**: Product ID
    - **rating**: 1 to 5
    - **comment**: At least 3 characters
    """
    try:
        review, created = service.submit_review(user, review_data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    if not created:
        response.status_code = status.HTTP_200_OK
    return review


@router.get("/{product_id}", response_model=ProductReviewsResponse, summary="Get product reviews")
def get_product_reviews(
    product_id: int,
    service: ReviewService = Depends(get_review_service)
):
    """Reviews of a product, newest first, with the average rating"""
    try:
        return service.get_product_reviews(product_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
