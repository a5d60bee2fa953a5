"""
Review Service - Business Logic Layer
"""
from typing import Tuple
from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError
from storefront.models.user import User
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.review_repository import ReviewRepository
from storefront.schemas.review import ReviewCreate, ReviewResponse, ProductReviewsResponse


class ReviewService:
    """Service layer for product reviews"""

    def __init__(self, db: Session):
        self.repository = ReviewRepository(db)
        self.product_repository = ProductRepository(db)

    def submit_review(self, user: User, review_data: ReviewCreate) -> Tuple[ReviewResponse, bool]:
        """
        Create the user's review of a product, or replace the existing one

        Returns:
            The stored review and whether it was newly created

        Raises:
            NotFoundError: If the product does not exist
        """
        if not self.product_repository.get_by_id(review_data.product_id):
            raise NotFoundError("Product", review_data.product_id)

        existing = self.repository.get_by_product_and_user(review_data.product_id, user.id)
        if existing:
            review = self.repository.update(existing, review_data.rating, review_data.comment)
            return ReviewResponse.model_validate(review), False

        review = self.repository.create({
            "product_id": review_data.product_id,
            "user_id": user.id,
            "rating": review_data.rating,
            "comment": review_data.comment
        })
        return ReviewResponse.model_validate(review), True

    def get_product_reviews(self, product_id: int) -> ProductReviewsResponse:
        """Reviews of a product with count and average rating"""
        if not self.product_repository.get_by_id(product_id):
            raise NotFoundError("Product", product_id)

        reviews = self.repository.get_by_product(product_id)
        total = len(reviews)
        average = sum(r.rating for r in reviews) / total if total else 0.0

        return ProductReviewsResponse(
            reviews=[ReviewResponse.model_validate(r) for r in reviews],
            total_reviews=total,
            average_rating=average
        )
