"""
Review Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc

from storefront.models.review import Review


class ReviewRepository:
    """Repository for Review operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_product(self, product_id: int) -> List[Review]:
        """Reviews of a product, newest first"""
        return self.db.query(Review).options(
            joinedload(Review.user)
        ).filter(
            Review.product_id == product_id
        ).order_by(desc(Review.created_at), desc(Review.id)).all()

    def get_by_product_and_user(self, product_id: int, user_id: int) -> Optional[Review]:
        return self.db.query(Review).filter(
            Review.product_id == product_id,
            Review.user_id == user_id
        ).first()

    def create(self, review_data: dict) -> Review:
        """Create new review"""
        review = Review(**review_data)
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def update(self, review: Review, rating: int, comment: str) -> Review:
        """Replace rating and comment of an existing review"""
        review.rating = rating
        review.comment = comment
        self.db.commit()
        self.db.refresh(review)
        return review
