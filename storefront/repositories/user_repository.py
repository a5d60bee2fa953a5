"""
User Repository - Data Access Layer
"""
from typing import Optional
from sqlalchemy.orm import Session

from storefront.models.user import User


class UserRepository:
    """Repository for User lookups"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get an active user by ID"""
        return self.db.query(User).filter(
            User.id == user_id,
            User.is_deleted.is_(False)
        ).first()