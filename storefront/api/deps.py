"""
Shared API dependencies: caller identity and service wiring
"""
from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.user import User
from storefront.publishers.event_publisher import EventPublisher
from storefront.repositories.user_repository import UserRepository
from storefront.services.order_service import OrderService


def get_current_user_optional(
    x_user_id: Optional[int] = Header(None, description="Identifier of the signed-in user"),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Resolve the caller from the identity header

    Session handling lives in front of this service; it forwards the
    signed-in user's id. Missing or unknown ids resolve to a guest.
    """
    if x_user_id is None:
        return None
    return UserRepository(db).get_by_id(x_user_id)


def get_current_user(user: Optional[User] = Depends(get_current_user_optional)) -> User:
    """Dependency requiring a signed-in user"""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency requiring an administrator"""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized. Administrator permissions required."
        )
    return user


def get_event_publisher() -> EventPublisher:
    """Dependency to get EventPublisher instance"""
    return EventPublisher()


def get_order_service(
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db, event_publisher=publisher)
