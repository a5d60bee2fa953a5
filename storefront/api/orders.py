"""
Order API endpoints (checkout and customer order history)
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from storefront.api.deps import get_current_user, get_current_user_optional, get_order_service
from storefront.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    PermissionDeniedError
)
from storefront.models.user import User
from storefront.services.order_service import OrderService
from storefront.schemas.order import OrderCreate, OrderResponse

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Create order")
def create_order(
    order_data: OrderCreate,
    user: Optional[User] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service)
):
    """
    Complete checkout and create an order

    Process:
    1. Validate products exist and have enough stock
    2. Snapshot unit prices and calculate the total
    3. Save order and items, decrement stock
    4. Publish OrderCreated event to RabbitMQ

    Guests may check out; the order is then not linked to a user.
    """
    try:
        return service.create_order(order_data, user)
    except EmptyCartError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InsufficientStockError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


@router.get("", response_model=List[OrderResponse], summary="Get my orders")
def get_my_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Orders of the signed-in customer, newest first"""
    return service.list_customer_orders(user)


@router.get("/{order_id}", response_model=OrderResponse, summary="Get my order by ID")
def get_my_order(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve one of the signed-in customer's orders

    - **order_id**: Order ID
    """
    try:
        return service.get_customer_order(user, order_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except PermissionDeniedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
