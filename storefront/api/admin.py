"""
Admin API endpoints: order management and dashboard
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from storefront.api.deps import get_order_service, require_admin
from storefront.config import settings
from storefront.database import get_db
from storefront.exceptions import InvalidStatusError, InvalidTransitionError, NotFoundError
from storefront.services.dashboard_service import DashboardService
from storefront.services.order_service import OrderService
from storefront.schemas.order import (
    DashboardStats,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate
)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _invalid_status(e: InvalidStatusError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": str(e),
            "valid_statuses": e.valid_values
        }
    )


@router.get("/orders", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100, description="Orders per page"),
    status_filter: Optional[str] = Query(None, alias="status", description="Status filter or 'all'"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve orders with pagination, newest first

    - **page**: Page number (default: 1)
    - **limit**: Orders per page
    - **status**: Only orders with this status; `all` for every status
    """
    try:
        return service.list_orders(page=page, limit=limit, status=status_filter)
    except InvalidStatusError as e:
        raise _invalid_status(e)


@router.get("/orders/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID

    - **order_id**: Order ID
    """
    try:
        return service.get_order(order_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.patch("/orders/{order_id}/status", response_model=OrderResponse, summary="Update order status")
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Move an order through its lifecycle

    Allowed transitions:
    - PENDING → PAGATO, ANNULLATO
    - PAGATO → SPEDITO, ANNULLATO
    - SPEDITO → CONSEGNATO, ANNULLATO
    - CONSEGNATO, ANNULLATO: final

    - **order_id**: Order ID
    - **status**: New status
    """
    try:
        return service.update_order_status(order_id, status_data.status)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InvalidStatusError as e:
        raise _invalid_status(e)
    except InvalidTransitionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": str(e),
                "current_status": e.current_status,
                "requested_status": e.requested_status,
                "allowed_transitions": e.allowed
            }
        )


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete order")
def delete_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Soft delete an order; it disappears from listings but stays in the database

    - **order_id**: Order ID
    """
    try:
        service.delete_order(order_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return None


@router.get("/stats", response_model=DashboardStats, summary="Dashboard statistics")
def get_stats(db: Session = Depends(get_db)):
    """Revenue today and this month, orders by status, top five products"""
    return DashboardService(db).get_stats()
