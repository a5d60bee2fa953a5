"""
Cart API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.exceptions import NotFoundError
from storefront.services.cart_service import CartService
from storefront.schemas.cart import Cart, CartQuote

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/quote", response_model=CartQuote, summary="Price a cart")
def quote_cart(cart: Cart, db: Session = Depends(get_db)):
    """
    Price the client's cart with current product prices

    Lines for the same product are merged.
    """
    try:
        return CartService(db).quote(cart)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
