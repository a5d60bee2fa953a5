"""
Cart Service - prices a client-held cart
"""
from decimal import Decimal
from typing import Dict, Iterable, List
from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError
from storefront.repositories.product_repository import ProductRepository
from storefront.schemas.cart import Cart, CartLine, CartQuote, CartQuoteLine


def merge_lines(lines: Iterable[CartLine]) -> List[CartLine]:
    """Combine lines for the same product, keeping first-seen order"""
    quantities: Dict[int, int] = {}
    for line in lines:
        quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity
    return [CartLine(product_id=pid, quantity=qty) for pid, qty in quantities.items()]


class CartService:
    """Service layer for cart pricing"""

    def __init__(self, db: Session):
        self.product_repository = ProductRepository(db)

    def quote(self, cart: Cart) -> CartQuote:
        """
        Price every cart line with the live product price

        Raises:
            NotFoundError: If a product does not exist
        """
        lines = merge_lines(cart.items)
        products = self.product_repository.get_by_ids(line.product_id for line in lines)

        quoted = []
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise NotFoundError("Product", line.product_id)
            quoted.append(CartQuoteLine(
                product_id=product.id,
                name=product.name,
                image_url=product.image_url,
                price=product.price,
                quantity=line.quantity,
                subtotal=product.price * line.quantity,
                in_stock=product.stock >= line.quantity
            ))

        return CartQuote(
            items=quoted,
            total_items=sum(line.quantity for line in quoted),
            total_price=sum((line.subtotal for line in quoted), Decimal("0"))
        )
