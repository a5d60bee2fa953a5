"""
Product and Category Repositories - Data Access Layer
"""
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session, joinedload, Query

from storefront.models.product import Category, Product
from storefront.schemas.product import CategoryCreate, ProductCreate, ProductUpdate


class ProductRepository:
    """Repository for Product CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def _active(self) -> Query:
        return self.db.query(Product).options(
            joinedload(Product.category)
        ).filter(Product.is_deleted.is_(False))

    def _filtered(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> Query:
        query = self._active()
        if search:
            query = query.filter(Product.name.icontains(search, autoescape=True))
        if category:
            query = query.join(Product.category).filter(Category.name == category)
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)
        return query

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> List[Product]:
        """Get products matching the filters with pagination"""
        query = self._filtered(search, category, min_price, max_price)
        return query.order_by(Product.id).offset(skip).limit(limit).all()

    def count(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> int:
        """Count products matching the filters"""
        return self._filtered(search, category, min_price, max_price).count()

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get a non-deleted product by ID"""
        return self._active().filter(Product.id == product_id).first()

    def get_by_ids(self, product_ids: Iterable[int]) -> Dict[int, Product]:
        """Get non-deleted products keyed by ID"""
        ids = set(product_ids)
        if not ids:
            return {}
        products = self._active().filter(Product.id.in_(ids)).all()
        return {p.id: p for p in products}

    def get_related(self, product: Product, limit: int = 4) -> List[Product]:
        """Other products in the same category"""
        if product.category_id is None:
            return []
        return self._active().filter(
            Product.category_id == product.category_id,
            Product.id != product.id
        ).order_by(Product.id).limit(limit).all()

    def create(self, product_data: ProductCreate) -> Product:
        """Create new product"""
        product = Product(**product_data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product_id: int, product_data: ProductUpdate) -> Optional[Product]:
        """Update existing product"""
        product = self.get_by_id(product_id)
        if not product:
            return None

        # Update only provided fields
        update_data = product_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    def soft_delete(self, product_id: int) -> bool:
        """Flag product as deleted"""
        product = self.get_by_id(product_id)
        if not product:
            return False

        product.is_deleted = True
        self.db.commit()
        return True

    def decrement_stock(self, product: Product, quantity: int) -> Product:
        """
        Subtract quantity from product stock

        Changes are flushed but not committed; the caller owns the transaction.

        Raises:
            ValueError: If resulting stock would be negative
        """
        new_stock = product.stock - quantity
        if new_stock < 0:
            raise ValueError(f"Insufficient stock. Current: {product.stock}, requested: {quantity}")

        product.stock = new_stock
        self.db.flush()
        return product


class CategoryRepository:
    """Repository for Category operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Category]:
        """Get all non-deleted categories by name"""
        return self.db.query(Category).filter(
            Category.is_deleted.is_(False)
        ).order_by(Category.name).all()

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(
            Category.id == category_id,
            Category.is_deleted.is_(False)
        ).first()

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def create(self, category_data: CategoryCreate) -> Category:
        """Create new category"""
        category = Category(**category_data.model_dump())
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category
