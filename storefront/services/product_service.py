"""
Product Service - Business Logic Layer
"""
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session

from storefront.exceptions import DuplicateError, NotFoundError
from storefront.repositories.product_repository import ProductRepository, CategoryRepository
from storefront.schemas.product import (
    CategoryCreate,
    CategoryResponse,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)


class ProductService:
    """Service layer for catalog business logic"""

    def __init__(self, db: Session):
        self.repository = ProductRepository(db)
        self.category_repository = CategoryRepository(db)

    def get_all_products(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> ProductListResponse:
        """Get filtered products with pagination"""
        filters = dict(search=search, category=category, min_price=min_price, max_price=max_price)
        products = self.repository.get_all(skip=skip, limit=limit, **filters)
        total = self.repository.count(**filters)

        return ProductListResponse(
            products=[ProductResponse.model_validate(p) for p in products],
            total=total
        )

    def get_product_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get product by ID"""
        product = self.repository.get_by_id(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)

    def get_related_products(self, product_id: int, limit: int = 4) -> Optional[List[ProductResponse]]:
        """Products from the same category, None if the product does not exist"""
        product = self.repository.get_by_id(product_id)
        if not product:
            return None
        return [ProductResponse.model_validate(p) for p in self.repository.get_related(product, limit)]

    def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and not self.category_repository.get_by_id(category_id):
            raise NotFoundError("Category", category_id)

    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """
        Create new product

        Raises:
            NotFoundError: If category_id refers to an unknown category
        """
        self._check_category(product_data.category_id)
        product = self.repository.create(product_data)
        return ProductResponse.model_validate(product)

    def update_product(self, product_id: int, product_data: ProductUpdate) -> Optional[ProductResponse]:
        """Update existing product"""
        if "category_id" in product_data.model_fields_set:
            self._check_category(product_data.category_id)
        product = self.repository.update(product_id, product_data)
        if not product:
            return None
        return ProductResponse.model_validate(product)

    def delete_product(self, product_id: int) -> bool:
        """Soft delete product"""
        return self.repository.soft_delete(product_id)

    def list_categories(self) -> List[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in self.category_repository.get_all()]

    def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        """
        Create new category

        Raises:
            DuplicateError: If the name is already taken
        """
        if self.category_repository.get_by_name(category_data.name):
            raise DuplicateError(f"Category '{category_data.name}' already exists")
        category = self.category_repository.create(category_data)
        return CategoryResponse.model_validate(category)
