"""
Catalog API endpoints
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from storefront.api.deps import require_admin
from storefront.database import get_db
from storefront.exceptions import DuplicateError, NotFoundError
from storefront.services.product_service import ProductService
from storefront.schemas.product import (
    CategoryCreate,
    CategoryResponse,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)

router = APIRouter(prefix="/products", tags=["products"])
categories_router = APIRouter(prefix="/categories", tags=["categories"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(db)


def _not_found(product_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product with id={product_id} not found"
    )


@router.get("", response_model=ProductListResponse, summary="Get products")
def get_products(
    search: Optional[str] = Query(None, description="Case-insensitive name search"),
    category: Optional[str] = Query(None, description="Category name"),
    min_price: Optional[Decimal] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Maximum price"),
    skip: int = Query(0, ge=0, description="Number of products to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of products to return"),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve catalog products with filters and pagination

    - **search**: Match in product name
    - **category**: Exact category name
    - **min_price** / **max_price**: Inclusive price range
    - **skip**: Number of products to skip (default: 0)
    - **limit**: Maximum number of products to return (default: 100, max: 1000)
    """
    return service.get_all_products(
        skip=skip,
        limit=limit,
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price
    )


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve a specific product by ID

    - **product_id**: Product ID
    """
    product = service.get_product_by_id(product_id)
    if not product:
        raise _not_found(product_id)
    return product


@router.get("/{product_id}/related", response_model=List[ProductResponse], summary="Get related products")
def get_related_products(
    product_id: int,
    limit: int = Query(4, ge=1, le=20),
    service: ProductService = Depends(get_product_service)
):
    """Other products from the same category"""
    products = service.get_related_products(product_id, limit)
    if products is None:
        raise _not_found(product_id)
    return products


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    dependencies=[Depends(require_admin)]
)
def create_product(
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product

    - **name**: Product name (required)
    - **description**: Product description (optional)
    - **price**: Product price (required, must be positive)
    - **stock**: Stock quantity (required, must be non-negative)
    - **category_id**: Category ID (optional)
    - **image_url**: Product image URL (optional)
    """
    try:
        return service.create_product(product_data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update product",
    dependencies=[Depends(require_admin)]
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product

    All fields are optional. Only provided fields will be updated.

    - **product_id**: Product ID
    """
    try:
        product = service.update_product(product_id, product_data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    if not product:
        raise _not_found(product_id)
    return product


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product",
    dependencies=[Depends(require_admin)]
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """
    Soft delete a product

    - **product_id**: Product ID
    """
    if not service.delete_product(product_id):
        raise _not_found(product_id)
    return None


@categories_router.get("", response_model=List[CategoryResponse], summary="Get categories")
def get_categories(service: ProductService = Depends(get_product_service)):
    """All categories, by name"""
    return service.list_categories()


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    dependencies=[Depends(require_admin)]
)
def create_category(
    category_data: CategoryCreate,
    service: ProductService = Depends(get_product_service)
):
    """Create a new category with a unique name"""
    try:
        return service.create_category(category_data)
    except DuplicateError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
