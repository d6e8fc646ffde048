"""
Products API endpoints
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog_api.api.responses import CreatedResponse, DataResponse, MessageResponse, Page
from catalog_api.errors import NotFoundError, translate_storage_errors
from catalog_api.repositories.product import ProductRepository, get_product_repository
from catalog_api.utils.logger import get_logger
from catalog_api.utils.validators import parse_model, parse_uuid, require_fields

router = APIRouter()
logger = get_logger(__name__)

REQUIRED_FIELDS = ("artical_no", "product_service", "price", "unit")
DUPLICATE_MESSAGE = "Product with this article number already exists"
NOT_FOUND_MESSAGE = "Product not found"
MAX_LIMIT = 1000
# Keeps page * limit inside a signed 64-bit SQL integer
MAX_PAGE = (2 ** 63 - 1) // MAX_LIMIT


class ProductResponse(BaseModel):
    id: UUID
    artical_no: str
    product_service: str
    in_price: Decimal
    price: Decimal
    unit: str
    in_stock: int
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    # Article numbers may arrive as JSON numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    artical_no: str = Field(min_length=1)
    product_service: str = Field(min_length=1, max_length=255)
    in_price: Decimal = Field(Decimal("0.00"), max_digits=10, decimal_places=2)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    unit: str = Field(min_length=1, max_length=50)
    in_stock: int = 0
    description: Optional[str] = None
    is_active: bool = True


class ProductUpdate(BaseModel):
    """Updatable columns; anything else in the body is ignored"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    artical_no: Optional[str] = Field(None, min_length=1)
    product_service: Optional[str] = Field(None, min_length=1, max_length=255)
    in_price: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    price: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    in_stock: Optional[int] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator(
        "artical_no", "product_service", "in_price", "price", "unit", "in_stock", "is_active"
    )
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value


def _product_id(raw_id: str) -> UUID:
    # A malformed id can never match a row
    product_id = parse_uuid(raw_id)
    if product_id is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return product_id


@router.post(
    "/product",
    response_model=CreatedResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    payload: Optional[Dict[str, Any]] = Body(None),
    repo: ProductRepository = Depends(get_product_repository),
):
    """Create a product; article numbers are unique"""
    data = parse_model(ProductCreate, require_fields(payload, REQUIRED_FIELDS))

    with translate_storage_errors("Create product", conflict_message=DUPLICATE_MESSAGE):
        product = await repo.create(data.model_dump())

    logger.info(f"Created product {product.id} ({product.artical_no})")
    return CreatedResponse[ProductResponse](
        data=ProductResponse.model_validate(product),
        message="Product created successfully",
    )


@router.get("/product", response_model=DataResponse[Page[ProductResponse]])
async def list_products(
    page: int = Query(0, ge=0, le=MAX_PAGE),
    limit: int = Query(50, ge=1, le=MAX_LIMIT),
    artical_no: Optional[str] = None,
    repo: ProductRepository = Depends(get_product_repository),
):
    """List active products, newest first"""
    with translate_storage_errors("List products"):
        count, rows = await repo.list_active(limit=limit, offset=page * limit, artical_no=artical_no)

    return DataResponse[Page[ProductResponse]](
        data=Page[ProductResponse](
            count=count,
            rows=[ProductResponse.model_validate(row) for row in rows],
        )
    )


@router.get("/product/{product_id}", response_model=DataResponse[ProductResponse])
async def get_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    """Get a single product"""
    pk = _product_id(product_id)
    with translate_storage_errors("Get product"):
        product = await repo.find_by_id(pk)
    if not product:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return DataResponse[ProductResponse](data=ProductResponse.model_validate(product))


@router.put("/product/{product_id}", response_model=DataResponse[ProductResponse])
async def update_product(
    product_id: str,
    data: ProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
):
    """Update a product with the supplied fields only"""
    pk = _product_id(product_id)
    updates = data.model_dump(exclude_unset=True)

    with translate_storage_errors("Update product", conflict_message=DUPLICATE_MESSAGE):
        updated = await repo.update(pk, updates)
        product = await repo.find_by_id(pk) if updated else None

    # Deleted concurrently between the update and the re-read counts as missing too
    if not product:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info(f"Updated product {pk}: {sorted(updates)}")
    return DataResponse[ProductResponse](data=ProductResponse.model_validate(product))


@router.delete("/product/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    """Delete a product permanently"""
    pk = _product_id(product_id)
    with translate_storage_errors("Delete product"):
        deleted = await repo.delete(pk)
    if not deleted:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info(f"Deleted product {pk}")
    return MessageResponse(message="Product deleted successfully")
