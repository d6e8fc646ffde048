"""
Product data access
"""
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import get_db
from catalog_api.models.product import Product
from catalog_api.repositories.base import Repository


class ProductRepository(Repository[Product]):
    model = Product

    async def list_active(
        self,
        limit: int,
        offset: int,
        artical_no: Optional[str] = None,
    ) -> Tuple[int, List[Product]]:
        filters = {"is_active": True}
        if artical_no:
            filters["artical_no"] = artical_no
        return await self.find_all(filters, limit=limit, offset=offset)


def get_product_repository(db: AsyncSession = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)
