"""
Term data access
"""
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import get_db
from catalog_api.models.term import Term
from catalog_api.repositories.base import Repository


class TermRepository(Repository[Term]):
    model = Term

    async def list_active(self, language: str, section_key: Optional[str] = None) -> List[Term]:
        filters = {"language": language, "is_active": True}
        if section_key is not None:
            filters["section_key"] = section_key
        _, rows = await self.find_all(filters)
        return rows


def get_term_repository(db: AsyncSession = Depends(get_db)) -> TermRepository:
    return TermRepository(db)
