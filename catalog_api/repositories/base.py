"""
Generic async data-access layer shared by the resource repositories
"""
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    create / find_all / find_by_id / update / delete over one mapped table.

    Every call talks to the database; nothing is cached between calls.
    Errors from SQLAlchemy propagate unchanged.
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def _ordering(self) -> Sequence[Any]:
        # Newest first; id breaks ties so pages stay stable
        return (self.model.created_at.desc(), self.model.id.desc())

    def _where(self, filters: Optional[Mapping[str, Any]]) -> List[Any]:
        return [getattr(self.model, key) == value for key, value in (filters or {}).items()]

    async def create(self, values: Dict[str, Any]) -> ModelT:
        instance = self.model(**values)
        self.session.add(instance)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(instance)
        return instance

    async def find_all(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[int, List[ModelT]]:
        conditions = self._where(filters)

        count_query = select(func.count()).select_from(self.model).where(*conditions)
        count = (await self.session.execute(count_query)).scalar_one()

        query = select(self.model).where(*conditions).order_by(*self._ordering())
        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)
        result = await self.session.execute(query)
        return count, list(result.scalars().all())

    async def find_by_id(self, id: UUID) -> Optional[ModelT]:
        return await self.session.get(self.model, id, populate_existing=True)

    async def update(self, id: UUID, values: Dict[str, Any]) -> int:
        """Apply ``values`` to the row; returns the number of rows matched"""
        if not values:
            return 1 if await self.find_by_id(id) is not None else 0
        statement = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount

    async def delete(self, id: UUID) -> int:
        statement = (
            delete(self.model)
            .where(self.model.id == id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount
