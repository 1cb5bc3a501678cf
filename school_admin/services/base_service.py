# school_admin/services/base_service.py
"""Base service with common store operations, all scoped to one UnitOfWork."""
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from typing import Type, Any, Dict, Optional, Tuple, TypeVar, Generic

from ..core.unit_of_work import UnitOfWork

# Define generic type
T = TypeVar('T')


class BaseService(Generic[T]):
    def __init__(self, model: Type[T], uow: UnitOfWork):
        self.model = model
        self.uow = uow

    @property
    def db(self):
        return self.uow.session

    async def get_by(self, **filters) -> Optional[T]:
        stmt = select(self.model).filter_by(**filters)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_or_create(self, lookup: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> Tuple[T, bool]:
        """Select by `lookup`, inserting `lookup | defaults` when absent.

        The insert runs inside a savepoint; if a concurrent transaction wins
        the unique constraint, the savepoint is rolled back and the winner's
        row is returned instead.
        """
        existing = await self.get_by(**lookup)
        if existing is not None:
            return existing, False

        try:
            async with self.uow.savepoint():
                obj = self.model(**{**lookup, **(defaults or {})})
                self.db.add(obj)
                await self.db.flush()
            return obj, True
        except IntegrityError:
            existing = await self.get_by(**lookup)
            if existing is None:
                raise
            return existing, False

    async def update_fields(self, obj: T, values: Dict[str, Any]) -> T:
        for key, value in values.items():
            setattr(obj, key, value)
        await self.db.flush()
        return obj

    async def delete_where(self, **filters) -> int:
        """Delete every row matching `filters`; returns the number removed."""
        stmt = delete(self.model).filter_by(**filters)
        result = await self.db.execute(stmt)
        return result.rowcount


class NaturalKeyService(BaseService[T]):
    """Service for entities matched by a unique business key (email or code)."""
    natural_key: str = "code"

    async def get_by_natural_key(self, value: str) -> Optional[T]:
        return await self.get_by(**{self.natural_key: value})

    async def upsert(self, key_value: str, name: str) -> T:
        """Find or create by natural key, then always write the display name."""
        obj, created = await self.find_or_create({self.natural_key: key_value}, {"name": name})
        if not created:
            await self.update_fields(obj, {"name": name})
        return obj
