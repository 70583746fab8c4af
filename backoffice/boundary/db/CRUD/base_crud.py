"""
Base read operations for SQLAlchemy models.

Provides the generic lookups admins need to render list and show pages.

Dependencies: sqlalchemy
System role: Foundation for admin data access
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from backoffice.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for model reads.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def get_by_identity(
        self,
        session: AsyncSession,
        identity: Any,
        options: Sequence[ORMOption] | None = None,
    ) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            identity: Scalar primary key, or a tuple for composite keys
            options: Loader options such as selectinload, applied to the lookup

        Returns:
            Model instance if found, None otherwise
        """
        return await session.get(self.model, identity, options=options)

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
        options: Sequence[ORMOption] | None = None,
    ) -> Sequence[ModelT]:
        """
        Retrieve records with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of records to return
            offset: Number of records to skip
            options: Loader options such as selectinload, applied to the query

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).offset(offset)
        if options:
            stmt = stmt.options(*options)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession) -> int:
        """
        Count all records of the model.

        Args:
            session: Async database session

        Returns:
            Total number of records
        """
        stmt = select(func.count()).select_from(self.model)
        result = await session.execute(stmt)
        return result.scalar_one()
