"""SQL Document Store — adapts an ORM model to the DocumentCollection contract.

Invariants:
    - Filters are field-equality only and must name mapped columns
    - count_case_folded matches lower(trim(column)); it cannot use the unique
      index and serves only the legacy fallback path
    - create_document commits immediately: the unique constraint is checked
      at write time, which is the only authoritative uniqueness check
    - IntegrityError → ConflictError; any other SQLAlchemyError → DatabaseError
    - The session is rolled back after any failed write
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from intake.core.errors import ConflictError, DatabaseError, ErrorContext
from intake.core.repository_protocols import DocumentPage
from intake.db.base import Base

logger = logging.getLogger(__name__)


class SqlDocumentCollection:
    """DocumentCollection backed by one SQLAlchemy table."""

    def __init__(self, db: AsyncSession, model: type[Base], page_size: int = 25):
        self._db = db
        self._model = model
        self._page_size = page_size

    @property
    def name(self) -> str:
        return self._model.__tablename__

    def _column(self, field: str):
        if field not in self._model.__table__.columns:
            raise ValueError(f"Unknown filter field for {self.name}: {field!r}")
        return getattr(self._model, field)

    def _conditions(self, filters: dict) -> list:
        return [self._column(k) == v for k, v in filters.items()]

    async def list_documents(self, **filters: object) -> DocumentPage:
        """Count and fetch the first page of rows matching every filter."""
        conditions = self._conditions(filters)
        try:
            total = await self._db.scalar(
                select(func.count()).select_from(self._model).where(*conditions),
            )
            result = await self._db.execute(
                select(self._model).where(*conditions).limit(self._page_size),
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"list {self.name} failed: {e}",
                context=ErrorContext(operation=f"list_{self.name}"),
            ) from e
        return DocumentPage(
            total=total or 0,
            items=[row.to_document() for row in result.scalars().all()],
        )

    async def count_case_folded(self, field: str, folded: str) -> int:
        """Rows whose field, trimmed and lowercased, equals `folded`."""
        column = self._column(field)
        try:
            total = await self._db.scalar(
                select(func.count())
                .select_from(self._model)
                .where(func.lower(func.trim(column)) == folded),
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"case-folded count on {self.name} failed: {e}",
                context=ErrorContext(operation=f"list_{self.name}"),
            ) from e
        return total or 0

    async def create_document(self, fields: dict) -> dict:
        """Insert one row; the store's unique constraints arbitrate races."""
        record = self._model(**fields)
        self._db.add(record)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.info(
                f"Uniqueness violation on {self.name}",
                extra={"operation": f"create_{self.name}"},
            )
            raise ConflictError(
                context=ErrorContext(
                    operation=f"create_{self.name}",
                    debug_info={"driver_error": str(e.orig)},
                ),
            ) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise DatabaseError(
                f"create {self.name} failed: {e}",
                context=ErrorContext(operation=f"create_{self.name}"),
            ) from e
        return record.to_document()
