"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.churchhub.schemas.pagination import decode_cursor, encode_cursor

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def flush(self) -> None:
        """Flush pending inserts so database defaults and constraints apply."""
        await self.session.flush()

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute keyset pagination on (created_at, id), newest first.

        Args:
            query: The base SQLAlchemy query to paginate
            cursor: Optional cursor from previous page (base64-encoded)
            limit: Maximum number of items to return

        Returns:
            Tuple of (items, next_cursor, has_more)

        Raises:
            ValueError: If the cursor cannot be decoded
        """
        created_at_col = self.model.created_at  # type: ignore[attr-defined]
        id_col = self.model.id  # type: ignore[attr-defined]

        if cursor:
            cursor_created_at, cursor_id = decode_cursor(cursor)
            query = query.where(
                or_(
                    created_at_col < cursor_created_at,
                    and_(created_at_col == cursor_created_at, id_col < cursor_id),
                )
            )

        query = query.order_by(created_at_col.desc(), id_col.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            last_item = items[-1]
            next_cursor = encode_cursor(last_item.created_at, last_item.id)  # type: ignore[attr-defined]

        return items, next_cursor, has_more
