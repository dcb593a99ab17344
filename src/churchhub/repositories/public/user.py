"""Repository for User entity."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.churchhub.models.base import utc_now
from src.churchhub.models.public import User
from src.churchhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity in public schema (Lobby Pattern)."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (callers pass it lowercased)."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        user = await self.get_by_email(email)
        return user is not None

    async def touch_last_login(self, user_id: UUID) -> None:
        now = utc_now()
        await self.session.execute(
            update(User)
            .where(User.id == user_id)  # type: ignore[arg-type]
            .values(last_login=now, updated_at=now)
        )
