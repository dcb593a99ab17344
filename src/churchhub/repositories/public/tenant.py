"""Repository for the church registry."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.churchhub.models.base import utc_now
from src.churchhub.models.public import Tenant
from src.churchhub.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entity in public schema."""

    model = Tenant

    async def get_by_subdomain(self, subdomain: str) -> Tenant | None:
        result = await self.session.execute(select(Tenant).where(Tenant.subdomain == subdomain))
        return result.scalar_one_or_none()

    async def get_active_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Get an active church by subdomain. Inactive churches are invisible."""
        result = await self.session.execute(
            select(Tenant).where(
                Tenant.subdomain == subdomain,
                Tenant.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def exists_by_subdomain(self, subdomain: str) -> bool:
        """Check if a church with the given subdomain exists (active or not)."""
        tenant = await self.get_by_subdomain(subdomain)
        return tenant is not None

    async def deactivate(self, tenant_id: UUID) -> None:
        await self.session.execute(
            update(Tenant)
            .where(Tenant.id == tenant_id)  # type: ignore[arg-type]
            .values(is_active=False, updated_at=utc_now())
        )

    async def list_all(self, active_only: bool = True) -> list[Tenant]:
        """List all churches, optionally filtering by active status."""
        query = select(Tenant)
        if active_only:
            query = query.where(Tenant.is_active == True)  # noqa: E712
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_all_paginated(
        self, cursor: str | None, limit: int, active_only: bool = True
    ) -> tuple[list[Tenant], str | None, bool]:
        query = select(Tenant)
        if active_only:
            query = query.where(Tenant.is_active == True)  # noqa: E712
        return await self.paginate(query, cursor, limit)
