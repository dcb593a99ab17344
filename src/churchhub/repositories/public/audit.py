"""Repository for AuditLog entity."""

from uuid import UUID

from sqlmodel import select

from src.churchhub.models.public import AuditLog
from src.churchhub.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for AuditLog entity in public schema. Append-only."""

    model = AuditLog

    async def list_by_tenant(self, tenant_id: UUID, limit: int = 100) -> list[AuditLog]:
        result = await self.session.execute(
            select(AuditLog)
            .where(AuditLog.tenant_id == tenant_id)
            .order_by(AuditLog.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())
