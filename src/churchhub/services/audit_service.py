"""Audit logging service - records actions for compliance (LGPD) and security."""

import contextlib
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.churchhub.core.logging import get_logger
from src.churchhub.core.request_metadata import RequestMetadata, get_request_metadata
from src.churchhub.models.public import AuditAction, AuditLog
from src.churchhub.repositories.public import AuditLogRepository

logger = get_logger(__name__)


def build_audit_log(
    action: AuditAction | str,
    entity_type: str,
    entity_id: UUID,
    user_id: UUID,
    tenant_id: UUID | None,
    old_values: dict[str, Any] | None = None,
    new_values: dict[str, Any] | None = None,
    metadata: RequestMetadata | None = None,
) -> AuditLog:
    """Build an audit row stamped with request metadata.

    Used directly when the entry must commit atomically with the change
    it records (registration); otherwise go through AuditService.
    """
    metadata = metadata or get_request_metadata()
    return AuditLog(
        user_id=user_id,
        tenant_id=tenant_id,
        action=action.value if isinstance(action, AuditAction) else action,
        entity_type=entity_type,
        entity_id=entity_id,
        old_values=old_values,
        new_values=new_values,
        ip_address=metadata.ip_address,
        user_agent=metadata.user_agent,
    )


class AuditService:
    """Service for recording audit logs.

    Fire-and-forget design: logging failures should not block business operations.
    """

    def __init__(self, audit_repo: AuditLogRepository, session: AsyncSession):
        self.audit_repo = audit_repo
        self.session = session

    async def log_action(
        self,
        action: AuditAction | str,
        entity_type: str,
        entity_id: UUID,
        user_id: UUID,
        tenant_id: UUID | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        """Record an audit log entry and commit it.

        Failures are logged but do not raise exceptions.

        Returns:
            The created AuditLog, or None if logging failed
        """
        try:
            audit_log = build_audit_log(
                action,
                entity_type,
                entity_id,
                user_id,
                tenant_id,
                old_values=old_values,
                new_values=new_values,
            )
            self.audit_repo.add(audit_log)
            await self.session.commit()

            logger.debug(
                "Audit log recorded",
                action=audit_log.action,
                entity_type=entity_type,
                entity_id=str(entity_id),
            )
            return audit_log

        except Exception as e:
            logger.warning(
                "Failed to record audit log",
                action=action.value if isinstance(action, AuditAction) else action,
                entity_type=entity_type,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None
