"""Church administration - listing, namespace repair and deletion."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.churchhub.core.cache import invalidate_tenant
from src.churchhub.core.db.provisioner import SchemaProvisioner
from src.churchhub.core.exceptions import TenantNotFoundError
from src.churchhub.core.logging import get_logger
from src.churchhub.core.security.access import require_permission, require_tenant_access
from src.churchhub.models.enums import UserRole
from src.churchhub.models.public import AuditAction, Tenant, User
from src.churchhub.repositories.public import TenantRepository
from src.churchhub.services.audit_service import AuditService

logger = get_logger(__name__)


class ChurchService:
    def __init__(
        self,
        tenant_repo: TenantRepository,
        session: AsyncSession,
        provisioner: SchemaProvisioner,
        audit_service: AuditService,
    ):
        self.tenant_repo = tenant_repo
        self.session = session
        self.provisioner = provisioner
        self.audit_service = audit_service

    async def _get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError()
        return tenant

    async def list_churches(
        self, actor: User, cursor: str | None, limit: int
    ) -> tuple[list[Tenant], str | None, bool]:
        """List every church, active or not (super admin only)."""
        require_permission(actor.role, UserRole.SUPER_ADMIN)
        return await self.tenant_repo.list_all_paginated(cursor, limit, active_only=False)

    async def repair_namespace(self, tenant_id: UUID, actor: User) -> str:
        """Re-run provisioning for one church. Safe on a healthy namespace.

        Church admins may repair their own church; super admins any.

        Returns:
            The namespace name
        """
        require_permission(actor.role, UserRole.CHURCH_ADMIN)
        require_tenant_access(actor.role, actor.tenant_id, tenant_id)
        tenant = await self._get_tenant(tenant_id)

        schema = await self.provisioner.create_tenant_namespace(tenant.id)
        await self.audit_service.log_action(
            AuditAction.TENANT_PROVISION,
            entity_type="tenant",
            entity_id=tenant.id,
            user_id=actor.id,
            tenant_id=tenant.id,
        )
        return schema

    async def repair_missing_namespaces(self, actor: User) -> list[UUID]:
        """Provision every active church whose namespace is missing.

        A failure for one church is logged and does not stop the others.

        Returns:
            Ids of the churches that were repaired
        """
        require_permission(actor.role, UserRole.SUPER_ADMIN)

        existing = await self.provisioner.list_namespaces()
        tenants = await self.tenant_repo.list_all(active_only=True)
        missing = [t for t in tenants if t.schema_name not in existing]

        repaired: list[UUID] = []
        for tenant in missing:
            try:
                await self.provisioner.create_tenant_namespace(tenant.id)
            except Exception as e:
                logger.error(
                    "Namespace repair failed",
                    tenant_id=str(tenant.id),
                    error=str(e),
                )
                continue
            repaired.append(tenant.id)

        logger.info("Namespace repair finished", missing=len(missing), repaired=len(repaired))
        return repaired

    async def delete_church(self, tenant_id: UUID, actor: User) -> None:
        """Deactivate a church and drop its namespace (super admin only).

        The row is deactivated and committed first so the resolver stops
        routing to the church before its data disappears.
        """
        require_permission(actor.role, UserRole.SUPER_ADMIN)
        tenant = await self._get_tenant(tenant_id)
        subdomain = tenant.subdomain

        try:
            await self.tenant_repo.deactivate(tenant.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await invalidate_tenant(subdomain)
        await self.provisioner.drop_tenant_namespace(tenant.id)

        await self.audit_service.log_action(
            AuditAction.TENANT_DELETE,
            entity_type="tenant",
            entity_id=tenant.id,
            user_id=actor.id,
            tenant_id=tenant.id,
            old_values={"subdomain": subdomain, "is_active": True},
            new_values={"is_active": False},
        )
        logger.info("Church deleted", tenant_id=str(tenant.id), subdomain=subdomain)
