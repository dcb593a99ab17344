"""Tenant resolver - maps a routing key (subdomain) to an active church."""

from src.churchhub.core.cache import cache_tenant, get_cached_tenant
from src.churchhub.core.exceptions import TenantNotFoundError, ValidationError
from src.churchhub.core.logging import get_logger
from src.churchhub.core.security.validators import (
    is_reserved_subdomain,
    normalize_subdomain,
    validate_subdomain_format,
)
from src.churchhub.models.public import Tenant
from src.churchhub.repositories.public import TenantRepository

logger = get_logger(__name__)


class TenantResolver:
    def __init__(self, tenant_repo: TenantRepository):
        self.tenant_repo = tenant_repo

    async def resolve_tenant(self, routing_key: str) -> Tenant | None:
        """Resolve a routing key to an active church.

        Returns:
            The church, or None for reserved keys ('www', 'admin'), which
            mean "no tenant context" and never touch the store

        Raises:
            ValidationError: Malformed routing key
            TenantNotFoundError: Unknown or inactive church
        """
        subdomain = normalize_subdomain(routing_key)
        try:
            validate_subdomain_format(subdomain)
        except ValueError as e:
            raise ValidationError(str(e), field="subdomain") from e

        if is_reserved_subdomain(subdomain):
            return None

        cached = await get_cached_tenant(subdomain)
        if cached is not None:
            return cached

        tenant = await self.tenant_repo.get_active_by_subdomain(subdomain)
        if tenant is None:
            logger.debug("Tenant not resolved", subdomain=subdomain)
            raise TenantNotFoundError()

        await cache_tenant(tenant)
        return tenant
